"""
Standalone helpers for scoping cookies to hosts and paths.
"""

__all__ = [
    "default_path",
    "domain_match",
    "is_ip_address",
    "path_match",
    "split_url",
]

from .matching import default_path, domain_match, is_ip_address, path_match, split_url
