"""
Loading and saving the ``[jar]`` configuration table.
"""

__all__ = [
    "find_config_file",
    "load_jar_config",
    "save_jar_config",
    "jar_config_from_dict",
    "jar_config_to_dict",
]

from .file_io import find_config_file, load_jar_config, save_jar_config
from .jar_config import jar_config_from_dict, jar_config_to_dict
