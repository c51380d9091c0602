from platformdirs import user_config_path, user_data_path

PACKAGE_NAME = "cookiekit"  # Python package name

# -----------------------------------------------------------------------------
# User-writable directories & files
# -----------------------------------------------------------------------------

# Base config directory (e.g. ~/.config/cookiekit/)
USER_CONFIG_DIR = user_config_path(PACKAGE_NAME, appauthor=False)

# Base data directory (e.g. ~/.local/share/cookiekit/)
USER_DATA_DIR = user_data_path(PACKAGE_NAME, appauthor=False)

# Per-user jar configuration
USER_CONFIG_PATH = USER_CONFIG_DIR / "cookiekit.json"

# Default cookie stores
JSON_COOKIES_PATH = USER_DATA_DIR / "cookies.json"
SQLITE_COOKIES_PATH = USER_DATA_DIR / "cookies.sqlite3"

# Default config filenames looked up in the working directory
LOCAL_CONFIG_FILENAMES = ["cookiekit.toml", "cookiekit.json"]
