"""
Application constants and defaults.
"""

# Application info
APP_NAME = "Nginx Commander"
APP_VERSION = "0.1.0"
APP_URL = "https://github.com/nginx-commander/nginx-commander"

# Default values
DEFAULT_ENCODING = "utf-8"
DEFAULT_READ_ENCODING = "utf-8-sig"  # accepts and drops a leading BOM
DEFAULT_INDENT = "\t"
LINE_SEPARATOR = "\n"
