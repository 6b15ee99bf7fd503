"""
Constants for the sitewright package.
"""
from pathlib import Path
import os

# Application information
APP_NAME = "sitewright"
APP_VERSION = "0.1.0"
APP_DESCRIPTION = "Materializes model-generated web apps into runnable projects on disk"

# Paths
CONFIG_DIR = Path(os.path.expanduser("~/.config/sitewright"))
CONFIG_FILE = CONFIG_DIR / "config.toml"
LOG_DIR = CONFIG_DIR / "logs"

DEFAULT_OUTPUT_ROOT = Path("output")
DEFAULT_DOWNLOAD_DIR = Path("downloads")

# Environment variables
ENV_OUTPUT_ROOT = "SITEWRIGHT_OUTPUT_ROOT"
ENV_DOWNLOAD_DIR = "SITEWRIGHT_DOWNLOAD_DIR"
ENV_INSTALL_TIMEOUT = "SITEWRIGHT_INSTALL_TIMEOUT"
ENV_BUILD_TIMEOUT = "SITEWRIGHT_BUILD_TIMEOUT"
ENV_DEBUG = "SITEWRIGHT_DEBUG"

# Fixed file names inside an output directory
HTML_FILE = "index.html"
CSS_FILE = "style.css"
JS_FILE = "script.js"
README_FILE = "README.md"

# Framework project layout
MANIFEST_FILE = "package.json"
DEPENDENCY_DIR = "node_modules"
ARTIFACT_DIR = "dist"

# Build commands and timeouts (seconds)
INSTALL_COMMAND = ["npm", "install"]
BUILD_COMMAND = ["npm", "run", "build"]
INSTALL_TIMEOUT = 60
BUILD_TIMEOUT = 120

# Archive packaging
ARCHIVE_EXCLUDES = {
    "node_modules",
    ".git",
    ".DS_Store",
    ".idea",
    ".vscode",
}
ARCHIVE_MAX_AGE_HOURS = 24

# Logging
LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {extra[logger_name]} | {message}"
LOG_ROTATION = "100 MB"
LOG_RETENTION = "10 days"
