"""Application constants and default paths."""

import os
from pathlib import Path

# Application metadata
APP_NAME = "dustcfg"

# Paths
CONFIG_DIR = Path(os.environ.get("DUSTCFG_CONFIG_DIR", "/etc/dustcfg"))
CONFIG_FILE = CONFIG_DIR / "config.yaml"
DEFAULT_SETTINGS_FILE = CONFIG_DIR / "dust.env"
SYSTEMD_UNIT_DIR = Path("/etc/systemd/system")
UNITS_SOURCE_DIR = Path("systemd")

# Service manager override files
OVERRIDE_SECTION_HEADER = "[Service]"
EXPORT_MARKER = "export "
ENVIRONMENT_DIRECTIVE = "Environment="

# External commands (the service source path is appended to the build command)
DEFAULT_BUILD_COMMAND = ["cargo", "install", "--path"]
DEFAULT_SYSTEMCTL_COMMAND = ["systemctl"]

# Reference services, in activation order
DEFAULT_SERVICES = ["dustserver", "dustchat"]

# API endpoint manifest
ENDPOINTS_FILENAME = "endpoints_v1.json"
ENDPOINTS_PATH_ENV = "DUST_CHAT_PATH"
