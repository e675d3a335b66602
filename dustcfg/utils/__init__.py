"""Utility functions and constants."""

from .constants import *
from .helpers import API_ENDPOINTS, decode_hex_to_utf8, generate_v4_uuid, get_env_var, write_api_endpoints_json

__all__ = [
    "APP_NAME", "CONFIG_FILE", "SYSTEMD_UNIT_DIR", "DEFAULT_SERVICES",
    "API_ENDPOINTS", "decode_hex_to_utf8", "generate_v4_uuid", "get_env_var", "write_api_endpoints_json",
]
