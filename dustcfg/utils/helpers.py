"""Small stateless helpers shared by the dust services."""

import json
import logging
import os
import re
import uuid
from pathlib import Path
from typing import Dict, Optional

from ..exceptions import MissingEnvironmentVariable
from .constants import ENDPOINTS_FILENAME, ENDPOINTS_PATH_ENV

logger = logging.getLogger(__name__)

API_ENDPOINTS: Dict[str, str] = {
    "health_check": "/api/v1/health_check",
    "create_user": "/api/v1/create_user",
}

_HEX_PAIRS = re.compile(r"(?:[0-9a-fA-F]{2})*")


def get_env_var(name: str) -> str:
    """Get a required environment variable.

    Args:
        name: Variable name

    Returns:
        The variable's value

    Raises:
        MissingEnvironmentVariable: If the variable is not set
    """
    value = os.environ.get(name)
    if value is None:
        raise MissingEnvironmentVariable(name)
    return value


def write_api_endpoints_json(output_dir: Optional[str] = None) -> Path:
    """Write the API route manifest consumed by the chat client.

    The file name is appended to the directory prefix as-is, so the prefix
    (or $DUST_CHAT_PATH) is expected to end with a separator.

    Args:
        output_dir: Directory prefix; defaults to $DUST_CHAT_PATH

    Returns:
        Path of the written file
    """
    prefix = output_dir if output_dir is not None else get_env_var(ENDPOINTS_PATH_ENV)
    path = Path(f"{prefix}{ENDPOINTS_FILENAME}")

    with open(path, "w", encoding="utf-8") as f:
        f.write(json.dumps(API_ENDPOINTS, separators=(",", ":")))

    logger.info(f"Wrote API endpoints to {path}")
    return path


def generate_v4_uuid() -> str:
    """Generate a random (version 4) UUID string, e.g. '1b4e28ba-2fa1-41d2-883f-0016d3cca427'."""
    return str(uuid.uuid4())


def decode_hex_to_utf8(text: str) -> str:
    """Decode a hex string into text.

    Bytes that are not valid UTF-8 are replaced with U+FFFD.

    Raises:
        ValueError: If the input is not an even-length run of hex digits
    """
    if not _HEX_PAIRS.fullmatch(text):
        raise ValueError(f'Could not decode: "{text}", invalid input')
    return bytes.fromhex(text).decode("utf-8", errors="replace")
