"""Reading the shell-style settings file and turning it into systemd directives."""

from pathlib import Path
from typing import Iterator

from ..utils.constants import ENVIRONMENT_DIRECTIVE, EXPORT_MARKER


def read_settings_lines(path: Path) -> Iterator[str]:
    """Yield the lines of a settings file in order.

    '\n' and '\r\n' terminators are stripped; nothing else is touched. Each call opens
    the file again, so the sequence can be restarted.

    Args:
        path: Settings file of 'export KEY=VALUE' lines

    Raises:
        FileNotFoundError: If the file does not exist (on first iteration)
    """
    # newline="" keeps a bare '\r' inside the line it belongs to
    with open(path, "r", encoding="utf-8", newline="") as f:
        for line in f:
            if line.endswith("\r\n"):
                yield line[:-2]
            elif line.endswith("\n"):
                yield line[:-1]
            else:
                yield line


def transcode_line(line: str) -> str:
    """Turn 'export KEY=VALUE' into 'Environment=KEY=VALUE'.

    Only the first 'export ' is replaced. Lines without it are returned as-is.
    """
    return line.replace(EXPORT_MARKER, ENVIRONMENT_DIRECTIVE, 1)


def transcode_settings(path: Path) -> Iterator[str]:
    """Yield the environment directive for every line of a settings file."""
    for line in read_settings_lines(path):
        yield transcode_line(line)
