"""Per-service systemd drop-in directories carrying environment settings."""

import logging
import shutil
from pathlib import Path

from ..models.service import ServiceDescriptor
from ..utils.constants import OVERRIDE_SECTION_HEADER
from .settings import transcode_settings

logger = logging.getLogger(__name__)


class OverrideDirectoryManager:
    """Resets '<unit_dir>/<name>.service.d' and writes '<name>.conf' into it."""

    def __init__(self, unit_dir: Path):
        """Initialize the override manager.

        Args:
            unit_dir: Service manager unit directory
        """
        self.unit_dir = Path(unit_dir)

    def write_override(self, service: ServiceDescriptor, settings_path: Path) -> Path:
        """Recreate the override directory of a service from a settings file.

        Args:
            service: Service to configure
            settings_path: Settings file of 'export KEY=VALUE' lines

        Returns:
            Path of the written conf file

        Raises:
            FileNotFoundError: If the settings file does not exist
            OSError: If the directory or conf file cannot be written
        """
        settings_path = Path(settings_path)
        if not settings_path.is_file():
            raise FileNotFoundError(f"Settings file not found: {settings_path}")

        override_dir = service.override_dir(self.unit_dir)
        self.remove_override(service)
        override_dir.mkdir(parents=True)

        conf_path = service.override_conf_path(self.unit_dir)
        count = 0
        with open(conf_path, "w", encoding="utf-8") as f:
            f.write(OVERRIDE_SECTION_HEADER + "\n")
            for directive in transcode_settings(settings_path):
                f.write(directive + "\n")
                count += 1
            f.flush()

        logger.info(f"Wrote {count} directives to {conf_path}")
        return conf_path

    def remove_override(self, service: ServiceDescriptor):
        """Remove the override directory of a service, if present."""
        override_dir = service.override_dir(self.unit_dir)
        shutil.rmtree(override_dir, ignore_errors=True)
        logger.debug(f"Removed override directory {override_dir}")
