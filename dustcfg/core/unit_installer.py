"""Installing unit files into the service manager's unit directory."""

import logging
import shutil
from pathlib import Path

from ..models.service import ServiceDescriptor

logger = logging.getLogger(__name__)


class UnitFileInstaller:
    """Copies each service's unit file into the unit directory."""

    def __init__(self, unit_dir: Path):
        self.unit_dir = Path(unit_dir)

    def install(self, service: ServiceDescriptor) -> Path:
        """Copy the service's unit file, replacing any installed version.

        The new content takes effect on the next daemon reload.

        Args:
            service: Service whose unit file to install

        Returns:
            Path of the installed unit file

        Raises:
            FileNotFoundError: If the source unit file does not exist
            PermissionError: If the unit directory is not writable
        """
        target = self.unit_dir / service.unit_filename
        shutil.copyfile(service.unit_file_path, target)
        logger.info(f"Installed {service.unit_file_path} to {target}")
        return target
