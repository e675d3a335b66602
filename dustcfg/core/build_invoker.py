"""Building and installing service executables."""

import logging
from pathlib import Path
from typing import List, Optional

from ..models.service import CommandResult, ServiceDescriptor
from ..utils.constants import DEFAULT_BUILD_COMMAND
from .command_runner import run_command

logger = logging.getLogger(__name__)


class BuildInvoker:
    """Runs the build-and-install step for a service's source directory."""

    def __init__(self, build_command: Optional[List[str]] = None, timeout: Optional[float] = None):
        """Initialize the build invoker.

        Args:
            build_command: Command prefix, the source path is appended to it
            timeout: Seconds allowed per build, None for no limit
        """
        self.build_command = list(build_command or DEFAULT_BUILD_COMMAND)
        self.timeout = timeout

    def build(self, service: ServiceDescriptor) -> CommandResult:
        """Build and install a service.

        The executable lands wherever the build tool installs by default.
        A failed build is reported in the result, not raised.

        Args:
            service: Service to build

        Returns:
            CommandResult of the build

        Raises:
            FileNotFoundError: If the source directory does not exist
        """
        if not service.source_path.is_dir():
            raise FileNotFoundError(f"Source directory not found for {service.name}: {service.source_path}")

        logger.info(f"Building {service.name} from {service.source_path}")
        result = run_command(self.build_command + [str(service.source_path)], timeout=self.timeout)

        if result.ok:
            logger.info(f"Built {service.name}")
        else:
            logger.error(f"Build of {service.name} failed: {result.describe()}")
        return result
