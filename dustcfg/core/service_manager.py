"""Lifecycle control of systemd services via systemctl."""

import logging
from typing import List, Optional

from ..models.service import CommandResult
from ..utils.constants import DEFAULT_SYSTEMCTL_COMMAND
from .command_runner import run_command

logger = logging.getLogger(__name__)


class LifecycleController:
    """Reloads systemd and enables/starts services via systemctl commands.

    Exit statuses are returned to the caller and never raised.
    """

    def __init__(
        self,
        systemctl_command: Optional[List[str]] = None,
        user_scope: bool = False,
        timeout: Optional[float] = None
    ):
        """Initialize the lifecycle controller.

        Args:
            systemctl_command: systemctl invocation, optionally with a
                privilege prefix (e.g. ['sudo', 'systemctl'])
            user_scope: Manage user services ('--user') instead of system ones
            timeout: Seconds allowed per systemctl call, None for no limit
        """
        self.systemctl_command = list(systemctl_command or DEFAULT_SYSTEMCTL_COMMAND)
        self.user_scope = user_scope
        self.timeout = timeout

    def reload(self) -> CommandResult:
        """Reload the systemd manager configuration.

        Returns:
            CommandResult of 'systemctl daemon-reload'
        """
        return self._execute_systemctl_action("daemon-reload")

    def enable(self, service_name: str) -> CommandResult:
        """Enable a systemd service to start on boot.

        Args:
            service_name: Name of the systemd service

        Returns:
            CommandResult of 'systemctl enable'
        """
        return self._execute_systemctl_action("enable", service_name)

    def start(self, service_name: str) -> CommandResult:
        """Start a systemd service now.

        Args:
            service_name: Name of the systemd service

        Returns:
            CommandResult of 'systemctl start'
        """
        return self._execute_systemctl_action("start", service_name)

    def _execute_systemctl_action(self, action: str, service_name: Optional[str] = None) -> CommandResult:
        """Execute a systemctl action (daemon-reload, enable, start).

        Args:
            action: Systemctl action
            service_name: Target unit, None for manager-wide actions

        Returns:
            CommandResult of the call
        """
        cmd = list(self.systemctl_command)

        if self.user_scope:
            cmd.append("--user")

        cmd.append(action)
        if service_name:
            cmd.append(service_name)

        target = service_name or "systemd"
        result = run_command(cmd, timeout=self.timeout)

        if result.ok:
            logger.info(f"Successfully ran {action} on {target}")
        else:
            logger.error(f"Failed to {action} {target}: {result.describe()}")
        return result
