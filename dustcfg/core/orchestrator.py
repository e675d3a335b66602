"""Sequencing of the build, install, configure and activate steps.

A run walks these states::

    IDLE -> PER_SERVICE_SETUP -> DAEMON_RELOAD -> PER_SERVICE_ACTIVATE -> DONE

Any fatal error moves the run straight to FAILED and nothing after it runs.
Setup runs build, unit install and override for one service before moving to
the next; daemon-reload runs once, after every service is set up; enable and
start then run per service in the same order.

There is no rollback. Every step is idempotent, so re-running after a failure
completes the remaining work.
"""

import logging
from pathlib import Path
from typing import List, Optional

from ..exceptions import CommandFailedError
from ..models.service import CommandResult, ProvisionReport, ProvisionState, ServiceDescriptor
from .build_invoker import BuildInvoker
from .override_manager import OverrideDirectoryManager
from .service_manager import LifecycleController
from .unit_installer import UnitFileInstaller

logger = logging.getLogger(__name__)


class ProvisionOrchestrator:
    """Provisions and activates an ordered list of services on this host."""

    def __init__(
        self,
        services: List[ServiceDescriptor],
        settings_path: Path,
        builder: BuildInvoker,
        unit_installer: UnitFileInstaller,
        override_manager: OverrideDirectoryManager,
        lifecycle: LifecycleController,
        fail_on_command_error: bool = False
    ):
        """Initialize the orchestrator.

        Args:
            services: Services in provisioning and activation order
            settings_path: Settings file of 'export KEY=VALUE' lines
            builder: Build step
            unit_installer: Unit file step
            override_manager: Override directory step
            lifecycle: systemctl reload/enable/start
            fail_on_command_error: Abort on the first external command that
                exits non-zero, instead of logging it and carrying on
        """
        self.services = list(services)
        self.settings_path = Path(settings_path)
        self.builder = builder
        self.unit_installer = unit_installer
        self.override_manager = override_manager
        self.lifecycle = lifecycle
        self.fail_on_command_error = fail_on_command_error
        self.state = ProvisionState.IDLE

    @classmethod
    def from_config(cls, config_manager) -> 'ProvisionOrchestrator':
        """Create an orchestrator from a loaded ConfigManager."""
        timeout = config_manager.command_timeout
        return cls(
            services=config_manager.services,
            settings_path=config_manager.settings_file,
            builder=BuildInvoker(config_manager.get_setting("build_command"), timeout=timeout),
            unit_installer=UnitFileInstaller(config_manager.unit_dir),
            override_manager=OverrideDirectoryManager(config_manager.unit_dir),
            lifecycle=LifecycleController(
                config_manager.get_setting("systemctl_command"),
                user_scope=config_manager.get_setting("user_scope", False),
                timeout=timeout
            ),
            fail_on_command_error=config_manager.get_setting("fail_on_command_error", False)
        )

    def run(self) -> ProvisionReport:
        """Run the whole provisioning sequence.

        Returns:
            ProvisionReport ending in DONE or FAILED; on FAILED its error
            holds the exception that stopped the run
        """
        report = ProvisionReport()
        self.state = ProvisionState.IDLE

        try:
            self._check_inputs()

            self._transition(ProvisionState.PER_SERVICE_SETUP, report)
            for service in self.services:
                self._setup_service(service, report)

            self._transition(ProvisionState.DAEMON_RELOAD, report)
            self._observe("reload", None, self.lifecycle.reload(), report)

            self._transition(ProvisionState.PER_SERVICE_ACTIVATE, report)
            for service in self.services:
                self._observe("enable", service.name, self.lifecycle.enable(service.name), report)
                self._observe("start", service.name, self.lifecycle.start(service.name), report)

        except (OSError, UnicodeDecodeError, CommandFailedError) as e:
            logger.error(f"Provisioning failed during {self.state.value}: {e}")
            report.error = e
            self._transition(ProvisionState.FAILED, report)
            return report

        self._transition(ProvisionState.DONE, report)

        failed = report.failed_commands
        if failed:
            logger.warning(f"Provisioning finished with {len(failed)} failed command(s)")
        else:
            logger.info(f"Provisioned {len(self.services)} services")
        return report

    def provision(self) -> ProvisionReport:
        """Run the sequence and raise the fatal error, if any.

        Raises:
            OSError: On a fatal I/O error
            UnicodeDecodeError: If the settings file is not valid UTF-8
            CommandFailedError: On a failed command with fail_on_command_error set
        """
        report = self.run()
        if report.error is not None:
            raise report.error
        return report

    def _check_inputs(self):
        """Fail before touching any service if the settings file is unusable."""
        if not self.settings_path.is_file():
            raise FileNotFoundError(f"Settings file not found: {self.settings_path}")

        with open(self.settings_path, "rb"):
            pass

    def _setup_service(self, service: ServiceDescriptor, report: ProvisionReport):
        logger.info(f"Setting up {service.name}")
        self._observe("build", service.name, self.builder.build(service), report)
        self.unit_installer.install(service)
        self.override_manager.write_override(service, self.settings_path)

    def _observe(self, step: str, service: Optional[str], result: CommandResult, report: ProvisionReport):
        report.record(step, service, result)
        if not result.ok and self.fail_on_command_error:
            raise CommandFailedError(step, service, result)

    def _transition(self, state: ProvisionState, report: ProvisionReport):
        logger.info(f"State {self.state.value} -> {state.value}")
        self.state = state
        report.state = state
