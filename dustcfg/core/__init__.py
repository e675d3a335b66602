"""Core functionality for provisioning systemd services."""

from .build_invoker import BuildInvoker
from .config_manager import ConfigManager
from .orchestrator import ProvisionOrchestrator
from .override_manager import OverrideDirectoryManager
from .service_manager import LifecycleController
from .unit_installer import UnitFileInstaller

__all__ = [
    "BuildInvoker",
    "ConfigManager",
    "LifecycleController",
    "OverrideDirectoryManager",
    "ProvisionOrchestrator",
    "UnitFileInstaller",
]
