"""Configuration manager for loading and saving provisioning settings."""

import logging
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..exceptions import ConfigError
from ..models.service import ServiceDescriptor
from ..utils.constants import (
    CONFIG_FILE,
    DEFAULT_BUILD_COMMAND,
    DEFAULT_SERVICES,
    DEFAULT_SETTINGS_FILE,
    DEFAULT_SYSTEMCTL_COMMAND,
    SYSTEMD_UNIT_DIR,
    UNITS_SOURCE_DIR,
)

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages the provisioning configuration and service descriptors.

    Relative paths in the file are taken relative to the working directory.
    """

    CONFIG_VERSION = "1.0"

    def __init__(self, config_file: Optional[Path] = None):
        """Initialize the config manager.

        Args:
            config_file: YAML file to load, defaults to /etc/dustcfg/config.yaml
        """
        self.config_file = Path(config_file) if config_file else CONFIG_FILE
        self.services: List[ServiceDescriptor] = []
        self.settings: Dict[str, Any] = {}
        self._load_defaults()

    def load_config(self) -> bool:
        """Load configuration from file.

        Returns:
            True if the file was loaded, False if defaults are used because
            the file does not exist

        Raises:
            ConfigError: If the file exists but is not a valid configuration
        """
        if not self.config_file.exists():
            logger.info(f"Config file {self.config_file} not found, using defaults")
            self._load_defaults()
            return False

        try:
            with open(self.config_file, 'r') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parsing error in {self.config_file}: {e}") from e

        if not data:
            logger.warning("Empty config file, using defaults")
            self._load_defaults()
            return True

        self._validate_config(data)

        self.settings = {key: value for key, value in data.items() if key not in ("version", "services")}
        self._ensure_default_settings()

        if "services" in data:
            self.services = self._load_services(data["services"])
        else:
            self.services = self._default_services()

        logger.info(f"Loaded {len(self.services)} services from {self.config_file}")
        return True

    def save_config(self) -> bool:
        """Save configuration to file.

        Returns:
            True if saved successfully, False otherwise
        """
        try:
            # Create backup if config exists
            if self.config_file.exists():
                backup_file = self.config_file.with_suffix('.yaml.bak')
                shutil.copy2(self.config_file, backup_file)
                logger.debug(f"Created backup at {backup_file}")

            data = {"version": self.CONFIG_VERSION}
            data.update(self.settings)
            data["services"] = [service.to_dict() for service in self.services]

            self.config_file.parent.mkdir(parents=True, exist_ok=True)

            # Write to temp file first (atomic write)
            temp_file = self.config_file.with_suffix('.yaml.tmp')
            with open(temp_file, 'w') as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)

            temp_file.replace(self.config_file)

            logger.info(f"Saved {len(self.services)} services to config")
            return True

        except OSError as e:
            logger.error(f"Failed to save config: {e}")
            return False

    def get_setting(self, key: str, default: Any = None) -> Any:
        """Get a setting value.

        Args:
            key: Setting key
            default: Default value if key not found

        Returns:
            Setting value or default
        """
        return self.settings.get(key, default)

    def set_setting(self, key: str, value: Any):
        """Set a setting value for this run (not persisted).

        Args:
            key: Setting key
            value: Setting value
        """
        self.settings[key] = value

    @property
    def settings_file(self) -> Path:
        return Path(self.settings["settings_file"])

    @property
    def unit_dir(self) -> Path:
        return Path(self.settings["unit_dir"])

    @property
    def units_source_dir(self) -> Path:
        return Path(self.settings["units_source_dir"])

    @property
    def command_timeout(self) -> Optional[float]:
        timeout = self.settings.get("command_timeout")
        return float(timeout) if timeout is not None else None

    def _load_services(self, entries: list) -> List[ServiceDescriptor]:
        """Build service descriptors from the 'services' list.

        Raises:
            ConfigError: On a malformed entry or a duplicate name
        """
        services = []
        seen = set()
        for entry in entries:
            if isinstance(entry, str):
                entry = {"name": entry}
            if not isinstance(entry, dict) or "name" not in entry:
                raise ConfigError(f"Invalid service entry: {entry!r}")

            try:
                service = ServiceDescriptor.from_dict(entry, self.units_source_dir)
            except ValueError as e:
                raise ConfigError(f"Invalid service entry {entry!r}: {e}") from e

            if service.name in seen:
                raise ConfigError(f"Duplicate service: {service.name}")
            seen.add(service.name)
            services.append(service)

        if not services:
            raise ConfigError("No services configured")
        return services

    def _validate_config(self, data: dict):
        """Validate configuration data structure.

        Args:
            data: Configuration dictionary

        Raises:
            ConfigError: If the structure is invalid
        """
        if not isinstance(data, dict):
            raise ConfigError("Config must be a dictionary")

        if "version" not in data:
            logger.warning("Config missing version, assuming valid")

        if "services" in data and not isinstance(data["services"], list):
            raise ConfigError("Services must be a list")

        for key in ("build_command", "systemctl_command"):
            value = data.get(key)
            if value is not None and (
                not isinstance(value, list) or not value or not all(isinstance(v, str) for v in value)
            ):
                raise ConfigError(f"{key} must be a non-empty list of strings")

        for key in ("user_scope", "fail_on_command_error"):
            if key in data and not isinstance(data[key], bool):
                raise ConfigError(f"{key} must be true or false")

        timeout = data.get("command_timeout")
        if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0):
            raise ConfigError("command_timeout must be a positive number")

    def _default_services(self) -> List[ServiceDescriptor]:
        return [
            ServiceDescriptor.from_dict({"name": name}, self.units_source_dir)
            for name in DEFAULT_SERVICES
        ]

    def _load_defaults(self):
        """Load default configuration."""
        self.settings = {}
        self._ensure_default_settings()
        self.services = self._default_services()
        logger.debug("Loaded default configuration")

    def _ensure_default_settings(self):
        """Ensure all default settings exist."""
        defaults = {
            "settings_file": str(DEFAULT_SETTINGS_FILE),
            "unit_dir": str(SYSTEMD_UNIT_DIR),
            "units_source_dir": str(UNITS_SOURCE_DIR),
            "build_command": list(DEFAULT_BUILD_COMMAND),
            "systemctl_command": list(DEFAULT_SYSTEMCTL_COMMAND),
            "user_scope": False,
            "command_timeout": None,
            "fail_on_command_error": False,
        }

        for key, value in defaults.items():
            if key not in self.settings:
                self.settings[key] = value
