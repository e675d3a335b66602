"""Exceptions raised by dustcfg."""


class DustcfgError(Exception):
    """Base class for dustcfg errors."""


class ConfigError(DustcfgError):
    """The configuration file or environment is invalid."""


class MissingEnvironmentVariable(ConfigError):
    """A required environment variable is not set."""

    def __init__(self, name: str):
        super().__init__(f"${name} is not set")
        self.name = name


class CommandFailedError(DustcfgError):
    """An external command failed while the strict exit-status policy is on."""

    def __init__(self, step: str, service, result):
        target = f" for {service}" if service else ""
        super().__init__(f"{step}{target} failed: {result.describe()}")
        self.step = step
        self.service = service
        self.result = result
