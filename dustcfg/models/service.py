"""Data models for systemd service provisioning."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple


class ProvisionState(Enum):
    """States of a provisioning run."""

    IDLE = "idle"
    PER_SERVICE_SETUP = "per_service_setup"
    DAEMON_RELOAD = "daemon_reload"
    PER_SERVICE_ACTIVATE = "per_service_activate"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ServiceDescriptor:
    """Description of one provisioned service.

    Attributes:
        name: Systemd unit name without the '.service' suffix
        source_path: Source directory handed to the build tool
        unit_file_path: Pre-authored unit file copied into the unit directory
    """

    name: str
    source_path: Path
    unit_file_path: Path

    def __post_init__(self):
        """Validate and normalize the descriptor after initialization."""
        if not self.name:
            raise ValueError("Service name cannot be empty")

        if "/" in self.name:
            raise ValueError(f"Invalid service name: {self.name}")

        self.source_path = Path(self.source_path)
        self.unit_file_path = Path(self.unit_file_path)

    @property
    def unit_filename(self) -> str:
        return f"{self.name}.service"

    def override_dir(self, unit_dir: Path) -> Path:
        """Get the override directory for this service.

        Args:
            unit_dir: Service manager unit directory (e.g. /etc/systemd/system)

        Returns:
            Path of the '<name>.service.d' directory
        """
        return Path(unit_dir) / f"{self.unit_filename}.d"

    def override_conf_path(self, unit_dir: Path) -> Path:
        """Get the override conf file for this service.

        Args:
            unit_dir: Service manager unit directory

        Returns:
            Path of '<name>.service.d/<name>.conf'
        """
        return self.override_dir(unit_dir) / f"{self.name}.conf"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization.

        Returns:
            Dictionary representation of the descriptor
        """
        return {
            "name": self.name,
            "source_path": str(self.source_path),
            "unit_file_path": str(self.unit_file_path),
        }

    @classmethod
    def from_dict(cls, data: dict, units_source_dir: Path = Path(".")) -> 'ServiceDescriptor':
        """Create ServiceDescriptor from dictionary.

        Args:
            data: Dictionary with the service description
            units_source_dir: Directory holding '<name>.service' when
                unit_file_path is omitted

        Returns:
            ServiceDescriptor instance
        """
        name = data["name"]
        return cls(
            name=name,
            source_path=Path(data.get("source_path", name)),
            unit_file_path=Path(data.get("unit_file_path", Path(units_source_dir) / f"{name}.service")),
        )


@dataclass
class CommandResult:
    """Observed outcome of one external command.

    Attributes:
        command: Argument vector that was executed
        returncode: Exit status, None when the command timed out
        stdout: Captured standard output
        stderr: Captured standard error
        timed_out: True if the command was killed after the timeout
    """

    command: List[str]
    returncode: Optional[int]
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        return not self.timed_out and self.returncode == 0

    def describe(self) -> str:
        """Get a short human-readable summary of the outcome."""
        cmd = " ".join(self.command)
        if self.timed_out:
            return f"'{cmd}' timed out"
        if self.ok:
            return f"'{cmd}' succeeded"
        detail = self.stderr.strip().splitlines()[-1] if self.stderr.strip() else "no output"
        return f"'{cmd}' exited with status {self.returncode}: {detail}"


@dataclass
class ProvisionReport:
    """Result of a provisioning run.

    Attributes:
        state: Terminal state reached (DONE or FAILED)
        commands: (step, service name or None, result) in execution order
        error: The fatal error that stopped the run, if any
    """

    state: ProvisionState = ProvisionState.IDLE
    commands: List[Tuple[str, Optional[str], CommandResult]] = field(default_factory=list)
    error: Optional[BaseException] = None

    def record(self, step: str, service: Optional[str], result: CommandResult):
        self.commands.append((step, service, result))

    @property
    def failed_commands(self) -> List[Tuple[str, Optional[str], CommandResult]]:
        return [entry for entry in self.commands if not entry[2].ok]

    @property
    def succeeded(self) -> bool:
        return self.state is ProvisionState.DONE
