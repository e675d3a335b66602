"""Data models for service provisioning."""

from .service import CommandResult, ProvisionReport, ProvisionState, ServiceDescriptor

__all__ = ["CommandResult", "ProvisionReport", "ProvisionState", "ServiceDescriptor"]
