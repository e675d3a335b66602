"""dustcfg - provision and activate the dust systemd services."""

__version__ = "1.0.0"
