#!/usr/bin/env python3
"""Entry point for the dustcfg command."""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .core.config_manager import ConfigManager
from .core.orchestrator import ProvisionOrchestrator
from .exceptions import DustcfgError
from .utils.constants import APP_NAME, CONFIG_FILE
from .utils.helpers import decode_hex_to_utf8, generate_v4_uuid, write_api_endpoints_json

logger = logging.getLogger(__name__)


def setup_logging(log_file: Optional[Path] = None, verbose: bool = False):
    """Set up application logging.

    Args:
        log_file: Optional file to log to in addition to stderr
        verbose: Log at DEBUG instead of INFO
    """
    handlers = [logging.StreamHandler()]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=APP_NAME, description=f"{APP_NAME} - Provision the dust systemd services")
    parser.add_argument('--version', action='version', version=f"{APP_NAME} {__version__}")
    parser.add_argument('--config', type=Path, default=Path(os.environ.get("DUSTCFG_CONFIG", CONFIG_FILE)),
                        help='Configuration file (default: %(default)s)')
    parser.add_argument('--log-file', type=Path, help='Also write logs to this file')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', required=True)

    provision = subparsers.add_parser('provision', help='Build, install, configure and start every service')
    provision.add_argument('--settings', type=Path, help='Settings file of export KEY=VALUE lines')
    provision.add_argument('--strict', action='store_true',
                           help='Stop at the first build or systemctl command that fails')
    provision.add_argument('--timeout', type=float, help='Seconds allowed per external command')

    endpoints = subparsers.add_parser('endpoints', help='Write the API endpoints manifest')
    endpoints.add_argument('--output-dir', help='Directory prefix (default: $DUST_CHAT_PATH)')

    subparsers.add_parser('uuid', help='Print a random v4 UUID')

    decode = subparsers.add_parser('decode-hex', help='Decode a hex string to text')
    decode.add_argument('text')

    return parser


def run_provision(args) -> int:
    """Load the configuration and run the orchestrator.

    Returns:
        0 if every step ran, 1 otherwise
    """
    config_manager = ConfigManager(args.config)
    config_manager.load_config()

    if args.settings:
        config_manager.set_setting("settings_file", str(args.settings))
    if args.strict:
        config_manager.set_setting("fail_on_command_error", True)
    if args.timeout is not None:
        config_manager.set_setting("command_timeout", args.timeout)

    orchestrator = ProvisionOrchestrator.from_config(config_manager)
    report = orchestrator.provision()

    for step, service, result in report.failed_commands:
        target = f" {service}" if service else ""
        logger.warning(f"{step}{target}: {result.describe()}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_file, args.verbose)

    try:
        if args.command == 'provision':
            return run_provision(args)
        if args.command == 'endpoints':
            path = write_api_endpoints_json(args.output_dir)
            print(f"Successfully wrote API endpoints to {path}")
        elif args.command == 'uuid':
            print(generate_v4_uuid())
        elif args.command == 'decode-hex':
            print(decode_hex_to_utf8(args.text))
        return 0

    except (DustcfgError, OSError, ValueError) as e:
        logger.error(f"{APP_NAME} {args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
