"""
FX4CTL Main Entry Point

Runs the FX4 module outside a show-control host. The CLI plays the host's
part: it loads the configuration, supplies the HTTP transport and the log
sink, and triggers actions.

Usage:
    # List the action schema
    fx4ctl actions

    # List the config-field schema
    fx4ctl config-fields

    # Switch to input 2 (option ids are 0-based)
    fx4ctl --host 192.168.1.50 run preferred_input -o input=1

    # Reboot using the appliance address from config/fx4.yaml
    fx4ctl --config config/fx4.yaml run reboot

Exit codes:
    0   command succeeded (or schema printed)
    1   command failed or timed out
    2   usage or configuration error
"""

import argparse
import json
import logging
import sys
from concurrent.futures import TimeoutError as FutureTimeoutError
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from fx4ctl import __version__
from fx4ctl.actions.definitions import ActionInvocation, action_definitions
from fx4ctl.communication.transport import HTTPTransport
from fx4ctl.config.module_config import ModuleConfig, config_fields
from fx4ctl.exceptions import ConfigError, TransportFailure
from fx4ctl.logging.logger import configure_logging, get_logger
from fx4ctl.logging.sink import HostLogSink
from fx4ctl.module.fx4_module import FX4Module
from fx4ctl.monitoring.metrics import start_metrics_server
from fx4ctl.utils.config_loader import ConfigLoader


DEFAULT_CONFIG = Path("config") / "fx4.yaml"
DEFAULT_LOG_CONFIG = Path("config") / "logging.yaml"

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog='fx4ctl',
        description='Datapath FX4 control module',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    parser.add_argument(
        '--config',
        help=f'Module config YAML (default: {DEFAULT_CONFIG} if present)'
    )
    parser.add_argument(
        '--host',
        help='Appliance IPv4 address (overrides config)'
    )
    parser.add_argument(
        '--log-config',
        default=str(DEFAULT_LOG_CONFIG),
        help=f'Logging config YAML (default: {DEFAULT_LOG_CONFIG})'
    )
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Fallback log level (default: INFO)'
    )
    parser.add_argument(
        '--metrics-port',
        type=int,
        help='Expose Prometheus metrics on this port'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('actions', help='Print the action schema as JSON')
    subparsers.add_parser('config-fields', help='Print the config-field schema as JSON')

    run = subparsers.add_parser('run', help='Run an action against the appliance')
    run.add_argument('action', help='Action id, e.g. preferred_input or reboot')
    run.add_argument(
        '-o', '--option',
        action='append',
        default=[],
        metavar='KEY=VALUE',
        help='Action option (repeatable)'
    )
    run.add_argument(
        '--timeout',
        type=float,
        default=None,
        help='Request timeout in seconds (default: config value or 10)'
    )

    return parser.parse_args(argv)


def parse_options(pairs: List[str]) -> Dict[str, str]:
    """
    Parse KEY=VALUE option pairs.

    Raises:
        ValueError: If a pair has no '='
    """
    options = {}
    for pair in pairs:
        key, sep, value = pair.partition('=')
        if not sep or not key:
            raise ValueError(f"Option must look like KEY=VALUE, got '{pair}'")
        options[key.strip()] = value.strip()
    return options


def load_config(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Assemble raw config from file, environment, and command line.

    An explicit --config must exist; the default path is optional.
    FX4_* environment variables apply with or without a file, and
    --host wins over both.
    """
    config_path = args.config
    if config_path is None and DEFAULT_CONFIG.exists():
        config_path = str(DEFAULT_CONFIG)

    config = ConfigLoader.load_with_env_override(config_path, env_prefix="FX4_")

    if args.host:
        config['host'] = args.host

    return config


def run_action(
    module: FX4Module,
    action: str,
    options: Dict[str, str],
    timeout: float
) -> int:
    """
    Dispatch one action and wait for its outcome.

    Failures are already logged by the module; the return value only
    carries the exit code.
    """
    if action not in module.actions:
        print(f"Unknown action '{action}'. Available: {', '.join(module.actions)}", file=sys.stderr)
        return EXIT_USAGE

    future = module.dispatch(ActionInvocation(action=action, options=options))
    if future is None:
        return EXIT_USAGE

    try:
        body = future.result(timeout=timeout)
    except TransportFailure:
        return EXIT_FAILURE
    except FutureTimeoutError:
        print(f"No response after {timeout}s", file=sys.stderr)
        return EXIT_FAILURE

    if body:
        print(json.dumps(body, indent=2))
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for fx4ctl.
    """
    args = parse_args(argv)

    configure_logging(args.log_config, default_level=getattr(logging, args.log_level))

    if args.command == 'actions':
        print(json.dumps(action_definitions(), indent=2))
        return EXIT_OK

    if args.command == 'config-fields':
        print(json.dumps(config_fields(), indent=2))
        return EXIT_OK

    try:
        raw_config = load_config(args)
        config = ModuleConfig.from_dict(raw_config).validate()
        options = parse_options(args.option)
        timeout = float(args.timeout if args.timeout is not None else raw_config.get('timeout', 10))
    except (ConfigError, FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_USAGE

    logger = get_logger("fx4ctl.host", instance_id=str(raw_config.get('instance_id', 'fx4')))

    if args.metrics_port:
        start_metrics_server(args.metrics_port)

    transport = HTTPTransport(timeout=timeout)
    module = FX4Module(config, transport, HostLogSink(logger))
    module.init()

    try:
        # Leave the transport room to report its own timeout first
        return run_action(module, args.action, options, timeout + 1)
    finally:
        module.shutdown()


if __name__ == "__main__":
    sys.exit(main())
