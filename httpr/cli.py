"""CLI entry point for httpr"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from httpr.config.loader import load_config, format_validation_error, validate_config_file
from httpr.core.context import Context
from httpr.reports.console import print_banner


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser"""
    parser = argparse.ArgumentParser(
        prog="httpr",
        description="httpr - HTTP request logger and transient failure simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  httpr log --listen :8080 --json
  httpr log --simulate-failures --failure-count 2 --failure-code 503 --success-count 1
  httpr log --config ./httpr.yaml
  httpr probe http://localhost:8080/ --count 6
"""
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Log command; flags default to None so only explicit ones override the file
    log_parser = subparsers.add_parser("log", help="Log incoming HTTP requests and serve simulated responses")
    log_parser.add_argument(
        "--config", "-f",
        default=None,
        help="Path to configuration file (optional)"
    )
    log_parser.add_argument(
        "--listen", "-l",
        default=None,
        help="Address to listen on, host:port (default: localhost:8080)"
    )
    log_parser.add_argument(
        "--json", "-j",
        action="store_true",
        default=None,
        help="Log HTTP requests in JSON format"
    )
    log_parser.add_argument(
        "--pretty", "-p",
        action="store_true",
        default=None,
        help="Pretty-print JSON request logs (implies --json)"
    )
    log_parser.add_argument(
        "--output", "-o",
        default=None,
        help="Write request logs to this file instead of stdout"
    )
    log_parser.add_argument(
        "--echo", "-e",
        action="store_true",
        default=None,
        help="Echo the request body back in the response"
    )
    log_parser.add_argument(
        "--code", "-c",
        type=int,
        default=None,
        help="Default HTTP response code (default: 200)"
    )
    log_parser.add_argument(
        "--delay", "-d",
        type=int,
        default=None,
        help="Delay before responding, in milliseconds (default: 0)"
    )
    log_parser.add_argument(
        "--simulate-failures",
        action="store_true",
        default=None,
        help="Enable the transient failure cycle"
    )
    log_parser.add_argument(
        "--failure-count",
        type=int,
        default=None,
        help="Consecutive failure responses per cycle"
    )
    log_parser.add_argument(
        "--success-count",
        type=int,
        default=None,
        help="Consecutive success responses per cycle"
    )
    log_parser.add_argument(
        "--failure-code",
        type=int,
        default=None,
        help="Status code for the failure phase (default: 503)"
    )
    log_parser.add_argument(
        "--success-code",
        type=int,
        default=None,
        help="Status code for the success phase (default: 200)"
    )
    log_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug diagnostics"
    )

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate configuration file")
    validate_parser.add_argument(
        "--config", "-f",
        default="./httpr.yaml",
        help="Path to configuration file (default: ./httpr.yaml)"
    )

    subparsers.add_parser("example-config", help="Print an example configuration file")

    # Probe command
    probe_parser = subparsers.add_parser("probe", help="Send requests to a server and report the status sequence")
    probe_parser.add_argument("url", help="URL to probe")
    probe_parser.add_argument(
        "--count", "-n",
        type=int,
        default=10,
        help="Number of sequential requests (default: 10)"
    )
    probe_parser.add_argument(
        "--method", "-X",
        default="GET",
        help="HTTP method (default: GET)"
    )
    probe_parser.add_argument(
        "--timeout", "-t",
        type=float,
        default=5.0,
        help="Per-request timeout in seconds (default: 5)"
    )

    # Version command
    parser.add_argument(
        "--version", "-V",
        action="version",
        version="%(prog)s 0.1.0"
    )

    return parser


def build_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Nested config mapping of the flags that were explicitly given"""
    sections = {
        "listen": args.listen,
        "response": {
            "code": args.code,
            "delay_ms": args.delay,
            "echo": args.echo,
        },
        "logging": {
            "json": args.json,
            "pretty": args.pretty,
            "output": args.output,
            "level": "DEBUG" if args.verbose else None,
        },
        "failure_mode": {
            "enabled": args.simulate_failures,
            "failure_count": args.failure_count,
            "success_count": args.success_count,
            "failure_code": args.failure_code,
            "success_code": args.success_code,
        },
    }

    overrides: Dict[str, Any] = {}
    for key, value in sections.items():
        if isinstance(value, dict):
            value = {k: v for k, v in value.items() if v is not None}
            if value:
                overrides[key] = value
        elif value is not None:
            overrides[key] = value
    return overrides


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def cmd_log(args: argparse.Namespace) -> int:
    """Execute the log command"""
    config_path = Path(args.config) if args.config else None

    try:
        config = load_config(config_path, build_overrides(args))
    except ValidationError as e:
        print("Error loading configuration:", file=sys.stderr)
        for line in format_validation_error(e):
            print(f"  - {line}", file=sys.stderr)
        return 1
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    configure_logging(config.logging.level)

    # Imported here so validate/probe don't pay for the server stack
    from httpr.server.runner import start_server

    context = Context(config)
    print_banner(config)
    start_server(context)
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Execute the validate command"""
    config_path = Path(args.config)

    if not config_path.exists():
        print(f"Error: Configuration file not found: {config_path}", file=sys.stderr)
        return 1

    errors = validate_config_file(config_path)

    if errors:
        print("Configuration validation failed:")
        for error in errors:
            print(f"  - {error}")
        return 1

    print(f"Configuration valid: {config_path}")
    return 0


def cmd_example_config(args: argparse.Namespace) -> int:
    """Execute the example-config command"""
    from httpr.config.loader import create_example_config
    print(create_example_config(), end="")
    return 0


def cmd_probe(args: argparse.Namespace) -> int:
    """Execute the probe command"""
    from httpr.probe import probe
    from httpr.reports.console import print_probe_summary

    try:
        result = probe(args.url, count=args.count, method=args.method.upper(), timeout=args.timeout)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print_probe_summary(result)
    return 0 if result.ok else 1


def main() -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "log":
        return cmd_log(args)
    elif args.command == "validate":
        return cmd_validate(args)
    elif args.command == "example-config":
        return cmd_example_config(args)
    elif args.command == "probe":
        return cmd_probe(args)

    return 0


if __name__ == "__main__":
    sys.exit(main())
