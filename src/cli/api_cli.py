"""
Command-line interface for the employee API.

Usage:
    python -m src.cli.api_cli serve [--host <host>] [--port <port>] [--rules <path>]
    python -m src.cli.api_cli validate --payload <json file> [--method POST|PUT] [--rules <path>]
    python -m src.cli.api_cli rules [--rules <path>]
"""

import argparse
import json
import sys
from pathlib import Path

from src.api.config import AppConfig
from src.core.rules import RuleEngine
from src.employees import EmployeeStore, load_employee_schema
from src.observability.logger import get_logger


logger = get_logger(__name__)


def serve_command(args) -> int:
    """
    Run the API server with uvicorn.

    Args:
        args: Command-line arguments
    """
    # Lazy import: only the serve command needs the ASGI server
    import uvicorn

    from src.api.app import create_app

    config = AppConfig.from_env(host=args.host, port=args.port, rules_path=args.rules)
    logger.info(f"Server is listening on {config.host}:{config.port}")
    uvicorn.run(create_app(config), host=config.host, port=config.port, log_config=None)
    return 0


def validate_command(args) -> int:
    """
    Validate a JSON payload file against the employee rules.

    Runs against an empty store, so role uniqueness always passes.

    Args:
        args: Command-line arguments
    """
    payload_path = Path(args.payload)
    if not payload_path.exists():
        logger.error(f"Payload file not found: {args.payload}")
        return 1

    with open(payload_path) as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            print(f"invalid JSON: {e}")
            return 1

    if not isinstance(payload, dict):
        print("The request payload must be a JSON object.")
        return 1

    engine = RuleEngine(load_employee_schema(EmployeeStore(), args.rules))
    error = engine.validate_record(payload, args.method)
    if error:
        print(error)
        return 1

    print("valid")
    return 0


def rules_command(args) -> int:
    """
    Print a summary of the employee rules as JSON.

    Args:
        args: Command-line arguments
    """
    engine = RuleEngine(load_employee_schema(EmployeeStore(), args.rules))
    print(json.dumps(engine.get_rule_summary(), indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Employee records API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the API on port 8080
  python -m src.cli.api_cli serve --port 8080

  # Check an update payload offline
  python -m src.cli.api_cli validate --payload employee.json --method PUT

  # Show the loaded field rules
  python -m src.cli.api_cli rules --rules config/employee_rules.yaml
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument(
        "--host",
        default=None,
        help="Bind address (default: env API_HOST or 127.0.0.1)"
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port (default: env API_PORT or 3000)"
    )

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate a payload file")
    validate_parser.add_argument(
        "--payload",
        required=True,
        help="Path to a JSON file holding one employee payload"
    )
    validate_parser.add_argument(
        "--method",
        default="POST",
        choices=["POST", "PUT"],
        help="Request method whose requiredness rules apply (default: POST)"
    )

    # Rules command
    rules_parser = subparsers.add_parser("rules", help="Summarize the field rules")

    for sub in (serve_parser, validate_parser, rules_parser):
        sub.add_argument(
            "--rules",
            default=None,
            help="Path to the employee rules YAML file (default: config/employee_rules.yaml)"
        )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    commands = {
        "serve": serve_command,
        "validate": validate_command,
        "rules": rules_command,
    }
    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
