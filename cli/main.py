"""Command line interface for composing Redshift provisioning graphs."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from cli import config, output
from cli.zones import discover_availability_zones
from core.errors import InvariantViolation, ValidationError
from core.graph import ProvisioningRun
from core.parameters import PARAMETERS, describe_parameters
from core.template import render_template

logger = logging.getLogger(__name__)

FORMATS = ["json", "md", "table"]


class CLIError(Exception):
    def __init__(self, message: str, exit_code: int = 2) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dwhprov", description="Redshift provisioning graph composer")
    parser.add_argument("--config", type=Path, default=Path("dwhprov.yml"), help="Path to CLI configuration file")
    parser.add_argument("--log-level", help="Logging level override (DEBUG, INFO, WARNING, ...)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_parameter_sources(cmd: argparse.ArgumentParser) -> None:
        cmd.add_argument("--param", action="append", default=[], metavar="NAME=VALUE", help="Parameter value")
        cmd.add_argument("--params-file", type=Path, help="YAML or JSON mapping of parameter values")
        cmd.add_argument("--output", type=Path)

    def add_network_sources(cmd: argparse.ArgumentParser) -> None:
        cmd.add_argument("--region")
        zones = cmd.add_mutually_exclusive_group()
        zones.add_argument("--availability-zone", action="append", dest="availability_zones", metavar="ZONE")
        zones.add_argument("--discover-azs", action="store_true", help="Look up available zones with EC2")

    # compose ----------------------------------------------------------------
    compose_cmd = subparsers.add_parser("compose", help="Validate parameters and print the resource graph")
    add_parameter_sources(compose_cmd)
    add_network_sources(compose_cmd)
    compose_cmd.add_argument("--format", choices=FORMATS, help="Output format override")

    # template ---------------------------------------------------------------
    template_cmd = subparsers.add_parser("template", help="Render the resource graph as a CloudFormation template")
    add_parameter_sources(template_cmd)
    add_network_sources(template_cmd)

    # validate ---------------------------------------------------------------
    validate_cmd = subparsers.add_parser("validate", help="Validate parameters only")
    add_parameter_sources(validate_cmd)
    validate_cmd.add_argument("--format", choices=FORMATS, help="Output format override")

    # parameters -------------------------------------------------------------
    params_cmd = subparsers.add_parser("parameters", help="List declared parameters and constraints")
    params_cmd.add_argument("--output", type=Path)
    params_cmd.add_argument("--format", choices=FORMATS, help="Output format override")

    return parser


def app(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = config.load_settings(args.config)
        merged = settings.merge_cli(
            format_override=getattr(args, "format", None),
            region=getattr(args, "region", None),
            log_level=args.log_level,
        )
        _configure_logging(merged.log_level)

        if args.command == "compose":
            return _cmd_compose(args, merged)
        if args.command == "template":
            return _cmd_template(args, merged)
        if args.command == "validate":
            return _cmd_validate(args, merged)
        if args.command == "parameters":
            return _cmd_parameters(args, merged)
    except CLIError as exc:
        print(exc, file=sys.stderr)
        return exc.exit_code
    except ValidationError as exc:
        print(f"Validation failed: {exc} [{exc.constraint}]", file=sys.stderr)
        return 2
    except InvariantViolation as exc:
        print(f"Invariant violation: {exc}", file=sys.stderr)
        return 3
    except Exception as exc:  # pragma: no cover - unexpected errors bubble up
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


# ---------------------------------------------------------------------------
# Command implementations


def _cmd_compose(args: argparse.Namespace, settings: config.Settings) -> int:
    run = ProvisioningRun(_collect_parameters(args, settings), _resolve_zones(args, settings))
    graph = run.compose()
    if settings.default_format == "json":
        payload: Any = graph.model_dump(mode="json")
    else:
        payload = output.graph_summary(graph)
    output.emit(payload, settings.default_format, output_path=args.output)
    return 0


def _cmd_template(args: argparse.Namespace, settings: config.Settings) -> int:
    run = ProvisioningRun(_collect_parameters(args, settings), _resolve_zones(args, settings))
    template = render_template(run.compose())
    output.emit(template, "json", output_path=args.output)
    return 0


def _cmd_validate(args: argparse.Namespace, settings: config.Settings) -> int:
    run = ProvisioningRun(_collect_parameters(args, settings))
    params = run.validate()
    payload = params.model_dump(mode="json", by_alias=True)
    output.emit(payload, settings.default_format, output_path=args.output)
    return 0


def _cmd_parameters(args: argparse.Namespace, settings: config.Settings) -> int:
    declarations = describe_parameters()
    if settings.default_format != "json":
        declarations = [
            {"name": item["name"], "type": item["type"], "default": item["default"], "description": item["description"]}
            for item in declarations
        ]
    output.emit(declarations, settings.default_format, output_path=args.output)
    return 0


# ---------------------------------------------------------------------------
# Helpers


def _collect_parameters(args: argparse.Namespace, settings: config.Settings) -> dict[str, Any]:
    """Merge config defaults, then the parameter file, then --param flags."""
    values: dict[str, Any] = dict(settings.parameters)
    if args.params_file:
        if not args.params_file.exists():
            raise CLIError(f"Parameter file not found: {args.params_file}")
        try:
            values.update(config.load_parameter_file(args.params_file))
        except ValueError as exc:
            raise CLIError(str(exc)) from exc
    for item in args.param or []:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            raise CLIError(f"--param expects NAME=VALUE, got '{item}'")
        values[name.strip()] = value
    return _dedupe_aliases(values)


def _dedupe_aliases(values: dict[str, Any]) -> dict[str, Any]:
    # A later source may use the field name where an earlier one used the external name.
    names = {spec.field: spec.name for spec in PARAMETERS}
    merged: dict[str, Any] = {}
    for key, value in values.items():
        merged[names.get(key, key)] = value
    return merged


def _resolve_zones(args: argparse.Namespace, settings: config.Settings) -> list[str]:
    if getattr(args, "availability_zones", None):
        return list(args.availability_zones)
    if getattr(args, "discover_azs", False) or settings.discover_availability_zones:
        zones = discover_availability_zones(settings.region)
        if not zones:
            raise CLIError(f"No available zones found in {settings.region}")
        logger.info("Discovered %d availability zone(s) in %s", len(zones), settings.region)
        return zones
    return settings.zones()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main() -> None:
    raise SystemExit(app())


if __name__ == "__main__":
    main()
