#!/usr/bin/env python3
"""ey-core command line runner.

Usage:
    ey-core converge [--node NODE] [--dry-run] [--audit-log PATH]
    ey-core preview [--node NODE]
    ey-core manifest [--json]
    ey-core history [--audit-log PATH] [--limit N]

Environment variables:
    EY_CORE_NODE_FILE     Node attributes file (default: search ./configs/node.yaml, ...)
    EY_CORE_LOG_LEVEL     Console log level (default: INFO)
    EY_CORE_LOG_FILE      Log file (default: ~/.ey-core/ey-core.log)
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from .config.node import NodeAttributes
from .converge import (
    ConvergeEngine,
    ExecuteOptions,
    ParseError,
    TimezoneNotRecognized,
)
from .manifest import METADATA
from .services import CONTROLLER_TYPES, create_controller
from .utils.audit_log import DEFAULT_AUDIT_LOG, get_recent_changes
from .utils.logging_config import setup_logging

logger = logging.getLogger("ey_core.cli")


def positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ey-core",
        description="Converge host timezone and list cookbook dependencies",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Show what would change
    ey-core preview --node /etc/chef/dna.json

    # Apply, restarting services through systemd
    ey-core converge --node /etc/chef/dna.json

    # Cookbook dependencies
    ey-core manifest
""",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Log file (default: $EY_CORE_LOG_FILE or ~/.ey-core/ey-core.log)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    converge = sub.add_parser("converge", help="Apply the timezone recipe")
    converge.add_argument("--node", help="Node attributes file (YAML or JSON)")
    converge.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview changes and notifications without applying",
    )
    converge.add_argument(
        "--audit-log",
        default=DEFAULT_AUDIT_LOG,
        help=f"Audit log file (default: {DEFAULT_AUDIT_LOG})",
    )
    converge.add_argument(
        "--controller",
        choices=sorted(CONTROLLER_TYPES),
        default="systemd",
        help="Service control backend (default: systemd)",
    )
    converge.add_argument("--context", default="", help="Audit context message")

    preview = sub.add_parser("preview", help="Show the planned timezone change")
    preview.add_argument("--node", help="Node attributes file (YAML or JSON)")

    manifest = sub.add_parser("manifest", help="List cookbook dependencies")
    manifest.add_argument("--json", action="store_true", help="Output as JSON")

    history = sub.add_parser("history", help="Show recent audited changes")
    history.add_argument(
        "--audit-log",
        default=DEFAULT_AUDIT_LOG,
        help=f"Audit log file (default: {DEFAULT_AUDIT_LOG})",
    )
    history.add_argument("--limit", type=positive_int, default=20)

    return parser


def cmd_converge(args: argparse.Namespace) -> int:
    node = NodeAttributes.load(args.node)
    engine = ConvergeEngine(
        controller=create_controller(args.controller),
        audit_log_path=args.audit_log,
    )
    options = ExecuteOptions(dry_run=args.dry_run, audit_context=args.context)

    logger.info(f"{'DRY RUN: ' if args.dry_run else ''}Converging node from {node.source}")
    result = engine.run(node, options)

    for change in result.changes_made:
        print(change)
    for fired in result.notifications_fired:
        print(f"{'[DRY-RUN] ' if args.dry_run else ''}notified {fired}")

    if not result.success:
        for error in result.errors:
            logger.error(error)
        return 1
    return 0


def cmd_preview(args: argparse.Namespace) -> int:
    node = NodeAttributes.load(args.node)
    print(ConvergeEngine().preview(node))
    return 0


def cmd_manifest(args: argparse.Namespace) -> int:
    if args.json:
        print(json.dumps(METADATA.to_dict(), indent=2))
        return 0

    print(f"{METADATA.name} ({METADATA.maintainer})")
    for name in METADATA.depends:
        print(f"  depends {name}")
    return 0


def cmd_history(args: argparse.Namespace) -> int:
    records = get_recent_changes(args.audit_log, limit=args.limit)
    if not records:
        print("No changes recorded")
        return 0

    for record in records:
        status = "OK" if record.success else f"FAIL: {record.error}"
        dry = " [DRY-RUN]" if record.dry_run else ""
        print(
            f"{record.timestamp} {record.operation}{dry} {record.path}: "
            f"{record.before} -> {record.after} ({status})"
        )
    return 0


COMMANDS = {
    "converge": cmd_converge,
    "preview": cmd_preview,
    "manifest": cmd_manifest,
    "history": cmd_history,
}


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the ey-core CLI."""
    args = build_parser().parse_args(argv)

    setup_logging(
        level=logging.DEBUG if args.verbose else None,
        log_file=args.log_file,
    )

    try:
        return COMMANDS[args.command](args)
    except KeyboardInterrupt:
        logger.warning("Run interrupted by user")
        return 130
    except (TimezoneNotRecognized, ParseError) as e:
        logger.error(f"Run aborted: {e}")
        return 1
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.exception(f"Run failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
