"""CLI for running the demo domain and planning from checkpoints.

Usage:
    python -m goapkit demo
    python -m goapkit demo --fed
    python -m goapkit plan data/checkpoints/000010_20260101_120000000000.json --plugin mydomain
    GOAPKIT_CHECKPOINT_DIR=runs/checkpoints python -m goapkit plan --plugin mydomain
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys

from goapkit.config import PlannerConfig
from goapkit.errors import GoapError


def _print_plan(result) -> None:
    print(f"Goal: {result.goal!r}")
    print(f"Cost: {result.cost}")
    if result.is_empty:
        print("Plan: (already satisfied)")
        return
    print("Plan:")
    for index, action in enumerate(result.actions, start=1):
        print(f"  {index}. {action!r}")


def _cmd_demo(args: argparse.Namespace, config: PlannerConfig) -> int:
    from goapkit.demo import build_agent

    agent = build_agent(hungry=not args.fed, config=config)
    print(f"State: {agent.state!r}")
    result = agent.plan_dynamic()
    if result is None:
        print("No feasible goal")
        return 1
    _print_plan(result)
    return 0


def _cmd_plan(args: argparse.Namespace, config: PlannerConfig) -> int:
    from goapkit.persistence.checkpoint import CheckpointManager, load_agent

    for module_name in args.plugin or []:
        importlib.import_module(module_name)

    override = {}
    if args.max_expansions is not None:
        override["max_expansions"] = args.max_expansions

    path = args.checkpoint
    if path is None:
        path = CheckpointManager.from_config(config).latest_checkpoint()
        if path is None:
            print(f"Error: no checkpoints in {config.checkpoint_dir}", file=sys.stderr)
            return 1

    agent = load_agent(path, config_override=override or None)

    print(f"State: {agent.state!r}")
    result = agent.plan_dynamic()
    if result is None:
        print("No feasible goal")
        return 1
    _print_plan(result)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    config = PlannerConfig()

    parser = argparse.ArgumentParser(
        prog="goapkit",
        description="Goal-oriented action planning",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--log-level", default=config.log_level, help="Logging level")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    demo_parser = subparsers.add_parser("demo", help="Plan in the built-in picnic domain")
    demo_parser.add_argument("--fed", action="store_true", help="Start with the agent not hungry")

    plan_parser = subparsers.add_parser("plan", help="Plan for an agent loaded from a checkpoint")
    plan_parser.add_argument(
        "checkpoint",
        nargs="?",
        help="Path to a checkpoint JSON file (default: latest in GOAPKIT_CHECKPOINT_DIR)",
    )
    plan_parser.add_argument(
        "--plugin",
        action="append",
        help="Module to import first so its state/action/goal types get registered",
    )
    plan_parser.add_argument("--max-expansions", type=int, help="Override the expansion cap")

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())

    if args.command is None:
        parser.print_help()
        return 2

    commands = {"demo": _cmd_demo, "plan": _cmd_plan}
    try:
        return commands[args.command](args, config)
    except GoapError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
