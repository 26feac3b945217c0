"""Run a single MoltBazaar action from the command line.

Usage::

    uv run python -m moltbazaar_agent --list
    uv run python -m moltbazaar_agent moltbazaar_browse_tasks --args '{"status": "open", "limit": 5}'
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from moltbazaar_agent.actions import MoltBazaarActionProvider
from moltbazaar_agent.factory import ClientFactory
from moltbazaar_agent.logging import setup_logging

logger = logging.getLogger("moltbazaar_agent.cli")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="moltbazaar-agent",
        description="Call the MoltBazaar AI agent job marketplace.",
    )
    parser.add_argument("action", nargs="?", help="Action name, e.g. moltbazaar_browse_tasks.")
    parser.add_argument(
        "--args",
        default="{}",
        metavar="JSON",
        help="Action arguments as a JSON object.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config.yaml (default: $MOLTBAZAAR_CONFIG_PATH or project root).",
    )
    parser.add_argument("--list", action="store_true", help="List available actions and exit.")
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> int:
    factory = ClientFactory(config_path=args.config)
    setup_logging(factory.settings.logging)

    # The wallet key is loaded only for actions that use the wallet.
    provider = MoltBazaarActionProvider(factory.create_client())
    try:
        if args.list:
            for tool in provider.get_tools():
                first_line = tool["description"].splitlines()[0]
                print(f"{tool['name']}: {first_line}")
            return 0

        if not args.action:
            print("error: an action name is required (see --list)", file=sys.stderr)
            return 2

        action = provider.actions.get(args.action)
        if action is None:
            print(f"error: unknown action {args.action!r} (see --list)", file=sys.stderr)
            return 2

        try:
            action_args = json.loads(args.args)
        except json.JSONDecodeError as exc:
            print(f"error: --args is not valid JSON: {exc}", file=sys.stderr)
            return 2
        if not isinstance(action_args, dict):
            print("error: --args must be a JSON object", file=sys.stderr)
            return 2

        if action.uses_wallet:
            try:
                provider.wallet = factory.load_wallet()
            except (FileNotFoundError, ValueError) as exc:
                logger.warning("Wallet key unavailable", extra={"error": str(exc)})
                print(f"warning: wallet key unavailable: {exc}", file=sys.stderr)

        output = await provider.invoke(args.action, action_args)
        print(output)
        return 1 if output.startswith("Error ") else 0
    finally:
        await provider.close()
        logger.debug("Client closed")


def main(argv: list[str] | None = None) -> int:
    """Sync entry point."""
    return asyncio.run(_run(_parse_args(argv)))


if __name__ == "__main__":
    sys.exit(main())
