#!/usr/bin/env python3
"""Store, search and delete facts in a memory module from the command line.

Usage:
    python scripts/memory_cli.py add user_preferences "The user prefers dark mode"
    python scripts/memory_cli.py search user_preferences "theme" -n 5
    python scripts/memory_cli.py delete user_preferences 6f1c2d...
    python scripts/memory_cli.py --provider in-memory search scratch "anything"

Results are printed as JSON on stdout; logs go to stderr at LOG_LEVEL.
"""

import argparse
import asyncio
import json
import sys
from typing import Any

from agent_memory.config import get_settings
from agent_memory.exceptions import AgentMemoryError
from agent_memory.memory import Memory
from agent_memory.observability import setup_observability


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage agent memory modules")
    parser.add_argument(
        "--provider",
        "-p",
        default=None,
        help="Memory provider name (defaults to MEMORY_PROVIDER or chroma-db)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug-level logs on stderr",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    add = subparsers.add_parser("add", help="Store a fact")
    add.add_argument("key", help="Memory key")
    add.add_argument("content", help="Fact to store")

    search = subparsers.add_parser("search", help="Search facts by meaning")
    search.add_argument("key", help="Memory key")
    search.add_argument("query", help="Search text")
    search.add_argument(
        "-n",
        type=int,
        default=None,
        help="Maximum number of results",
    )

    delete = subparsers.add_parser("delete", help="Delete a fact by id")
    delete.add_argument("key", help="Memory key")
    delete.add_argument("memory_id", help="Memory identifier")

    return parser


async def run(args: argparse.Namespace) -> dict[str, Any]:
    memory = Memory(key=args.key, provider=args.provider)

    if args.command == "add":
        memory_id = await memory.add(args.content)
        return {"memory_id": memory_id}
    if args.command == "search":
        results = await memory.search(args.query, n=args.n)
        return {"memories": results, "count": len(results)}

    await memory.delete(args.memory_id)
    return {"deleted": args.memory_id}


def main() -> int:
    args = build_parser().parse_args()

    settings = get_settings()
    setup_observability(settings, log_level="DEBUG" if args.verbose else None)

    try:
        result = asyncio.run(run(args))
    except (AgentMemoryError, ValueError) as e:
        print(json.dumps({"error": str(e)}), file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
