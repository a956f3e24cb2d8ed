#!/usr/bin/env python
"""
BriefOS - Generate and inspect daily briefs from the command line.

Usage:
    python generate_brief.py generate
    python generate_brief.py latest
    python generate_brief.py history
    python generate_brief.py status
"""

import argparse
import asyncio
import json
import sys

from dotenv import load_dotenv

from briefos.config.credentials import CredentialResolver
from briefos.config.settings import get_settings
from briefos.config.startup_validation import run_startup_validation
from briefos.errors import BriefOSError
from briefos.intelligence.orchestrator import GenerationOrchestrator
from briefos.storage.brief_store import BriefStore
from briefos.utils.logger import configure_logging

load_dotenv()


def build_pipeline(settings):
    resolver = CredentialResolver(settings)
    store = BriefStore(settings)
    orchestrator = GenerationOrchestrator(settings, resolver, store)
    return resolver, store, orchestrator


async def cmd_generate(orchestrator) -> int:
    """Generate one brief and print it."""
    try:
        record = await orchestrator.generate()
    except BriefOSError as e:
        print(f"\n❌ Generation failed: {e.message}")
        if e.details:
            print(f"   {e.details}")
        return 1

    document = record.document()
    print(f"\n✅ Brief {record.id} generated for {record.date}"
          f"{' (DEMO MODE)' if document.from_mock else ''}")
    print(json.dumps({"id": record.id, **document.model_dump(mode="json", exclude_none=True)}, indent=2))
    return 0


async def cmd_latest(store) -> int:
    record = await store.latest()
    if record is None:
        print("No briefs yet. Generate one with: python generate_brief.py generate")
        return 0
    print(json.dumps(record.document().model_dump(mode="json", exclude_none=True), indent=2))
    return 0


async def cmd_history(store) -> int:
    records = await store.list()
    if not records:
        print("No briefs yet. Generate one with: python generate_brief.py generate")
        return 0

    print(f"\n📚 {len(records)} brief(s):\n")
    for record in records:
        document = record.document()
        opportunities = len(document.opportunities)
        print(f"   #{record.id}  {record.date}  created {record.created_at:%Y-%m-%d %H:%M:%S}"
              f"  sections={len(document.sections)} opportunities={opportunities}"
              f"{'  [demo]' if document.from_mock else ''}")
    return 0


def main(argv=None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="BriefOS - Daily CCaaS Intelligence Briefs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--db", help="Path to the brief database (overrides BRIEFOS_DB_PATH)")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")
    subparsers.add_parser("generate", help="Generate a new brief")
    subparsers.add_parser("latest", help="Print the latest brief")
    subparsers.add_parser("history", help="List stored briefs")
    subparsers.add_parser("status", help="Show credential and storage status")

    args = parser.parse_args(argv)

    overrides = {"db_path": args.db} if args.db else {}
    settings = get_settings(**overrides)
    configure_logging(settings)
    resolver, store, orchestrator = build_pipeline(settings)

    command = args.command or "generate"
    if command == "generate":
        return asyncio.run(cmd_generate(orchestrator))
    if command == "latest":
        return asyncio.run(cmd_latest(store))
    if command == "history":
        return asyncio.run(cmd_history(store))
    if command == "status":
        run_startup_validation(resolver, store, print_summary=True)
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
