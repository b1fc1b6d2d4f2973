"""Console entry point for the Azure Blob Storage walkthrough."""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Dict, Optional, Sequence

from loguru import logger

from blobtour import APP_VERSION
from blobtour.adapters.storage import open_service_client, summarize_env
from blobtour.core.exceptions import ConfigError
from blobtour.logging_utils import setup_logging
from blobtour.observability import init_sentry
from blobtour.orchestrator import WalkthroughReport, run_walkthrough
from blobtour.pacing import Pacer, make_pacer
from blobtour.settings import Settings, get_settings

EXIT_PROMPT = "Press enter to exit the sample application."


def _print_env_summary(status: Dict[str, bool]) -> int:
    print("Azure Blob configuration check:\n")
    for key, present in status.items():
        flag = "OK" if present else "MISSING"
        print(f"  - {key}: {flag}")

    if status["AZURE_STORAGE_CONNECTION_STRING"]:
        print("\nConnection string detected; account/key checks are optional.")
        return 0
    if status["AZURE_STORAGE_ACCOUNT"]:
        if not status["AZURE_STORAGE_ACCOUNT_KEY"]:
            print("\nNo account key; DefaultAzureCredential will be used.")
        return 0
    print("\nSet AZURE_STORAGE_CONNECTION_STRING or AZURE_STORAGE_ACCOUNT before running.")
    return 1


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    update = {}
    if args.non_interactive:
        update["interactive"] = False
    if args.local_dir:
        update["local_dir"] = Path(args.local_dir)
    if not update:
        return settings
    walkthrough = settings.walkthrough.model_copy(update=update)
    return settings.model_copy(update={"walkthrough": walkthrough})


async def _run(settings: Settings, pace: Pacer) -> WalkthroughReport:
    async with open_service_client(settings.storage) as service:
        return await run_walkthrough(service, settings.walkthrough, pace=pace)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blobtour",
        description="Walk through container, upload, list, download and metadata calls "
        "against Azure Blob Storage.",
    )
    parser.add_argument(
        "--non-interactive",
        action="store_true",
        help="Do not wait for Enter between phases.",
    )
    parser.add_argument(
        "--local-dir",
        help="Persistent local working directory (default: ./files).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: LOG_LEVEL or INFO).",
    )
    parser.add_argument(
        "--check-env",
        action="store_true",
        help="Only report which storage settings are present.",
    )
    parser.add_argument("--version", action="version", version=APP_VERSION)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(force=True, level=args.log_level)

    settings = _apply_overrides(get_settings(), args)
    if args.check_env:
        return _print_env_summary(summarize_env(settings.storage))

    init_sentry(settings.sentry)
    pace = make_pacer(settings.walkthrough.interactive)

    print("Azure Blob Storage exercise\n")
    try:
        report = asyncio.run(_run(settings, pace))
    except ConfigError as exc:
        print(f"Configuration error: {exc}")
        logger.error("configuration error: {}", exc)
        return 1
    except Exception:
        logger.exception("walkthrough aborted")
        return 1

    logger.info(
        "run {} reached stage={} failed={}",
        report.run_id,
        report.stage.value,
        len(report.failed_stages),
    )
    if settings.walkthrough.interactive:
        asyncio.run(pace(EXIT_PROMPT))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
