"""Command-line entry point.

Usage:
    diet-assistant [--data-dir DIR] [--date YYYY-MM-DD]
"""

import argparse
import asyncio
import logging
from datetime import date
from pathlib import Path

from diet_assistant.app_logging import configure_logging
from diet_assistant.cli.shell import Shell
from diet_assistant.config import Settings
from diet_assistant.containers import build_container
from diet_assistant.domain.errors import DietAssistantError
from diet_assistant.domain.logs import DATE_FORMAT

_logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="diet-assistant",
        description="Track foods, daily calories and a calorie target.",
    )
    parser.add_argument("--data-dir", help="Directory holding the JSON data files")
    parser.add_argument(
        "--date", help="Active log date (YYYY-MM-DD); defaults to today"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the interactive shell."""
    args = build_parser().parse_args(argv)
    overrides: dict[str, object] = {}
    if args.data_dir:
        overrides["data_dir"] = Path(args.data_dir)
    settings = Settings(**overrides)
    configure_logging(settings.log_level)

    container = build_container(settings)
    with asyncio.Runner() as runner:
        try:
            shell = Shell(
                container,
                day=args.date or date.today().strftime(DATE_FORMAT),
                run_async=runner.run,
            )
            _logger.debug("Starting shell for %s in %s", shell.day, settings.data_dir)
            shell.run()
        except DietAssistantError as exc:
            print(f"Error: {exc.message}")
            return 2
        finally:
            runner.run(container.close_resources())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
