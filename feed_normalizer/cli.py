"""Command-line interface for the feed_normalizer application."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import pprint
from pathlib import Path
from typing import List, Optional

from .config import LoggingConfig, parse_app_config
from .runner import RunConfig, execute

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Fetch RSS/Atom feeds and print their normalized form as JSON."
    )
    parser.add_argument(
        "--config",
        default="configs/config.xml",
        help="Path to the main configuration XML file.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (e.g. DEBUG, INFO, WARNING). Overrides config.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Optional path to a log file. Overrides config.",
    )
    parser.add_argument(
        "--input",
        metavar="PATH",
        help="Normalize a feed document stored at PATH instead of the configured feeds.",
    )
    parser.add_argument(
        "--url",
        help="Feed URL to report for --input (defaults to the file URI).",
    )
    return parser


def configure_logging(level_name: str, log_file: Optional[str] = None) -> None:
    """Initialise logging according to options."""
    log_level = getattr(logging, level_name.upper(), None)
    if not isinstance(log_level, int):
        raise ValueError(f"Unsupported log level: {level_name}")

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(log_level)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if log_file:
        log_path = Path(log_file)
        if log_path.parent and not log_path.parent.exists():
            log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logger.debug(
            "Logger initialised with level %s and file output to %s",
            level_name.upper(),
            log_path,
        )
    else:
        logger.debug(
            "Logger initialised with console output at level %s", level_name.upper()
        )


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.input:
            # A single local document needs no configuration file.
            logging_config = LoggingConfig()
            config = RunConfig(input_path=args.input, input_url=args.url)
        else:
            app_config = parse_app_config(args.config)
            logging_config = app_config.logging
            config = RunConfig(
                feeds_file=app_config.feeds_file,
                timeout=app_config.timeout,
                concurrency=app_config.concurrency,
                user_agent=app_config.user_agent,
            )

        configure_logging(
            args.log_level or logging_config.level, args.log_file or logging_config.file
        )
        logger.info("Active Configuration:\n%s", pprint.pformat(dataclasses.asdict(config)))

        result = execute(config)
    except ValueError as exc:
        parser.error(str(exc))
    except (RuntimeError, FileNotFoundError) as exc:
        logger.error("%s", exc)
        return 1
    except Exception:  # noqa: BLE001
        logger.exception("Unexpected error during execution.")
        return 1

    print(result.output_text)
    return 0
