from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import TextIO

from weatherfeed.config import LOG_LEVELS, OUTPUT_FORMATS, AppConfig, ConfigError, load_config
from weatherfeed.feed import FeedError, FeedRecord, load_feed, parse_feed_lines, record_to_dict
from weatherfeed.parsers import format_weather_data, parse_weather_data

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 2
HANDLER_NAME = "weatherfeed-cli"


def setup_logging(level: str = "WARNING") -> None:
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    handler.set_name(HANDLER_NAME)
    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if existing.get_name() == HANDLER_NAME:
            root_logger.removeHandler(existing)
    root_logger.setLevel(level)
    root_logger.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weatherfeed",
        description="Parse key1=value1|key2=value2 weather records",
    )
    parser.add_argument("inputs", nargs="*", help="Feed files (or record strings with --raw); stdin when omitted")
    parser.add_argument("--raw", action="store_true", help="Treat inputs as literal record strings")
    parser.add_argument("--config", type=Path, default=None, help="Path to a YAML config file")
    parser.add_argument("--format", choices=sorted(OUTPUT_FORMATS), default=None)
    parser.add_argument("--log-level", default=None)
    return parser


def render_record(record: FeedRecord, config: AppConfig) -> str:
    if config.output.format == "kv":
        missing = config.output.missing_value
        data = {
            key: (missing if value is None else value) for key, value in record.data.items()
        }
        return format_weather_data(
            data,
            pair_delimiter=config.parser.pair_delimiter,
            kv_separator=config.parser.kv_separator,
        )
    return json.dumps(record_to_dict(record), ensure_ascii=False, indent=config.output.indent)


def _collect_records(args: argparse.Namespace, config: AppConfig, stdin: TextIO) -> list[FeedRecord]:
    separators = {
        "pair_delimiter": config.parser.pair_delimiter,
        "kv_separator": config.parser.kv_separator,
    }
    if not args.inputs:
        return parse_feed_lines(stdin, **separators)
    if args.raw:
        return [
            FeedRecord(line_no=index, raw=item, data=parse_weather_data(item, **separators))
            for index, item in enumerate(args.inputs, start=1)
        ]
    records: list[FeedRecord] = []
    for item in args.inputs:
        records.extend(load_feed(Path(item), **separators))
    return records


def run(argv: list[str] | None = None, stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    args = build_parser().parse_args(argv)
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        setup_logging()
        logger.error("%s", exc)
        return EXIT_USAGE

    if args.format:
        config = replace(config, output=replace(config.output, format=args.format))
    if args.log_level:
        level = args.log_level.upper()
        if level not in LOG_LEVELS:
            setup_logging()
            logger.error("Unknown log level: %s", args.log_level)
            return EXIT_USAGE
        config = replace(config, log_level=level)
    setup_logging(config.log_level)

    try:
        records = _collect_records(args, config, stdin)
    except FeedError as exc:
        logger.error("%s", exc)
        return EXIT_USAGE

    for record in records:
        stdout.write(render_record(record, config) + "\n")
    logger.info("rendered %d records as %s", len(records), config.output.format)
    return EXIT_OK


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
