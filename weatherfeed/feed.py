from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from weatherfeed.parsers import KV_SEPARATOR, PAIR_DELIMITER, parse_weather_data

logger = logging.getLogger(__name__)


class FeedError(RuntimeError):
    pass


@dataclass
class FeedRecord:
    line_no: int
    raw: str
    data: dict[str, str | None]


def parse_feed_lines(
    lines: Iterable[str],
    *,
    pair_delimiter: str = PAIR_DELIMITER,
    kv_separator: str = KV_SEPARATOR,
) -> list[FeedRecord]:
    records: list[FeedRecord] = []
    for line_no, line in enumerate(lines, start=1):
        raw = line.rstrip("\r\n")
        if not raw.strip():
            continue
        data = parse_weather_data(raw, pair_delimiter=pair_delimiter, kv_separator=kv_separator)
        missing = [key for key, value in data.items() if value is None]
        if missing:
            logger.debug("line %d: no value for %s", line_no, ", ".join(missing))
        records.append(FeedRecord(line_no=line_no, raw=raw, data=data))
    return records


def load_feed(
    path: Path,
    *,
    pair_delimiter: str = PAIR_DELIMITER,
    kv_separator: str = KV_SEPARATOR,
) -> list[FeedRecord]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FeedError(f"Cannot read feed {path}: {exc}") from exc
    records = parse_feed_lines(
        text.split("\n"),
        pair_delimiter=pair_delimiter,
        kv_separator=kv_separator,
    )
    logger.info("loaded %d records from %s", len(records), path)
    return records


def record_to_dict(record: FeedRecord) -> dict[str, Any]:
    return {
        "line": record.line_no,
        "raw": record.raw,
        "data": dict(record.data),
    }
