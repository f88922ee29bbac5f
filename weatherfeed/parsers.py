from __future__ import annotations

from collections.abc import Mapping

PAIR_DELIMITER = "|"
KV_SEPARATOR = "="


def _check_separators(pair_delimiter: str, kv_separator: str) -> None:
    if not pair_delimiter or not kv_separator:
        raise ValueError("separators must be non-empty strings")


def parse_weather_data(
    raw_data: str,
    *,
    pair_delimiter: str = PAIR_DELIMITER,
    kv_separator: str = KV_SEPARATOR,
) -> dict[str, str | None]:
    """Parse ``key1=value1|key2=value2`` into a dict.

    Empty segments are dropped. A segment without a separator maps to None,
    and only the first two tokens of a segment are kept, so ``a=b=c`` gives
    ``{"a": "b"}``. Later keys overwrite earlier ones.
    """
    _check_separators(pair_delimiter, kv_separator)
    details: dict[str, str | None] = {}
    for pair in raw_data.split(pair_delimiter):
        if not pair:
            continue
        tokens = pair.split(kv_separator)
        details[tokens[0]] = tokens[1] if len(tokens) > 1 else None
    return details


def format_weather_data(
    data: Mapping[str, str | None],
    *,
    pair_delimiter: str = PAIR_DELIMITER,
    kv_separator: str = KV_SEPARATOR,
) -> str:
    _check_separators(pair_delimiter, kv_separator)
    # None is written as the bare key so it parses back to None
    return pair_delimiter.join(
        key if value is None else f"{key}{kv_separator}{value}" for key, value in data.items()
    )
