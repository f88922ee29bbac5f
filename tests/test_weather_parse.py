import pytest

from weatherfeed.parsers import format_weather_data, parse_weather_data


def test_parse_weather_data_well_formed() -> None:
    parsed = parse_weather_data("temp=72|humidity=40|wind=NW 12mph")
    assert parsed == {
        "temp": "72",
        "humidity": "40",
        "wind": "NW 12mph",
    }


def test_parse_weather_data_single_pair() -> None:
    assert parse_weather_data("temp=72") == {"temp": "72"}


def test_parse_weather_data_empty_input() -> None:
    assert parse_weather_data("") == {}
    assert parse_weather_data("|||") == {}


def test_parse_weather_data_drops_empty_segments() -> None:
    assert parse_weather_data("|a=1||b=2|") == parse_weather_data("a=1|b=2") == {"a": "1", "b": "2"}


def test_parse_weather_data_last_duplicate_wins() -> None:
    assert parse_weather_data("a=1|a=2") == {"a": "2"}


def test_parse_weather_data_missing_value_is_none() -> None:
    parsed = parse_weather_data("novalue")
    assert parsed == {"novalue": None}
    assert parsed["novalue"] is None


def test_parse_weather_data_keeps_second_token_only() -> None:
    assert parse_weather_data("a=b=c") == {"a": "b"}
    assert parse_weather_data("url=http://x?q=1|t=3") == {"url": "http://x?q", "t": "3"}


def test_parse_weather_data_empty_key_and_value() -> None:
    assert parse_weather_data("a=|=x") == {"a": "", "": "x"}


def test_parse_weather_data_preserves_whitespace() -> None:
    assert parse_weather_data(" a = 1 | ") == {" a ": " 1 ", " ": None}


def test_parse_weather_data_does_not_share_results() -> None:
    first = parse_weather_data("a=1")
    first["b"] = "2"
    assert parse_weather_data("a=1") == {"a": "1"}


def test_parse_weather_data_custom_separators() -> None:
    parsed = parse_weather_data("temp:72;;rain;wind:5:gust", pair_delimiter=";", kv_separator=":")
    assert parsed == {"temp": "72", "rain": None, "wind": "5"}


def test_parse_weather_data_rejects_empty_separator() -> None:
    with pytest.raises(ValueError, match="separators must be non-empty"):
        parse_weather_data("a=1", pair_delimiter="")


def test_format_weather_data_writes_bare_key_for_none() -> None:
    text = format_weather_data({"temp": "72", "rain": None, "note": ""})
    assert text == "temp=72|rain|note="
    assert parse_weather_data(text) == {"temp": "72", "rain": None, "note": ""}


def test_format_weather_data_empty_mapping() -> None:
    assert format_weather_data({}) == ""
