"""
Test Rendering (values, timestamps, styling)
============================================

Usage:
    pytest test_render.py
    python test_render.py
"""

import io

from jsonlogprint import (
    ColorOption,
    Number,
    Styler,
    TimestampFormat,
    YEAR_3K_EPOCH,
    format_timestamp,
    render_value,
    resolve_color,
)
from jsonlogprint.render import RenderError, quote_string
from jsonlogprint.styling import DEPTH_STYLES, Style, depth_style, level_style

PLAIN = Styler(colorize=False)
COLOR = Styler(colorize=True)


# ─────────────────────────────────────────────────────────────────────────────
# Renderer
# ─────────────────────────────────────────────────────────────────────────────

def test_scalars_with_and_without_key():
    assert render_value("value", "key", 0, PLAIN) == "key=value"
    assert render_value("value", "", 0, PLAIN) == "value"
    assert render_value(Number("42"), "n", 0, PLAIN) == "n=42"
    assert render_value(True, "ok", 0, PLAIN) == "ok=true"
    assert render_value(False, "", 0, PLAIN) == "false"
    assert render_value(None, "v", 0, PLAIN) == "v=null"


def test_number_literal_text_preserved():
    assert render_value(Number("1.50"), "x", 0, PLAIN) == "x=1.50"
    assert render_value(Number("1e3"), "x", 0, PLAIN) == "x=1e3"
    assert render_value(Number("123456789012345678901234567890"), "x", 0, PLAIN) == \
        "x=123456789012345678901234567890"


def test_string_quoting_rules():
    assert quote_string("simple") == "simple"
    assert quote_string("a=b") == "a=b"
    assert quote_string("two words") == '"two words"'
    assert quote_string('say "hi"') == '"say \\"hi\\""'
    assert quote_string("C:\\dir") == '"C:\\\\dir"'
    assert quote_string("") == ""


def test_nested_object_and_array():
    value = {"key": "value", "array": [Number("1"), Number("2"), Number("3")]}
    assert render_value(value, "nested", 0, PLAIN) == "nested{key=value array[1 2 3]}"


def test_empty_containers_and_arrays_of_objects():
    assert render_value({}, "o", 0, PLAIN) == "o{}"
    assert render_value([], "a", 0, PLAIN) == "a[]"
    assert render_value([{"x": Number("1")}, [None]], "a", 0, PLAIN) == "a[{x=1} [null]]"


def test_depth_styles_on_keys_and_braces():
    value = {"a": {"b": Number("1")}}
    expected = (
        "\x1b[34mo{\x1b[0m"
        "\x1b[36ma{\x1b[0m"
        "\x1b[32mb\x1b[0m=1"
        "\x1b[36m}\x1b[0m"
        "\x1b[34m}\x1b[0m"
    )
    assert render_value(value, "o", 0, COLOR) == expected


def test_non_json_value_raises_render_error():
    try:
        render_value({"bad": object()}, "x", 0, PLAIN)
    except RenderError as e:
        assert "x" in str(e)
    else:
        raise AssertionError("RenderError not raised")


# ─────────────────────────────────────────────────────────────────────────────
# Timestamps
# ─────────────────────────────────────────────────────────────────────────────

def test_timestamp_seconds_and_millis():
    assert format_timestamp(1627494000, TimestampFormat.SECONDS) == "2021-07-28T17:40:00Z"
    assert format_timestamp(1627494000000, TimestampFormat.MILLIS) == "2021-07-28T17:40:00.000Z"
    assert format_timestamp(1627494000, TimestampFormat.MILLIS) == "1970-01-19T20:04:54.000Z"


def test_timestamp_auto_threshold():
    assert format_timestamp(YEAR_3K_EPOCH, TimestampFormat.AUTO) == "3000-01-01T05:00:00Z"
    assert format_timestamp(YEAR_3K_EPOCH + 1, TimestampFormat.AUTO) == "1971-01-12T04:48:18.001Z"
    assert format_timestamp(0, TimestampFormat.AUTO) == "1970-01-01T00:00:00Z"


def test_timestamp_raw_and_out_of_range():
    assert format_timestamp(1627494000, TimestampFormat.RAW) == "1627494000"
    assert format_timestamp(10 ** 15, TimestampFormat.SECONDS) == "1000000000000000"
    assert format_timestamp(-10 ** 15, TimestampFormat.SECONDS) == "-1000000000000000"
    assert format_timestamp(10 ** 30, TimestampFormat.AUTO) == str(10 ** 30)


def test_timestamp_negative_millis():
    assert format_timestamp(-1, TimestampFormat.MILLIS) == "1969-12-31T23:59:59.999Z"


# ─────────────────────────────────────────────────────────────────────────────
# Styling policy
# ─────────────────────────────────────────────────────────────────────────────

def test_level_styles():
    assert COLOR.level("info") == "\x1b[36minfo\x1b[0m"
    assert COLOR.level("error") == "\x1b[31merror\x1b[0m"
    assert COLOR.level("WARNING") == "\x1b[33mWARNING\x1b[0m"
    assert COLOR.level("Crit") == "\x1b[1m\x1b[31mCrit\x1b[0m"
    assert COLOR.level("debug") == "\x1b[2m\x1b[34mdebug\x1b[0m"
    assert COLOR.level("trace") == "\x1b[2mtrace\x1b[0m"
    assert COLOR.level("notice") == "notice"
    assert level_style(True, "critical") == Style(color="red", bold=True)


def test_depth_cycle_of_six():
    assert len(DEPTH_STYLES) == 6
    for depth in range(18):
        assert depth_style(True, depth) == DEPTH_STYLES[depth % 6]
    assert depth_style(True, 3) == Style(color="blue", dimmed=True)


def test_color_disabled_is_plain_everywhere():
    assert PLAIN.level("crit") == "crit"
    assert PLAIN.timestamp("2021-07-28T17:40:00Z") == "2021-07-28T17:40:00Z"
    for depth in range(12):
        assert PLAIN.depth("k", depth) == "k"
    assert COLOR.timestamp("t") == "\x1b[2mt\x1b[0m"


class FakeTTY(io.StringIO):
    def isatty(self):
        return True


def test_resolve_color():
    pipe = io.StringIO()
    assert resolve_color(ColorOption.ALWAYS, pipe, {}) is True
    assert resolve_color(ColorOption.NEVER, FakeTTY(), {"CI": "1"}) is False
    assert resolve_color(ColorOption.AUTO, pipe, {}) is False
    assert resolve_color(ColorOption.AUTO, pipe, {"CI": "true"}) is True
    assert resolve_color(ColorOption.AUTO, pipe, {"FORCE_COLOR": "1"}) is True
    assert resolve_color(ColorOption.AUTO, FakeTTY(), {}) is True
    assert resolve_color(ColorOption.AUTO, FakeTTY(), {"NO_COLOR": "1"}) is False
    assert resolve_color(ColorOption.AUTO, FakeTTY(), {"TERM": "dumb"}) is False


def main():
    """Run all tests."""
    print("\n🧪 jsonlogprint - Rendering Tests")
    print("=" * 60)
    for name, func in sorted(globals().items()):
        if name.startswith("test_") and callable(func):
            func()
            print(f"✓ {name}")
    print("\n✅ ALL RENDERING TESTS PASSED")


if __name__ == "__main__":
    main()
