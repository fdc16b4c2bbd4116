"""Tests for the display module (human-friendly state output)."""

from rich.console import Console

from denonmarantz.avr import Zone
from denonmarantz.avr.display import _fmt, _source, build_table, print_state

# --- _fmt helper ---


def test_fmt_none():
    assert _fmt(None) == "-"


def test_fmt_bool_true():
    assert _fmt(True) == "On"


def test_fmt_bool_false():
    assert _fmt(False) == "Off"


def test_fmt_whole_float():
    assert _fmt(50.0) == "50"


def test_fmt_half_float():
    assert _fmt(50.5) == "50.5"


def test_fmt_string():
    assert _fmt("CD") == "CD"


def test_source_known():
    assert _source("SAT/CBL") == "CBL/SAT (SAT/CBL)"


def test_source_unknown():
    assert _source("XYZ") == "XYZ"
    assert _source(None) is None


# --- tables ---


def _render(table) -> str:
    console = Console(width=120, record=True)
    console.print(table)
    return console.export_text()


def _populate(state):
    for line in ("PWON", "MV505", "MUOFF", "SICD", "Z2ON", "Z2TUNER", "Z240", "MVMAX 86"):
        state._listen(line)


async def test_build_table_columns(make_state):
    table = build_table(make_state())
    assert [column.header for column in table.columns] == ["Property", "Main", "Zone2", "Zone3"]
    assert table.row_count == 4


async def test_build_table_selected_zones(make_state):
    table = build_table(make_state(), [Zone.ZONE4])
    assert [column.header for column in table.columns] == ["Property", "Zone4"]


async def test_build_table_values(make_state):
    state = make_state()
    _populate(state)
    text = _render(build_table(state))
    assert "max volume 86" in text
    assert "50.5" in text
    assert "CD (CD)" in text
    assert "Tuner (TUNER)" in text


async def test_print_state(make_state, capsys):
    state = make_state()
    _populate(state)
    print_state(state)
    out = capsys.readouterr().out
    assert "Power" in out
    assert "Volume" in out
