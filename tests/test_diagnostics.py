from __future__ import annotations

import io

from kbm.parser import Anchor, DiagnosticEngine, Severity
from kbm.parser.diagnostics import RED, RESET, WHITE, excerpt_window


def _engine(**kwargs) -> tuple[DiagnosticEngine, io.StringIO]:
    sink = io.StringIO()
    return DiagnosticEngine("test.kbm", sink, **kwargs), sink


def test_render_error() -> None:
    engine, sink = _engine(color=False)
    diagnostic = engine.expected(Anchor("f -> jump 1 x", 1, 12), "number")

    assert sink.getvalue() == (
        "test.kbm:1:13: error: expected number\n"
        "f -> jump 1 x\n"
        "            ^\n"
    )
    assert str(diagnostic) == "test.kbm:1:13: error: expected number"
    assert engine.count(Severity.ERROR) == 1


def test_caret_covers_span() -> None:
    engine, sink = _engine(color=False)
    engine.invalid_key(Anchor("^!q -> foo", 3, 7, 3), "foo")

    lines = sink.getvalue().splitlines()
    assert lines[0] == "test.kbm:3:8: error: invalid key 'foo'"
    assert lines[2] == "       ^~~"


def test_caret_keeps_tabs() -> None:
    engine, sink = _engine(color=False)
    engine.invalid_key(Anchor("\tq -> foo", 1, 6, 3), "foo")
    assert sink.getvalue().splitlines()[2] == "\t     ^~~"


def test_long_line_is_clipped() -> None:
    text = "x" * 100 + "foo" + "y" * 100
    at = Anchor(text, 1, 100, 3)
    assert excerpt_window(at) == (63, 143)

    engine, sink = _engine(color=False)
    engine.invalid_key(at, "foo")
    lines = sink.getvalue().splitlines()
    assert lines[1] == "x" * 37 + "foo" + "y" * 40
    assert lines[2] == " " * 37 + "^~~"


def test_wide_span_is_never_cut() -> None:
    at = Anchor("a" * 150, 1, 0, 120)
    assert excerpt_window(at) == (0, 120)


def test_colour_only_when_enabled() -> None:
    engine, sink = _engine(color=True)
    engine.self_modified(Anchor("^ctrl -> quit", 1, 0, 5))
    out = sink.getvalue()
    assert WHITE + "test.kbm:1:1:" + RESET in out
    assert RED + "error:" + RESET in out
    assert RED + "^ctrl" + RESET in out

    engine, sink = _engine()
    engine.self_modified(Anchor("^ctrl -> quit", 1, 0, 5))
    assert "\x1b[" not in sink.getvalue()


def test_note_is_rendered_after_message() -> None:
    engine, sink = _engine(color=False)
    diagnostic = engine.unexpected_eof(Anchor("f ->", 2, 4), Anchor("f ->", 2, 0, 4))

    assert diagnostic.note is not None
    assert diagnostic.note.severity is Severity.NOTE
    assert diagnostic.note.message == "last statement here"
    assert (diagnostic.note.column, diagnostic.note.length) == (1, 4)

    out = sink.getvalue()
    assert out.index("error: unexpected EOF when parsing") < out.index("note: last statement here")


def test_warnings_and_notes_are_counted() -> None:
    engine, _ = _engine(color=False)
    engine.duplicate_modifier(Anchor("^^q", 1, 1))
    engine.truncated_literal(Anchor('"aaa"', 1, 3), 2)

    assert engine.count(Severity.NOTE) == 1
    assert engine.count(Severity.WARNING, "string literal exceeding 2 characters truncated") == 1
    assert engine.count(Severity.ERROR) == 0


def test_anchor_through() -> None:
    start = Anchor("ctrl-ctrl -> quit", 1, 0, 4)
    assert start.through(Anchor("ctrl-ctrl -> quit", 1, 5, 4)).length == 9

    other_line = Anchor("next", 2, 0, 4)
    assert start.through(other_line).length == len("ctrl-ctrl -> quit")
