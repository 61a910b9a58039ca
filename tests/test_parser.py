from __future__ import annotations

import io
from pathlib import Path

import pytest

from kbm.config import Settings
from kbm.models import Exec, HotkeyFlag, Jump, KeyCode, KeymapFlag, ModMask, Quit, SendKey
from kbm.parser import (
    ExpectedTokenError,
    InvalidKeyError,
    NumberRangeError,
    ParseError,
    ParserContext,
    SelfModifiedKeyError,
    UnexpectedEOFError,
    UnrecognizedCharacterError,
    UnterminatedStringError,
    parse_file,
    parse_string,
)


def _parse(source: str, **kwargs):
    return parse_string(source, "test.kbm", io.StringIO(), **kwargs)


def _error(source: str, error: type[ParseError]):
    sink = io.StringIO()
    with pytest.raises(error) as excinfo:
        parse_string(source, "test.kbm", sink)
    assert sink.getvalue().startswith("test.kbm:")
    return excinfo.value.diagnostic


def _binding(source: str) -> tuple[KeyCode, ModMask]:
    (hotkey,) = _parse(source).hotkeys
    return hotkey.keycode, hotkey.modmask


def test_parse_fixture() -> None:
    path = Path(__file__).with_name("test_keys.kbm")
    keymap = parse_file(path, io.StringIO())

    assert keymap.flags == KeymapFlag.ACTIVE_WINDOW
    assert keymap.windows == ["Firefox", "Terminal"]
    assert [h.describe() for h in keymap.hotkeys] == [
        "Control-Shift-Q -> quit",
        "Meta-Shift-O -> exec firefox https://example.com",
        "F -> jump 100 200",
        "Control-K -> key Shift-K norepeat",
    ]

    quit_key, exec_key, jump_key, send_key = keymap.hotkeys
    assert isinstance(quit_key.operation, Quit)
    assert exec_key.operation == Exec(argv=["firefox", "https://example.com"])
    assert jump_key.operation == Jump(dx=100, dy=200)
    assert send_key.operation == SendKey(keycode=KeyCode.K, modmask=ModMask.SHIFT)
    assert send_key.flags == HotkeyFlag.NOREPEAT


def test_parse_is_repeatable() -> None:
    path = Path(__file__).with_name("test_keys.kbm")
    assert parse_file(path, io.StringIO()) == parse_file(path, io.StringIO())


def test_hotkeys_keep_source_order() -> None:
    keys = "qwertyuiop"
    keymap = _parse("".join(f"{k} -> click\n" for k in keys))
    assert [h.position for h in keymap.hotkeys] == list(range(len(keys)))
    assert [h.keycode for h in keymap.hotkeys] == [KeyCode[k.upper()] for k in keys]


def test_empty_file() -> None:
    keymap = _parse("# nothing here\n\n")
    assert keymap.hotkeys == []
    assert not keymap.restricted


def test_modifier_prefixes_match_sigils() -> None:
    assert _binding("ctrl-q -> quit") == _binding("^q -> quit")
    assert _binding("ctrl-shift-q -> quit") == _binding("^!q -> quit")
    assert _binding("Super-alt-q -> quit") == (KeyCode.Q, ModMask.SUPER | ModMask.META)
    assert _binding("~@q -> quit") == (KeyCode.Q, ModMask.SUPER | ModMask.META)


def test_punctuation_and_digit_keys() -> None:
    assert _binding("^- -> quit") == (KeyCode.MINUS, ModMask.CTRL)
    assert _binding("ctrl-- -> quit") == (KeyCode.MINUS, ModMask.CTRL)
    assert _binding("!/ -> quit") == (KeyCode.SLASH, ModMask.SHIFT)
    assert _binding("^1 -> click") == (KeyCode.DIGIT_1, ModMask.CTRL)
    assert _binding("0 -> click") == (KeyCode.DIGIT_0, ModMask.NONE)


def test_bare_modifier_key() -> None:
    assert _binding("shift -> toggle") == (KeyCode.SHIFT, ModMask.NONE)
    assert _binding("^shift -> toggle") == (KeyCode.SHIFT, ModMask.CTRL)


def test_duplicate_modifier_is_a_note() -> None:
    sink = io.StringIO()
    keymap = parse_string("^^q -> quit", "test.kbm", sink)

    (hotkey,) = keymap.hotkeys
    assert hotkey.modmask == ModMask.CTRL
    assert sink.getvalue().count("note: duplicate modifier declaration") == 1


def test_duplicate_modifier_points_at_first_declaration() -> None:
    cases = [
        ("^ctrl-q -> quit", 2, 1),
        ("ctrl-^q -> quit", 6, 1),
        ("shift-^^q -> quit", 8, 7),
    ]
    for source, repeat_column, first_column in cases:
        sink = io.StringIO()
        parse_string(source, "test.kbm", sink)

        out = sink.getvalue()
        assert out.count("note: duplicate modifier declaration") == 1
        assert f"test.kbm:1:{repeat_column}: note: duplicate modifier declaration" in out
        assert f"test.kbm:1:{first_column}: note: first declared here" in out


def test_self_modified_key() -> None:
    diagnostic = _error("ctrl-ctrl -> quit", SelfModifiedKeyError)
    assert diagnostic.message == "key modified with itself"
    assert (diagnostic.column, diagnostic.length) == (1, 9)

    _error("^ctrl -> quit", SelfModifiedKeyError)
    _error("q -> key !shift", SelfModifiedKeyError)


def test_invalid_keys() -> None:
    assert _error("10 -> quit", InvalidKeyError).message == "invalid key '10'"
    assert _error("foo -> quit", InvalidKeyError).message == "invalid key 'foo'"
    assert _error("-> quit", InvalidKeyError).message == "invalid key '->'"
    assert _error("q -> key quit", InvalidKeyError).message == "invalid key 'quit'"
    assert _error("05 -> quit", InvalidKeyError).message == "invalid key '05'"


def test_expected_tokens() -> None:
    assert _error("q quit", ExpectedTokenError).message == "expected '->' after key"

    diagnostic = _error("q -> foo", ExpectedTokenError)
    assert diagnostic.message == "expected operation after '->'"
    assert diagnostic.column == 6

    assert _error("f -> jump 1 x", ExpectedTokenError).message == "expected number"
    assert _error("q -> exec quit", ExpectedTokenError).message == "expected string literal"
    assert _error("active_window\nq -> quit", ExpectedTokenError).line == 2


def test_unexpected_eof() -> None:
    diagnostic = _error("q -> quit\nf ->", UnexpectedEOFError)
    assert diagnostic.message == "unexpected EOF when parsing"
    assert (diagnostic.line, diagnostic.column) == (2, 5)
    assert diagnostic.note is not None
    assert diagnostic.note.message == "last statement here"
    assert (diagnostic.note.line, diagnostic.note.column, diagnostic.note.length) == (2, 1, 4)

    _error("f -> jump 1", UnexpectedEOFError)
    _error("^", UnexpectedEOFError)


def test_unterminated_exec() -> None:
    _error('q -> exec "xterm\n', UnterminatedStringError)


def test_jump_arguments() -> None:
    (hotkey,) = _parse("f -> jump -50 999999").hotkeys
    assert hotkey.operation.opargs == ((-50) & 0xFFFFFFFF) | (999999 << 32)

    (hotkey,) = _parse("f -> jump -2147483648 2147483647").hotkeys
    assert hotkey.operation == Jump(dx=-(2**31), dy=2**31 - 1)

    diagnostic = _error("f -> jump 2147483648 0", NumberRangeError)
    assert diagnostic.message == "integer literal out of range"
    assert (diagnostic.column, diagnostic.length) == (11, 10)


def test_jump_sign_must_touch_number() -> None:
    diagnostic = _error("f -> jump - 5 3", ExpectedTokenError)
    assert diagnostic.message == "expected number"
    assert diagnostic.column == 11

    _error("f -> jump -\n5 3", ExpectedTokenError)


def test_exec_arguments_and_qualifier() -> None:
    (hotkey,) = _parse('@t -> exec "xterm" "-e" "top" norepeat').hotkeys
    assert hotkey.operation.argv == ["xterm", "-e", "top"]
    assert hotkey.norepeat


def test_active_window_list() -> None:
    keymap = _parse('active_window "A" "B C"\nq -> quit')
    assert keymap.restricted
    assert keymap.windows == ["A", "B C"]


def test_active_window_only_at_top() -> None:
    _error('q -> quit\nactive_window "A"', InvalidKeyError)


def test_long_literal_is_split_into_arguments() -> None:
    sink = io.StringIO()
    keymap = parse_string('q -> exec "' + "x" * 20 + '"', "test.kbm", sink, settings=Settings(max_literal=16))

    (hotkey,) = keymap.hotkeys
    assert hotkey.operation.argv == ["x" * 15, "x" * 5]
    assert "warning: string literal exceeding 15 characters truncated" in sink.getvalue()


def test_context_is_reusable() -> None:
    with ParserContext() as context:
        first = _parse("q -> quit", context=context)
        second = _parse("q -> quit", context=context)
        assert first == second
        with pytest.raises(SelfModifiedKeyError):
            _parse("^ctrl -> quit", context=context)
        assert _parse("w -> click", context=context).hotkeys[0].keycode == KeyCode.W

    assert context.closed
    with pytest.raises(RuntimeError):
        _parse("q -> quit", context=context)


def test_undecodable_bytes_are_replaced(tmp_path) -> None:
    path = tmp_path / "latin1.kbm"
    path.write_bytes(b'# caf\xe9\nq -> exec "caf\xe9"\n')

    (hotkey,) = parse_file(path, io.StringIO()).hotkeys
    assert hotkey.operation.argv == ["caf\ufffd"]

    path.write_bytes(b"q -> quit\n\xe9 -> quit\n")
    sink = io.StringIO()
    with pytest.raises(UnrecognizedCharacterError) as excinfo:
        parse_file(path, sink)
    assert excinfo.value.diagnostic.line == 2
    assert sink.getvalue().startswith(f"{path}:2:1: error: unrecognized character")
