from __future__ import annotations

import random

import pytest

from tickconsole.buffers import TextEditBuffer


def test_add_char_inserts_at_cursor() -> None:
    buf = TextEditBuffer(10)
    for ch in "held":
        buf.add_char(ch)
    buf.move_cursor(left=True)
    buf.add_char("l")
    assert buf.text == "helld"
    assert buf.cursor == 4


def test_add_char_at_cap_is_noop() -> None:
    buf = TextEditBuffer(3)
    assert all(buf.add_char(ch) for ch in "abc")
    buf.move_cursor(left=True)

    assert buf.add_char("d") is False
    assert buf.text == "abc"
    assert buf.cursor == 2


def test_backspace_at_start_is_noop() -> None:
    buf = TextEditBuffer(5)
    buf.add_char("x")
    buf.move_cursor(left=True)
    assert buf.backspace() is False
    assert buf.text == "x"
    assert buf.cursor == 0


def test_backspace_removes_char_before_cursor() -> None:
    buf = TextEditBuffer(5)
    buf.set_text("abc")
    buf.move_cursor(left=True)
    assert buf.backspace() is True
    assert buf.text == "ac"
    assert buf.cursor == 1


def test_delete_removes_char_under_cursor() -> None:
    buf = TextEditBuffer(5)
    buf.set_text("abc")
    buf.home()
    assert buf.delete() is True
    assert buf.text == "bc"
    buf.end()
    assert buf.delete() is False


def test_move_cursor_is_clamped() -> None:
    buf = TextEditBuffer(5)
    buf.move_cursor(left=True)
    assert buf.cursor == 0
    buf.set_text("ab")
    buf.move_cursor(left=False)
    assert buf.cursor == 2


def test_set_text_truncates_and_take_clears() -> None:
    buf = TextEditBuffer(4, prefix="] ")
    buf.set_text("abcdef")
    assert buf.text == "abcd"
    assert buf.display() == "] abcd"
    assert buf.take() == "abcd"
    assert buf.text == ""
    assert buf.cursor == 0


def test_add_char_rejects_multiple_characters() -> None:
    with pytest.raises(ValueError):
        TextEditBuffer(4).add_char("ab")


def test_random_edits_keep_invariants() -> None:
    rng = random.Random(1234)
    buf = TextEditBuffer(16)
    for _ in range(2000):
        op = rng.randrange(5)
        if op == 0:
            buf.add_char(rng.choice("abc xyz"))
        elif op == 1:
            buf.backspace()
        elif op == 2:
            buf.delete()
        else:
            buf.move_cursor(left=op == 3)
        assert 0 <= buf.cursor <= len(buf.text) <= 16
