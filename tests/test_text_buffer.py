from __future__ import annotations

import pytest

from bibliotheca.buffer import OutOfRange, Selection, TextBuffer


def test_replace_clamps_caret_to_new_length() -> None:
    buffer = TextBuffer("hello world")
    buffer.set_caret(11)

    buffer.replace("hi")

    assert buffer.content == "hi"
    assert buffer.caret == 2


def test_replace_keeps_caret_when_still_valid() -> None:
    buffer = TextBuffer("hello")
    buffer.set_caret(3)

    buffer.replace("hello world")

    assert buffer.caret == 3


def test_insert_moves_caret_after_inserted_text() -> None:
    buffer = TextBuffer("helloworld")

    buffer.insert_at(5, ", ")

    assert buffer.content == "hello, world"
    assert buffer.caret == 7


def test_insert_at_end_is_allowed() -> None:
    buffer = TextBuffer("abc")

    buffer.insert_at(3, "d")

    assert buffer.content == "abcd"
    assert buffer.caret == 4


def test_delete_range_moves_caret_to_start() -> None:
    buffer = TextBuffer("hello world")
    buffer.set_caret(11)

    removed = buffer.delete_range(5, 11)

    assert removed == " world"
    assert buffer.content == "hello"
    assert buffer.caret == 5


def test_text_in_range_is_pure() -> None:
    buffer = TextBuffer("hello world")
    version = buffer.version

    assert buffer.text_in_range(6, 11) == "world"
    assert buffer.text_in_range(3, 3) == ""
    assert buffer.version == version


@pytest.mark.parametrize("offset", [-1, 4, 100])
def test_insert_out_of_range_leaves_buffer_untouched(offset: int) -> None:
    buffer = TextBuffer("abc")
    buffer.set_caret(1)

    with pytest.raises(OutOfRange) as info:
        buffer.insert_at(offset, "x")

    assert info.value.offset == offset
    assert info.value.length == 3
    assert buffer.content == "abc"
    assert buffer.caret == 1
    assert buffer.version == 0


@pytest.mark.parametrize("start,end", [(-1, 2), (2, 1), (0, 4), (4, 4)])
def test_delete_out_of_range_leaves_buffer_untouched(start: int, end: int) -> None:
    buffer = TextBuffer("abc")

    with pytest.raises(OutOfRange):
        buffer.delete_range(start, end)

    assert buffer.content == "abc"
    assert buffer.version == 0


def test_text_in_range_checks_bounds() -> None:
    buffer = TextBuffer("abc")

    with pytest.raises(OutOfRange):
        buffer.text_in_range(1, 5)


def test_set_caret_rejects_offsets_past_the_end() -> None:
    buffer = TextBuffer("abc")

    with pytest.raises(OutOfRange):
        buffer.set_caret(4)
    assert buffer.caret == 0


def test_out_of_range_is_an_index_error() -> None:
    buffer = TextBuffer("")

    with pytest.raises(IndexError):
        buffer.insert_at(1, "x")


def test_mirror_reflects_content_caret_and_version() -> None:
    buffer = TextBuffer("abc")
    buffer.insert_at(3, "def")

    mirror = buffer.mirror(attributes={"title": "New File"})

    assert mirror.text == "abcdef"
    assert mirror.caret == 6
    assert mirror.version == 1
    assert mirror.attributes == {"title": "New File"}


def test_selection_helpers() -> None:
    assert Selection.between(6, 2) == Selection(2, 6)
    assert Selection.caret(4).is_empty
    assert len(Selection(1, 5)) == 4
    assert TextBuffer("hello").selected_text(Selection(1, 3)) == "el"
