from __future__ import annotations

import pytest

from bibliotheca.buffer import fingerprint

SAMPLES = [
    "",
    "hello world",
    "line one\nline two\n",
    "tabs\tand unicode: é中\U0001f600",
]


@pytest.mark.parametrize("content", SAMPLES)
def test_fingerprint_is_deterministic(content: str) -> None:
    assert fingerprint(content) == fingerprint(content)


@pytest.mark.parametrize("content", [s for s in SAMPLES if s])
def test_changing_any_single_character_changes_the_fingerprint(content: str) -> None:
    original = fingerprint(content)
    for index, char in enumerate(content):
        replacement = "x" if char != "x" else "y"
        mutated = content[:index] + replacement + content[index + 1 :]
        assert fingerprint(mutated) != original


def test_line_endings_are_part_of_the_fingerprint() -> None:
    assert fingerprint("a\nb") != fingerprint("a\r\nb")
    assert fingerprint("a\n") != fingerprint("a")


def test_fingerprint_is_a_base64_md5_digest() -> None:
    # md5("") = d41d8cd98f00b204e9800998ecf8427e
    assert fingerprint("") == "1B2M2Y8AsgTpgAmY7PhCfg=="
