from __future__ import annotations

from bodyparser.parser.normalize import (
    NORMALIZERS,
    collapse_interior_whitespace,
    collapse_space_before_punctuation,
    fold_nbsp,
    fold_thin_spaces,
    normalize,
    trim,
)


def test_fold_nbsp_and_thin_spaces() -> None:
    assert fold_nbsp("a\u00a0b") == "a b"
    assert fold_thin_spaces("a\u2009b\u202fc\u2005d") == "a b c d"


def test_space_before_sentence_punctuation_is_removed() -> None:
    assert collapse_space_before_punctuation("The end   .") == "The end."
    assert collapse_space_before_punctuation("Really ?") == "Really?"
    assert collapse_space_before_punctuation("Wow !") == "Wow!"
    assert collapse_space_before_punctuation("a , b") == "a , b"


def test_interior_whitespace_collapses_but_edges_are_kept() -> None:
    assert collapse_interior_whitespace("a   b \t c") == "a b c"
    assert collapse_interior_whitespace("  a  b  ") == "  a b  "


def test_normalize_applies_every_step_in_order() -> None:
    assert normalize("  Hello\u00a0\u00a0  world  . ") == "Hello world."
    assert normalize("") == ""
    assert NORMALIZERS[-1] is trim


def test_normalize_handles_long_whitespace_runs() -> None:
    text = "word" + " " * 50000 + "x" + " " * 50000
    assert normalize(text) == "word x"
