"""Tests for phrase to letter-set extraction."""

import pytest


class TestExtractLetters:
    """Tests for extract_letters."""

    def test_clarity_and_focus(self):
        """Vowels are dropped and repeated consonants keep their first position."""
        from sigilforge.io.load_phrase import extract_letters

        letter_set = extract_letters("clarity and focus")

        assert letter_set.letters == ("c", "l", "r", "t", "y", "n", "d", "f", "s")
        assert letter_set.numbers == (3, 12, 18, 20, 25, 14, 4, 6, 19)

    def test_case_and_whitespace_ignored(self):
        """Upper case and extra whitespace give the same letter set."""
        from sigilforge.io.load_phrase import extract_letters

        assert extract_letters("  CLARITY   and\tFocus ") == extract_letters("clarity and focus")

    def test_non_letters_dropped(self):
        """Digits and punctuation never become letters."""
        from sigilforge.io.load_phrase import extract_letters

        letter_set = extract_letters("Hello, World 123")

        assert letter_set.letters == ("h", "l", "w", "r", "d")
        assert letter_set.numbers == (8, 12, 23, 18, 4)

    def test_only_vowels(self):
        """A phrase of vowels has no letters."""
        from sigilforge.io.load_phrase import extract_letters

        assert len(extract_letters("aeiou a e")) == 0
        assert len(extract_letters("")) == 0

    def test_y_is_a_consonant(self):
        """Only a, e, i, o and u are removed."""
        from sigilforge.io.load_phrase import extract_letters

        assert extract_letters("yay").letters == ("y",)


class TestLetterSet:
    """Tests for the LetterSet model."""

    def test_mismatched_lengths_rejected(self):
        """letters and numbers must be parallel."""
        from sigilforge.models import LetterSet

        with pytest.raises(ValueError):
            LetterSet(letters=("a", "b"), numbers=(1,))

    def test_len(self, clarity_letters):
        """len() counts letters."""
        assert len(clarity_letters) == 9


class TestValidatePhraseInput:
    """Tests for phrase input validation."""

    def test_valid_phrase(self):
        from sigilforge.io.load_phrase import validate_phrase_input

        assert validate_phrase_input("clarity and focus") == []

    def test_missing_phrase(self):
        from sigilforge.io.load_phrase import validate_phrase_input

        assert validate_phrase_input(None)

    def test_wrong_type(self):
        from sigilforge.io.load_phrase import validate_phrase_input

        errors = validate_phrase_input(42)
        assert len(errors) == 1
        assert "string" in errors[0]

    def test_too_long(self):
        from sigilforge.io.load_phrase import MAX_PHRASE_LENGTH, validate_phrase_input

        errors = validate_phrase_input("b" * (MAX_PHRASE_LENGTH + 1))
        assert len(errors) == 1
        assert "too long" in errors[0]
