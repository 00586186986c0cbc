"""
Phrase loading for SigilForge.

Turns free text into the ordered set of consonants a sigil is built from.
"""

import re

from sigilforge.models import LetterSet
from sigilforge.tracer import get_tracer, trace


VOWELS = re.compile(r"[aeiou]")
MAX_PHRASE_LENGTH = 2000


@trace(label="extract_letters")
def extract_letters(text):
    """
    Extract the letter set of a phrase.

    Lower-cases, drops vowels word by word, keeps the first occurrence of
    each remaining a-z character and maps it to its alphabet position (a=1).
    """
    tracer = get_tracer()

    words = text.lower().split()
    consonants = "".join(VOWELS.sub("", w) for w in words)

    letters = []
    seen = set()
    for ch in consonants:
        if ch in seen or not ("a" <= ch <= "z"):
            continue
        seen.add(ch)
        letters.append(ch)

    numbers = [ord(ch) - ord("a") + 1 for ch in letters]

    tracer.event(f"Extracted {len(letters)} letters", letters="".join(letters))

    return LetterSet(letters=tuple(letters), numbers=tuple(numbers))


def validate_phrase_input(text):
    """
    Validate a phrase before processing.

    Returns list of error messages (empty if valid).
    """
    errors = []

    if text is None:
        errors.append("No phrase provided")
        return errors

    if not isinstance(text, str):
        errors.append(f"Phrase must be a string, got {type(text).__name__}")
        return errors

    if len(text) > MAX_PHRASE_LENGTH:
        errors.append(f"Phrase too long: {len(text)} characters (max {MAX_PHRASE_LENGTH})")

    return errors
