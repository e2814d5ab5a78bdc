"""Text normalization and token helpers shared by every analyzer.

All keyword matching in the package goes through :func:`normalize_text` so
that ``"botão"`` and ``"botao"`` (or ``"Formulário"`` and ``"formulario"``)
are treated as the same word.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterable

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")
_DASH_INVALID = re.compile(r"[^a-z0-9\s-]")
_DASH_RUNS = re.compile(r"-+")

STOP_WORDS: frozenset[str] = frozenset({
    "que", "para", "com", "uma", "um",
    "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
})

# Naming drops auxiliary verbs and determiners too.
EXTENDED_STOP_WORDS: frozenset[str] = STOP_WORDS | frozenset({
    "a", "an", "as", "are", "was", "were", "been", "be", "have", "has", "had",
    "do", "does", "did", "will", "would", "could", "should", "may", "might",
    "must", "can", "this", "that", "these", "those",
})


def normalize_text(text: str) -> str:
    """Normalize free text for keyword comparison.

    Lowercases, strips diacritics (NFD decomposition, combining marks
    removed), replaces punctuation with spaces and collapses whitespace.

    Examples::

        normalize_text("Um Botão, reutilizável!") -> "um botao reutilizavel"
        normalize_text("  ") -> ""
    """
    decomposed = unicodedata.normalize("NFD", text.lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    spaced = _NON_WORD.sub(" ", stripped)
    return _WHITESPACE.sub(" ", spaced).strip()


def tokenize(text: str) -> list[str]:
    """Return the whitespace tokens of the normalized *text*."""
    return normalize_text(text).split()


def is_stop_word(word: str, stop_words: frozenset[str] = STOP_WORDS) -> bool:
    return word.lower() in stop_words


def meaningful_words(text: str) -> list[str]:
    """Tokens longer than three characters that are not stop words."""
    return [w for w in tokenize(text) if len(w) > 3 and not is_stop_word(w)]


def contains_any(normalized: str, terms: Iterable[str]) -> bool:
    """Return ``True`` if any normalized term is a substring of *normalized*.

    *normalized* must already be the output of :func:`normalize_text`.
    """
    return any(normalize_text(term) in normalized for term in terms)


def to_dash_case(text: str) -> str:
    """Convert a concept or phrase to dash-case.

    Examples::

        to_dash_case("Input Field") -> "input-field"
        to_dash_case("--weird__name!") -> "weirdname"
    """
    result = _DASH_INVALID.sub("", text.lower())
    result = _WHITESPACE.sub("-", result)
    result = _DASH_RUNS.sub("-", result)
    return result.strip("-")


def to_pascal_case(text: str) -> str:
    """Convert a dash or space separated phrase to PascalCase."""
    words = re.split(r"[-\s]+", text)
    return "".join(w[:1].upper() + w[1:].lower() for w in words if w)
