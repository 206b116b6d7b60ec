"""Regex and whitespace helpers shared by the extraction stages."""

import re
from dataclasses import dataclass

from tasknotes_nlp.models.language import LanguageConfig

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class BoundaryConfig:
    """Start/end word-boundary fragments for keyword patterns.

    Languages whose words are not reliably delimited by ``\\b`` (accented
    Latin, CJK) use whitespace or string-edge lookaround instead.
    """

    boundary: str
    end_boundary: str
    flexible: bool

    @classmethod
    def for_language(cls, language: LanguageConfig) -> "BoundaryConfig":
        if language.flexible_boundaries:
            return cls(boundary=r"(?:^|(?<=\s))", end_boundary=r"(?=\s|$)", flexible=True)
        return cls(boundary=r"\b", end_boundary=r"\b", flexible=False)

    def wrap(self, body: str) -> str:
        """Surround a pattern body with the start and end boundary."""
        return f"{self.boundary}{body}{self.end_boundary}"


def escape_and_join(words: list[str]) -> str:
    """Escape words and join them as regex alternatives, longest first.

    Longest-first ordering stops 'in progress' from losing to 'in', since
    Python's alternation takes the first alternative that matches.
    """
    unique = list(dict.fromkeys(w for w in words if w))
    unique.sort(key=len, reverse=True)
    return "|".join(re.escape(w) for w in unique)


def cleanup_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def remove_span(text: str, start: int, end: int) -> str:
    """Remove text[start:end] and tidy the whitespace left behind."""
    return cleanup_whitespace(text[:start] + " " + text[end:])


def find_bounded(text: str, needle: str) -> tuple[int, int] | None:
    """Case-insensitive search for a literal bounded by whitespace or string edges.

    Works for labels containing any characters, unlike ``\\b`` which fails on
    labels that start or end with punctuation.

    Args:
        text: Text to search
        needle: Literal to find

    Returns:
        (start, end) of the first bounded occurrence, or None
    """
    if not needle or not needle.strip():
        return None

    lower_text = text.lower()
    lower_needle = needle.lower()
    search_from = 0
    while True:
        index = lower_text.find(lower_needle, search_from)
        if index == -1:
            return None
        end = index + len(needle)
        before_ok = index == 0 or text[index - 1].isspace()
        after_ok = end == len(text) or text[end].isspace()
        if before_ok and after_ok:
            return index, end
        search_from = index + 1
