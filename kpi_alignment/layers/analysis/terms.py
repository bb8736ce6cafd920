"""
Term Extraction

Reduces a definition to the set of domain nouns it mentions. Two
definitions are considered related when their term sets intersect.
"""

from ...core.vocabulary import TERM_PATTERN


class TermExtractor:
    """Whole-word, case-insensitive match against the fixed term vocabulary."""

    def __init__(self, pattern=TERM_PATTERN):
        self._pattern = pattern

    def extract(self, definition: str) -> frozenset[str]:
        if not definition:
            return frozenset()
        return frozenset(match.lower() for match in self._pattern.findall(definition))


def extract_terms(definition: str) -> frozenset[str]:
    """Extract vocabulary terms from a definition."""
    return TermExtractor().extract(definition)
