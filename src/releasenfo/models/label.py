"""Classified track labels.

Classification yields one of these tagged values; rendering them to text is
kept separate so each rule can be tested on its own.
"""

from dataclasses import dataclass
from typing import Union


def capitalize_first(text: str) -> str:
    """Uppercase the first character, leave the rest as reported."""
    return text[:1].upper() + text[1:]


@dataclass(frozen=True)
class PlainLabel:
    """Language without any detected variant."""

    language: str

    def render(self) -> str:
        return capitalize_first(self.language)


@dataclass(frozen=True)
class VariantLabel:
    """Language with a parenthesized variant, e.g. ``English (SDH)``."""

    language: str
    marker: str

    def render(self) -> str:
        return f"{capitalize_first(self.language)} ({self.marker})"


@dataclass(frozen=True)
class QualifiedLabel:
    """Language followed by a bare qualifier, e.g. ``Norwegian Bokmal``."""

    language: str
    qualifier: str

    def render(self) -> str:
        return f"{capitalize_first(self.language)} {self.qualifier}"


@dataclass(frozen=True)
class FallbackLabel:
    """Raw token used verbatim when no language is available."""

    token: str

    def render(self) -> str:
        return self.token


Label = Union[PlainLabel, VariantLabel, QualifiedLabel, FallbackLabel]
