"""Language/variant classification of track descriptions.

Each track's language and free-text title are turned into a label by an
ordered table of rules. The first rule that returns a label wins.
"""

import re
from typing import Callable, Optional

from releasenfo.models.label import (
    FallbackLabel,
    Label,
    PlainLabel,
    QualifiedLabel,
    VariantLabel,
)
from releasenfo.models.track import TrackRecord

Rule = Callable[[str, str], Optional[Label]]

NORWEGIAN_VARIANTS = [
    ("Bokmal", re.compile(r"Bokmal|Bokmål")),
    ("Nynorsk", re.compile(r"Nynorsk")),
]

CHINESE_VARIANTS = [
    ("Simplified", re.compile(r"Simplified|简体|简")),
    ("Traditional", re.compile(r"Traditional|繁體|繁")),
    ("Cantonese", re.compile(r"Cantonese|廣東話|粤语")),
]

# Languages for which accessibility markers are recognized
MARKER_LANGUAGES = re.compile(r"ENGLISH|ITALIAN|FRENCH|SPANISH")

# Checked in this order; value is the rendered marker
ACCESSIBILITY_MARKERS = {
    "SDH": "SDH",
    "CC": "CC",
    "FORCED": "Forced",
    "BRITISH": "British",
}

ASCII_PARENTHETICAL = re.compile(r"\(([^)]+)\)")
FULLWIDTH_PARENTHETICAL = re.compile(r"（([^）]+)）")


def _marker_pattern(marker: str) -> re.Pattern:
    return re.compile(rf"(?:^|\s|\(|\[){marker}(?:\s|\)|\]|$)")


_MARKER_PATTERNS = [
    (_marker_pattern(marker), rendered)
    for marker, rendered in ACCESSIBILITY_MARKERS.items()
]


def _untitled(language: str, title: str) -> Optional[Label]:
    if not title:
        return PlainLabel(language)
    return None


def _norwegian_variant(language: str, title: str) -> Optional[Label]:
    if language != "Norwegian":
        return None
    for qualifier, pattern in NORWEGIAN_VARIANTS:
        if pattern.search(title):
            return QualifiedLabel(language, qualifier)
    return None


def _chinese_variant(language: str, title: str) -> Optional[Label]:
    if language != "Chinese":
        return None
    for marker, pattern in CHINESE_VARIANTS:
        if pattern.search(title):
            return VariantLabel(language, marker)
    return None


def _accessibility_marker(language: str, title: str) -> Optional[Label]:
    if not MARKER_LANGUAGES.search(language.upper()):
        return None
    upper_title = title.upper()
    for pattern, rendered in _MARKER_PATTERNS:
        if pattern.search(upper_title):
            return VariantLabel(language, rendered)
    return None


def _ascii_parenthetical(language: str, title: str) -> Optional[Label]:
    if match := ASCII_PARENTHETICAL.search(title):
        return VariantLabel(language, match.group(1))
    return None


def _fullwidth_parenthetical(language: str, title: str) -> Optional[Label]:
    if match := FULLWIDTH_PARENTHETICAL.search(title):
        return VariantLabel(language, match.group(1))
    return None


def _plain(language: str, title: str) -> Optional[Label]:
    return PlainLabel(language)


# Priority order, first match wins
RULES: list[tuple[str, Rule]] = [
    ("untitled", _untitled),
    ("norwegian_variant", _norwegian_variant),
    ("chinese_variant", _chinese_variant),
    ("accessibility_marker", _accessibility_marker),
    ("ascii_parenthetical", _ascii_parenthetical),
    ("fullwidth_parenthetical", _fullwidth_parenthetical),
    ("plain", _plain),
]


def classify_track(language: str, title: str) -> Label:
    """Classify a track's language and title into a label.

    Never raises: every input ends in a label, at worst the first token of
    the raw descriptor or ``Unknown`` when both fields are empty.

    Args:
        language: Language name as reported by the probe (may be empty)
        title: Track title as reported by the probe (may be empty)

    Returns:
        Label for the track
    """
    record = TrackRecord(language=(language or "").strip(), title=(title or "").strip())
    raw = record.raw_descriptor

    if not record.language:
        tokens = raw.split()
        return FallbackLabel(tokens[0] if tokens else "Unknown")

    # Regional names ("Chinese (CN)", "English (US)") keep only the base
    # name as language; the region leads the title
    parts = raw.split(maxsplit=1)
    language = parts[0]
    title = parts[1] if len(parts) > 1 else ""

    for _name, rule in RULES:
        if (label := rule(language, title)) is not None:
            return label

    # Unreachable, the last rule always matches
    return PlainLabel(language)


def classify(language: str, title: str) -> str:
    """Classify a track and render its label to text."""
    return classify_track(language, title).render()
