"""
Query Vocabulary - synonym table and marker words.

Holds everything the interpreter needs to read a query:
1. topics - synonym groups used for term expansion
2. hadith_markers - words that route a query to the Hadith collection
3. quran_markers - words that route a query to the Quran collection
4. meaning_cues - words that mark a query as a request for meaning

The vocabulary is immutable and built once at startup, either from the
built-in defaults or from a YAML file with the same four keys. Any key
missing from the YAML falls back to its default.

Pattern: Configuration-Driven Filter
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

import yaml  # type: ignore[import-untyped]

from scripture_qa.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


# =============================================================================
# Defaults
# =============================================================================

DEFAULT_TOPICS: Final[dict[str, tuple[str, ...]]] = {
    "prayer": ("prayer", "salah", "salat", "namaz", "worship", "prostration", "ruku"),
    "charity": ("charity", "sadaqah", "zakat", "giving", "poor", "needy", "alms"),
    "patience": ("patience", "sabr", "perseverance", "endurance", "steadfast"),
    "forgiveness": ("forgiveness", "pardon", "mercy", "repentance", "tawbah", "repent"),
    "paradise": ("paradise", "jannah", "heaven", "garden", "eternal"),
    "hell": ("hell", "jahannam", "hellfire", "punishment"),
    "fasting": ("fasting", "sawm", "ramadan", "fast"),
    "hajj": ("hajj", "pilgrimage", "mecca", "kaaba", "umrah"),
    "faith": ("faith", "iman", "belief", "believe", "believer"),
    "righteousness": ("righteousness", "righteous", "good", "virtue", "piety"),
    "sin": ("sin", "evil", "wrong", "transgression", "disobedience"),
    "prophet": ("prophet", "messenger", "muhammad", "prophets"),
    "allah": ("allah", "god", "lord", "creator", "sustainer"),
    "quran": ("quran", "book", "scripture", "revelation"),
    "family": ("family", "parents", "mother", "father", "children", "spouse"),
    "death": ("death", "die", "grave", "hereafter", "afterlife"),
    "knowledge": ("knowledge", "learn", "wisdom", "understanding", "scholar"),
    "heart": ("heart", "soul", "purification", "intention", "sincerity"),
    "gratitude": ("gratitude", "thankful", "thanks", "grateful", "appreciate"),
    "trust": ("trust", "tawakkul", "reliance", "depend"),
}

DEFAULT_HADITH_MARKERS: Final[tuple[str, ...]] = (
    "hadith",
    "bukhari",
    "muslim",
    "tirmidhi",
    "abu dawood",
    "narrator",
)

DEFAULT_QURAN_MARKERS: Final[tuple[str, ...]] = ("quran", "surah", "verse", "ayah")

DEFAULT_MEANING_CUES: Final[tuple[str, ...]] = ("meaning", "explain", "what is", "about")

_YAML_KEYS: Final[tuple[str, ...]] = ("topics", "hadith_markers", "quran_markers", "meaning_cues")


# =============================================================================
# Data Classes
# =============================================================================


def _words(values: Iterable[Any]) -> tuple[str, ...]:
    # YAML parses bare words like "yes" as booleans; coerce back to text
    return tuple(str(value).strip().lower() for value in values if str(value).strip())


@dataclass(frozen=True, slots=True)
class QueryVocabulary:
    """Immutable vocabulary shared by every query.

    Attributes:
        topics: (topic key, synonyms) pairs in definition order.
        hadith_markers: Substrings that route a query to Hadith.
        quran_markers: Substrings that route a query to the Quran.
        meaning_cues: Substrings that mark a meaning-type query.
    """

    topics: tuple[tuple[str, tuple[str, ...]], ...]
    hadith_markers: tuple[str, ...] = DEFAULT_HADITH_MARKERS
    quran_markers: tuple[str, ...] = DEFAULT_QURAN_MARKERS
    meaning_cues: tuple[str, ...] = DEFAULT_MEANING_CUES

    @classmethod
    def from_mapping(
        cls,
        topics: Mapping[str, Iterable[Any]],
        hadith_markers: Iterable[Any] = DEFAULT_HADITH_MARKERS,
        quran_markers: Iterable[Any] = DEFAULT_QURAN_MARKERS,
        meaning_cues: Iterable[Any] = DEFAULT_MEANING_CUES,
    ) -> QueryVocabulary:
        """Build a vocabulary from plain collections, normalizing to lowercase."""
        return cls(
            topics=tuple(
                (str(key).lower(), synonyms)
                for key, values in topics.items()
                if (synonyms := _words(values))
            ),
            hadith_markers=_words(hadith_markers),
            quran_markers=_words(quran_markers),
            meaning_cues=_words(meaning_cues),
        )

    @classmethod
    def default(cls) -> QueryVocabulary:
        """The built-in vocabulary."""
        return cls.from_mapping(DEFAULT_TOPICS)

    def synonym_groups(self) -> tuple[tuple[str, ...], ...]:
        """All synonym groups, without their topic keys."""
        return tuple(synonyms for _, synonyms in self.topics)


# =============================================================================
# Loading
# =============================================================================


def _require_word_list(values: Any, name: str) -> None:
    # A bare string would otherwise be read one character at a time
    if not isinstance(values, (list, tuple)):
        raise ConfigurationError(
            f"Vocabulary '{name}' must be a list of words, got {type(values).__name__}"
        )


def load_vocabulary(path: Path | str | None = None) -> QueryVocabulary:
    """Load the vocabulary from YAML, or return the defaults when no path is given.

    Args:
        path: Path to a vocabulary YAML file.

    Returns:
        The QueryVocabulary.

    Raises:
        ConfigurationError: If the file is missing, is not valid YAML, or is
            not a mapping, or if a marker list or synonym group is not a
            list of words.
    """
    if path is None:
        return QueryVocabulary.default()

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(f"Vocabulary file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in vocabulary file: {e}") from e

    if not isinstance(config, dict):
        raise ConfigurationError(f"Vocabulary file must contain a mapping: {config_path}")

    topics = config.get("topics") or DEFAULT_TOPICS
    if not isinstance(topics, dict):
        raise ConfigurationError("Vocabulary 'topics' must map topic keys to word lists")

    unknown = sorted(set(config) - set(_YAML_KEYS))
    if unknown:
        raise ConfigurationError(f"Unknown vocabulary keys: {', '.join(unknown)}")

    for key, values in topics.items():
        _require_word_list(values, f"topics.{key}")
    for key in _YAML_KEYS[1:]:
        if config.get(key) is not None:
            _require_word_list(config[key], key)

    return QueryVocabulary.from_mapping(
        topics,
        hadith_markers=config.get("hadith_markers") or DEFAULT_HADITH_MARKERS,
        quran_markers=config.get("quran_markers") or DEFAULT_QURAN_MARKERS,
        meaning_cues=config.get("meaning_cues") or DEFAULT_MEANING_CUES,
    )
