"""
Quran Tracker: read surahs with translations and keep simple reading stats.
"""

from .composer import (
    CANONICAL_OPENER,
    OPENER_TRANSLATION,
    TRANSLATION_LOADING,
    TRANSLATION_NOT_AVAILABLE,
    OpenerPolicy,
    compose,
    resolve_policy,
    verse_count,
)
from .errors import (
    ChapterNotFound,
    DataSourceFetchFailed,
    NoVersesInChapter,
    QuranTrackerError,
    SessionBusy,
    TranslationUnavailable,
)
from .models import Chapter, ComposedChapter, DisplayUnit, ReadingStats, UnitRole
from .version import VERSION

__all__ = [
    # Composer
    "compose",
    "resolve_policy",
    "verse_count",
    "OpenerPolicy",
    "CANONICAL_OPENER",
    "OPENER_TRANSLATION",
    "TRANSLATION_LOADING",
    "TRANSLATION_NOT_AVAILABLE",
    # Models
    "Chapter",
    "ComposedChapter",
    "DisplayUnit",
    "ReadingStats",
    "UnitRole",
    # Errors
    "QuranTrackerError",
    "ChapterNotFound",
    "NoVersesInChapter",
    "TranslationUnavailable",
    "DataSourceFetchFailed",
    "SessionBusy",
    "VERSION",
]
