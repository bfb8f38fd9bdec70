# quran_tracker/quran_data_handler.py
import random
import logging
from enum import Enum
from typing import Any, Dict, List, Optional

import arabic_reshaper
from bidi.algorithm import get_display

from . import config
from .composer import TRANSLATION_NOT_AVAILABLE, TranslateFn, pending_translation
from .errors import ChapterNotFound, DataSourceFetchFailed, TranslationUnavailable
from .models import Chapter, RandomVerse
from .quran_cache import QuranCache
from .quran_data_client import QuranDataClient

logger = logging.getLogger(__name__)

VerseMap = Dict[int, Dict[int, str]]


def _int_keyed(raw: Any, what: str) -> Dict[int, Any]:
    """Turn {"1": ..., "2": ...} into {1: ..., 2: ...}, dropping keys that are not numbers."""
    result = {}
    if not isinstance(raw, dict):
        return result
    for key, value in raw.items():
        try:
            result[int(key)] = value
        except (TypeError, ValueError):
            logger.warning("Skipping invalid %s key %r", what, key)
    return result


def _verses_of(entry: Any) -> Dict[int, str]:
    if not isinstance(entry, dict):
        return {}
    verses = entry.get("ayahs", entry.get("verses"))
    return {num: str(text) for num, text in _int_keyed(verses, "verse").items()}


def parse_chapter(number: int, entry: Any) -> Chapter:
    """Build a Chapter from one entry of quran.json."""
    entry = entry if isinstance(entry, dict) else {}
    return Chapter(
        number=number,
        verses=_verses_of(entry),
        opener=entry.get("bismillah", entry.get("opener")) or None,
        name=entry.get("name"),
        english=entry.get("english"),
    )


def parse_translation(raw: Any) -> VerseMap:
    """{"1": {"ayahs": {"1": "..."}}} -> {1: {1: "..."}}"""
    return {number: _verses_of(entry) for number, entry in _int_keyed(raw, "surah").items()}


class ChapterStore:
    """The surah text, loaded once per session from quran.json."""

    def __init__(self, client: QuranDataClient):
        self.client = client
        self._raw: Optional[Dict[int, Any]] = None
        self._chapters: Dict[int, Chapter] = {}

    @property
    def is_loaded(self) -> bool:
        return self._raw is not None

    def load(self) -> None:
        """Fetch quran.json if it has not been fetched yet.

        Raises:
            DataSourceFetchFailed: The file could not be fetched or parsed.
        """
        if self.is_loaded:
            return
        raw = self.client.fetch_json(config.QURAN_FILE)
        if not isinstance(raw, dict):
            raise DataSourceFetchFailed(config.QURAN_FILE, "expected an object keyed by surah number")
        self._raw = _int_keyed(raw, "surah")
        logger.info("Quran data loaded successfully (%d surahs)", len(self._raw))

    def find_chapter(self, number: int) -> Optional[Chapter]:
        self.load()
        if number not in self._raw:
            return None
        if number not in self._chapters:
            self._chapters[number] = parse_chapter(number, self._raw[number])
        return self._chapters[number]

    def get_chapter(self, number: int) -> Chapter:
        chapter = self.find_chapter(number)
        if chapter is None:
            raise ChapterNotFound(number)
        return chapter

    def chapter_numbers(self) -> List[int]:
        self.load()
        return sorted(self._raw)

    def chapter_titles(self) -> Dict[int, str]:
        """{number: "N. English name"} for the surah picker, "Surah N" when unnamed."""
        titles = {}
        for number in self.chapter_numbers():
            entry = self._raw[number] if isinstance(self._raw[number], dict) else {}
            english = entry.get("english")
            titles[number] = f"{number}. {english}" if english else f"Surah {number}"
        return titles


class TranslationStatus(Enum):
    PENDING = "pending"
    LOADED = "loaded"
    FAILED = "failed"


class TranslationStore:
    """Translation sets, fetched lazily per language and kept in the 24h cache."""

    def __init__(self, client: QuranDataClient, cache: QuranCache):
        self.client = client
        self.cache = cache
        self._sets: Dict[str, Optional[VerseMap]] = {}
        self._status: Dict[str, TranslationStatus] = {}

    @staticmethod
    def cache_key(language: str) -> str:
        return f"translation_{language}"

    def status(self, language: str) -> Optional[TranslationStatus]:
        return self._status.get(language)

    def is_loaded(self, language: str) -> bool:
        return self._status.get(language) is TranslationStatus.LOADED

    def mark_pending(self, language: str) -> None:
        self._status[language] = TranslationStatus.PENDING

    def load(self, language: str) -> VerseMap:
        """Load a translation set from cache, or fetch it and cache it.

        On failure the set is recorded as None so lookups degrade to the
        placeholder, and TranslationUnavailable is raised for the caller to report.
        """
        if language not in config.TRANSLATION_FILES:
            self._sets[language] = None
            self._status[language] = TranslationStatus.FAILED
            raise TranslationUnavailable(language, "unknown language code")

        self.mark_pending(language)
        cached = self.cache.load(self.cache_key(language))
        if cached:
            logger.debug("Translation %s served from cache", language)
            raw = cached
        else:
            try:
                raw = self.client.fetch_json(config.TRANSLATION_FILES[language])
            except DataSourceFetchFailed as e:
                logger.warning("Translation load failed (%s): %s", language, e)
                self._sets[language] = None
                self._status[language] = TranslationStatus.FAILED
                raise TranslationUnavailable(language, e.reason) from e
            self.cache.save(self.cache_key(language), raw)

        translations = parse_translation(raw)
        self._sets[language] = translations
        self._status[language] = TranslationStatus.LOADED
        return translations

    def prefetch(self, languages=None, show_progress: bool = True) -> List[str]:
        """Download translation sets into the cache and memory. Returns the languages that failed.

        Sets not loaded yet are marked pending for the duration of the download.
        """
        languages = list(languages or config.TRANSLATION_FILES)
        files = {config.TRANSLATION_FILES[lang]: lang for lang in languages if lang in config.TRANSLATION_FILES}
        waiting = [lang for lang in files.values() if not self.is_loaded(lang)]
        for language in waiting:
            self.mark_pending(language)

        try:
            fetched = self.client.fetch_many(files, show_progress=show_progress)
            for file_name, raw in fetched.items():
                language = files[file_name]
                self.cache.save(self.cache_key(language), raw)
                self._sets[language] = parse_translation(raw)
                self._status[language] = TranslationStatus.LOADED
        finally:
            for language in waiting:
                if self._status.get(language) is TranslationStatus.PENDING:
                    self._sets[language] = None
                    self._status[language] = TranslationStatus.FAILED
        return sorted(lang for name, lang in files.items() if name not in fetched)

    def get_verse_translation(self, chapter_number: int, verse_number: int, language: str) -> Optional[str]:
        translations = self._sets.get(language)
        if not translations:
            return None
        return translations.get(chapter_number, {}).get(verse_number)

    def translator(self, language: str) -> TranslateFn:
        """Lookup to hand to the composer for ``language``."""
        if self._status.get(language) is TranslationStatus.PENDING:
            return pending_translation
        return self.get_verse_translation


class QuranDataHandler:
    """Ties together the surah text, translations and terminal typography."""

    def __init__(self, client: Optional[QuranDataClient] = None, cache: Optional[QuranCache] = None):
        self.client = client or QuranDataClient()
        self.cache = cache or QuranCache()
        self.chapters = ChapterStore(self.client)
        self.translations = TranslationStore(self.client, self.cache)
        self.arabic_reversed = False

    def toggle_arabic_reversal(self) -> bool:
        self.arabic_reversed = not self.arabic_reversed
        return self.arabic_reversed

    def fix_arabic_text(self, text: str) -> str:
        """Reshapes and applies BiDi algorithm, optionally reversing for display."""
        if not text:
            return ""
        try:
            bidi_text = str(get_display(arabic_reshaper.reshape(text)))
        except (ValueError, KeyError, IndexError) as e:
            logger.warning("Error processing Arabic text (%r...): %s", text[:20], e)
            return text
        if self.arabic_reversed:
            return bidi_text[::-1]
        return bidi_text

    def format_for_language(self, text: str, language: str) -> str:
        """Right-to-left scripts get reshaped; everything else is left alone."""
        if language in config.RTL_LANGUAGES:
            return self.fix_arabic_text(text)
        return text

    def random_verse(self, language: str, rng: Optional[random.Random] = None) -> RandomVerse:
        """Pick any verse of any surah, with its translation."""
        rng = rng or random.Random()
        numbers = [n for n in self.chapters.chapter_numbers() if self.chapters.get_chapter(n).verses]
        if not numbers:
            raise DataSourceFetchFailed(config.QURAN_FILE, "no ayahs found")
        chapter = self.chapters.get_chapter(rng.choice(numbers))
        verse_number = rng.choice(sorted(chapter.verses))
        translation = self.translations.get_verse_translation(chapter.number, verse_number, language)
        name = chapter.english or f"Surah {chapter.number}"
        return RandomVerse(
            chapter_number=chapter.number,
            verse_number=verse_number,
            text=chapter.verses[verse_number],
            translation=translation or TRANSLATION_NOT_AVAILABLE,
            reference=f"{name} ({chapter.number}:{verse_number})",
        )
