# quran_tracker/session.py
"""
Per-run reading state: open surah, translation language, stats and timer.

Loads are synchronous and run one at a time. A second chapter load while one is
still running raises SessionBusy. Switching language writes the new language
first and then loads it, so whichever switch finishes last wins. Translation
sets being prefetched in the background compose with the loading placeholder.
"""
import time
import logging
from typing import Callable, Optional

from . import config
from .composer import compose
from .errors import SessionBusy, TranslationUnavailable
from .models import ComposedChapter, ReadingStats
from .quran_data_handler import QuranDataHandler, TranslationStatus
from .trivia import Trivia

logger = logging.getLogger(__name__)


class Stopwatch:
    """Start / pause / resume / reset reading timer, counted in whole seconds."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self.running = False
        self._start_time = 0.0
        self._elapsed = 0

    @property
    def elapsed(self) -> int:
        if self.running:
            return int(self._clock() - self._start_time)
        return self._elapsed

    def start(self):
        if self.running:
            return
        # Resuming keeps the seconds already counted
        self._start_time = self._clock() - self._elapsed
        self.running = True

    def pause(self):
        if not self.running:
            return
        self._elapsed = self.elapsed
        self.running = False

    def toggle(self) -> bool:
        if self.running:
            self.pause()
        else:
            self.start()
        return self.running

    def reset(self):
        self.running = False
        self._start_time = 0.0
        self._elapsed = 0


class ReadingSession:
    def __init__(self, data_handler: QuranDataHandler, language: str = config.DEFAULT_LANGUAGE,
                 clock: Callable[[], float] = time.monotonic, trivia: Optional[Trivia] = None):
        self.data = data_handler
        self.default_language = language
        self._clock = clock
        self._trivia = trivia
        self.reset()

    def reset(self):
        """Back to a fresh session: nothing open, zeroed stats, stopped timer."""
        self.language = self.default_language
        self.current_chapter: Optional[int] = None
        self.current_composed: Optional[ComposedChapter] = None
        self.last_warning: Optional[str] = None
        self.stats = ReadingStats()
        self.stopwatch = Stopwatch(self._clock)
        self.trivia = self._trivia or Trivia()
        self._loading = False

    @property
    def is_loading(self) -> bool:
        return self._loading

    def ensure_translation(self, language: str) -> Optional[str]:
        """Load ``language`` if needed. Returns a warning message on failure.

        A set that is still downloading in the background is left alone; the
        composer shows the loading placeholder until it lands.
        """
        status = self.data.translations.status(language)
        if status in (TranslationStatus.LOADED, TranslationStatus.PENDING):
            return None
        try:
            self.data.translations.load(language)
        except TranslationUnavailable as e:
            return str(e)
        return None

    def _load_translation(self, language: str, chapter_open: bool) -> Optional[str]:
        """Load ``language``, falling back to English for an open surah."""
        self.language = language
        error = self.ensure_translation(language)
        if error is None:
            return None
        logger.warning(error)
        name = config.TRANSLATIONS.get(language, language)
        if (chapter_open and language != config.DEFAULT_LANGUAGE
                and self.ensure_translation(config.DEFAULT_LANGUAGE) is None):
            self.language = config.DEFAULT_LANGUAGE
            return f"Could not load {name} translation. Falling back to English."
        return f"Could not load {name} translation."

    def load_chapter(self, number: int) -> ComposedChapter:
        """Load and compose a surah for the current language.

        A translation that cannot be loaded does not fail the load; the reason
        is left in ``last_warning``.

        Raises:
            SessionBusy: another load is still running.
            ChapterNotFound, NoVersesInChapter, DataSourceFetchFailed: nothing is
                rendered and the stats are left alone.
        """
        if self._loading:
            raise SessionBusy("A surah is already loading, please wait.")
        self._loading = True
        self.last_warning = None
        try:
            self.data.chapters.load()
            self.last_warning = self._load_translation(self.language, chapter_open=True)
            chapter = self.data.chapters.find_chapter(number)
            composed = compose(number, chapter, self.data.translations.translator(self.language), self.language)
        finally:
            self._loading = False

        self.current_chapter = number
        self.current_composed = composed
        self.stats.surahs_read += 1
        return composed

    def recompose(self) -> Optional[ComposedChapter]:
        """Re-render the open surah for the current language without counting it as read."""
        if self.current_chapter is None:
            return None
        chapter = self.data.chapters.find_chapter(self.current_chapter)
        self.current_composed = compose(self.current_chapter, chapter,
                                        self.data.translations.translator(self.language), self.language)
        return self.current_composed

    def switch_language(self, language: str) -> Optional[str]:
        """Change the translation language.

        If the new set cannot be loaded while a surah is open, fall back to
        English when it is available. Returns a warning message, or None.
        """
        return self._load_translation(language, chapter_open=self.current_chapter is not None)

    def sync_time(self) -> int:
        """Copy the stopwatch reading into the stats."""
        self.stats.time_spent = self.stopwatch.elapsed
        return self.stats.time_spent
