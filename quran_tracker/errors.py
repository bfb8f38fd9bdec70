# quran_tracker/errors.py


class QuranTrackerError(Exception):
    """Base exception for Quran Tracker errors"""


class ChapterNotFound(QuranTrackerError):
    def __init__(self, chapter_number):
        self.chapter_number = chapter_number
        super().__init__(f"Surah {chapter_number} not found")


class NoVersesInChapter(QuranTrackerError):
    def __init__(self, chapter_number):
        self.chapter_number = chapter_number
        super().__init__(f"Surah {chapter_number} has no verses")


class TranslationUnavailable(QuranTrackerError):
    """A translation set could not be loaded. Never fatal: lookups fall back to a placeholder."""

    def __init__(self, language: str, reason: str = ""):
        self.language = language
        self.reason = reason
        message = f"Translation '{language}' is not available"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class DataSourceFetchFailed(QuranTrackerError):
    """A static data resource could not be fetched or parsed."""

    def __init__(self, resource: str, reason: str = ""):
        self.resource = resource
        self.reason = reason
        super().__init__(f"Failed to load {resource}" + (f": {reason}" if reason else ""))


class SessionBusy(QuranTrackerError):
    """A chapter load was requested while another one is still in flight."""
