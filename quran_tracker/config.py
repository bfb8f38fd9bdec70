# quran_tracker/config.py
import os

from dotenv import load_dotenv

from .utils import get_app_path

load_dotenv()

APP_NAME = "QuranTracker"
APP_AUTHOR = "ShadowedScroll"

# Either an http(s):// base URL or a local directory holding quran.json and
# the translation-<code>.json files.
DATA_SOURCE = os.getenv("QURAN_TRACKER_DATA_SOURCE", get_app_path("data"))
LOG_LEVEL = os.getenv("QURAN_TRACKER_LOG_LEVEL", "WARNING")
REQUEST_TIMEOUT = int(os.getenv("QURAN_TRACKER_TIMEOUT", "10"))

QURAN_FILE = "quran.json"

DEFAULT_LANGUAGE = "en"

TRANSLATIONS = {
    "en": "English",
    "ms": "Malay (Bahasa Melayu)",
    "id": "Indonesian (Bahasa Indonesia)",
    "ur": "Urdu (اردو)",
    "tr": "Turkish (Türkçe)",
}

TRANSLATION_FILES = {code: f"translation-{code}.json" for code in TRANSLATIONS}

# Scripts that need reshaping + bidi before they reach the terminal
RTL_LANGUAGES = {"ar", "ur"}

CACHE_FILE_NAME = "quran_tracker_cache.json"
CACHE_PREFIX = "quran_cache_"
CACHE_DURATION = 24 * 60 * 60  # seconds

SETTINGS_FILE_NAME = "QuranTracker-Settings.json"

DONATION_LINK = "https://buymeacoffee.com/shadowedscroll"

PREFETCH_WORKERS = 3
