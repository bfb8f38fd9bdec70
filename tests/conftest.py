import os
import json

import pytest

from quran_tracker.composer import CANONICAL_OPENER
from quran_tracker.quran_cache import QuranCache
from quran_tracker.quran_data_client import QuranDataClient
from quran_tracker.quran_data_handler import QuranDataHandler
from quran_tracker.settings_manager import SettingsManager


def build_quran_payload() -> dict:
    return {
        "1": {
            "english": "Al-Fatihah",
            "name": "الفاتحة",
            "bismillah": CANONICAL_OPENER,
            "ayahs": {str(n): f"fatihah-{n}" for n in range(1, 8)},
        },
        "2": {
            "english": "Al-Baqarah",
            "name": "البقرة",
            "ayahs": {
                "1": f"{CANONICAL_OPENER} الٓمٓ",
                **{str(n): f"baqarah-{n}" for n in range(2, 287)},
            },
        },
        "9": {
            "english": "At-Tawbah",
            "bismillah": CANONICAL_OPENER,
            "ayahs": {str(n): f"tawbah-{n}" for n in range(1, 130)},
        },
        "50": {"ayahs": {}},
        "112": {
            "english": "Al-Ikhlas",
            "ayahs": {"1": "قُلْ هُوَ ٱللَّهُ أَحَدٌ", "2": "ٱللَّهُ ٱلصَّمَدُ", "3": "لَمْ يَلِدْ وَلَمْ يُولَدْ"},
        },
    }


def build_translation_payload(prefix: str = "en") -> dict:
    return {
        "1": {"ayahs": {str(n): f"{prefix} fatihah {n}" for n in range(1, 8)}},
        "2": {"ayahs": {"1": f"{prefix} baqarah 1", "2": f"{prefix} baqarah 2"}},
        "112": {"ayahs": {"1": f"{prefix} ikhlas 1", "2": f"{prefix} ikhlas 2"}},
    }


@pytest.fixture
def data_dir(tmp_path):
    directory = tmp_path / "data"
    directory.mkdir()
    (directory / "quran.json").write_text(json.dumps(build_quran_payload(), ensure_ascii=False), encoding="utf-8")
    (directory / "translation-en.json").write_text(json.dumps(build_translation_payload("en")), encoding="utf-8")
    (directory / "translation-tr.json").write_text(json.dumps(build_translation_payload("tr")), encoding="utf-8")
    return directory


@pytest.fixture
def cache(tmp_path):
    return QuranCache(cache_dir=str(tmp_path / "cache"))


@pytest.fixture
def data_handler(data_dir, cache):
    return QuranDataHandler(client=QuranDataClient(source=str(data_dir)), cache=cache)


@pytest.fixture
def settings(tmp_path):
    return SettingsManager(preferences_file=os.path.join(str(tmp_path), "config", "settings.json"))
