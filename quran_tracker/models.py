# quran_tracker/models.py
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class UnitRole(str, Enum):
    OPENER = "opener"              # Detached opener (Surah 1)
    SPLIT_OPENER = "split_opener"  # Opener cut off the front of verse 1
    REMAINDER = "remainder"        # What is left of verse 1 after the split
    VERSE = "verse"


class Chapter(BaseModel):
    """A surah as loaded from the static data file."""
    model_config = ConfigDict(frozen=True)

    number: int = Field(ge=1)
    verses: Dict[int, str] = Field(default_factory=dict)  # verse number -> Arabic text
    opener: Optional[str] = None   # Explicit Bismillah, when the data carries one
    name: Optional[str] = None     # Arabic name (optional in the data)
    english: Optional[str] = None  # English name (optional in the data)

    @property
    def title(self) -> str:
        if self.english:
            return f"{self.english} ({self.name or ''})"
        return f"Surah {self.number}"


class DisplayUnit(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: UnitRole
    verse_number: Optional[int] = None  # None for opener units
    text: str
    translation: str
    counted: bool = True  # Opener units are decorative and never counted


class ComposedChapter(BaseModel):
    model_config = ConfigDict(frozen=True)

    chapter_number: int
    units: List[DisplayUnit]
    verse_count: int


class ReadingStats(BaseModel):
    surahs_read: int = 0
    time_spent: int = 0  # seconds
    # Carried for display only; nothing computes a streak yet.
    day_streak: int = 0


class RandomVerse(BaseModel):
    chapter_number: int
    verse_number: int
    text: str
    translation: str
    reference: str
