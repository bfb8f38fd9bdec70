# quran_tracker/trivia.py
import random
from typing import Optional, Sequence

TRIVIA_FACTS = [
    "The Quran contains exactly 114 surahs (chapters).",
    "Surah Al-Fatihah is the first chapter and is recited in every rak'ah of prayer.",
    "The Quran was revealed over 23 years: 13 years in Mecca and 10 years in Medina.",
    "Bismillah appears at the beginning of every surah except Surah At-Tawbah.",
    "Surah Al-Baqarah is the longest surah with 286 verses.",
    "Surah Al-Kawthar is the shortest surah with only 3 verses.",
    "There are 30 juz (parts) in the Quran.",
    "The Quran mentions 25 prophets by name.",
    "Surah Yusuf is the only surah that narrates a complete story.",
    "The Quran has been preserved without any change since its revelation.",
]


class Trivia:
    def __init__(self, facts: Sequence[str] = TRIVIA_FACTS, rng: Optional[random.Random] = None):
        if not facts:
            raise ValueError("At least one trivia fact is required.")
        self.facts = list(facts)
        self._rng = rng or random.Random()
        self.index = self._rng.randrange(len(self.facts))

    @property
    def current(self) -> str:
        return self.facts[self.index]

    def advance(self) -> str:
        """Move to a different random fact (the same one only if there is just one)."""
        if len(self.facts) > 1:
            new_index = self.index
            while new_index == self.index:
                new_index = self._rng.randrange(len(self.facts))
            self.index = new_index
        return self.current
