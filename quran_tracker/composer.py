# quran_tracker/composer.py
"""
Verse composition: turns a loaded surah into the ordered rows a reader sees.

Which opener (Bismillah) rule applies depends only on the surah number:

    Surah 1   -> the opener is always shown on its own, before verses 1-6
    Surah 9   -> never any opener
    otherwise -> split the opener off verse 1 if verse 1 starts with it

Everything here is pure. Translations come in through a lookup callable, so the
same inputs always give the same output and nothing touches the terminal.
"""
from enum import Enum
from typing import Callable, List, Optional

from .errors import ChapterNotFound, NoVersesInChapter
from .models import Chapter, ComposedChapter, DisplayUnit, UnitRole

CANONICAL_OPENER = "بِسْمِ ٱللَّهِ ٱلرَّحْمَـٰنِ ٱلرَّحِيمِ"
OPENER_TRANSLATION = "In the name of Allah, the Most Gracious, the Most Merciful"

TRANSLATION_NOT_AVAILABLE = "Translation not available"
TRANSLATION_LOADING = "Translation loading..."

AL_FATIHAH = 1
AT_TAWBAH = 9
AL_FATIHAH_VERSES = 6

# (chapter_number, verse_number, language) -> translated text or None
TranslateFn = Callable[[int, int, str], Optional[str]]


class OpenerPolicy(Enum):
    ALWAYS_SEPARATE = "always_separate"
    NEVER_PRESENT = "never_present"
    DETECT_AND_SPLIT = "detect_and_split"


_FIXED_POLICIES = {
    AL_FATIHAH: OpenerPolicy.ALWAYS_SEPARATE,
    AT_TAWBAH: OpenerPolicy.NEVER_PRESENT,
}


def resolve_policy(chapter_number: int) -> OpenerPolicy:
    return _FIXED_POLICIES.get(chapter_number, OpenerPolicy.DETECT_AND_SPLIT)


def _translated(translate: TranslateFn, chapter_number: int, verse_number: int, language: str) -> str:
    text = translate(chapter_number, verse_number, language)
    return text if text else TRANSLATION_NOT_AVAILABLE


def _verse_unit(translate, chapter_number, verse_number, text, language, role=UnitRole.VERSE) -> DisplayUnit:
    return DisplayUnit(
        role=role,
        verse_number=verse_number,
        text=text,
        translation=_translated(translate, chapter_number, verse_number, language),
    )


def compose_always_separate(chapter_number: int, chapter: Chapter, translate: TranslateFn,
                            language: str) -> List[DisplayUnit]:
    """Surah 1: detached opener, then verses 1-6 by number (gaps skipped, extras ignored)."""
    units = [DisplayUnit(
        role=UnitRole.OPENER,
        text=chapter.opener or CANONICAL_OPENER,
        translation=OPENER_TRANSLATION,
        counted=False,
    )]
    for verse_number in range(1, AL_FATIHAH_VERSES + 1):
        text = chapter.verses.get(verse_number)
        if text is None:
            continue
        units.append(_verse_unit(translate, chapter_number, verse_number, text, language))
    return units


def compose_never_present(chapter_number: int, chapter: Chapter, translate: TranslateFn,
                          language: str) -> List[DisplayUnit]:
    """Surah 9: every verse in key order, opener ignored even if the data has one."""
    return [
        _verse_unit(translate, chapter_number, verse_number, chapter.verses[verse_number], language)
        for verse_number in sorted(chapter.verses)
    ]


def compose_detect_and_split(chapter_number: int, chapter: Chapter, translate: TranslateFn,
                             language: str) -> List[DisplayUnit]:
    first = chapter.verses.get(1, "")
    if not first.startswith(CANONICAL_OPENER):
        return compose_never_present(chapter_number, chapter, translate, language)

    units = [
        DisplayUnit(
            role=UnitRole.SPLIT_OPENER,
            text=CANONICAL_OPENER,
            translation=OPENER_TRANSLATION,
            counted=False,
        ),
        _verse_unit(translate, chapter_number, 1, first[len(CANONICAL_OPENER):].strip(), language,
                    role=UnitRole.REMAINDER),
    ]
    # Linear scan: stops at the first missing verse number.
    verse_number = 2
    while verse_number in chapter.verses:
        units.append(_verse_unit(translate, chapter_number, verse_number, chapter.verses[verse_number], language))
        verse_number += 1
    return units


_COMPOSERS = {
    OpenerPolicy.ALWAYS_SEPARATE: compose_always_separate,
    OpenerPolicy.NEVER_PRESENT: compose_never_present,
    OpenerPolicy.DETECT_AND_SPLIT: compose_detect_and_split,
}


def verse_count(chapter_number: int, chapter: Chapter) -> int:
    """Verse total shown in the surah header."""
    if resolve_policy(chapter_number) is OpenerPolicy.ALWAYS_SEPARATE:
        return AL_FATIHAH_VERSES
    return len(chapter.verses)


def compose(chapter_number: int, chapter: Optional[Chapter], translate: TranslateFn,
            language: str = "en") -> ComposedChapter:
    """
    Build the display units for one surah.

    Args:
        chapter_number: The surah number the reader asked for.
        chapter: The loaded surah, or None if the store did not have it.
        translate: Lookup for a verse translation; returning None means missing.
        language: Translation language code passed through to ``translate``.

    Raises:
        ChapterNotFound: ``chapter`` is None.
        NoVersesInChapter: The surah exists but has no verses.
    """
    if chapter is None:
        raise ChapterNotFound(chapter_number)
    if not chapter.verses:
        raise NoVersesInChapter(chapter_number)

    policy = resolve_policy(chapter_number)
    units = _COMPOSERS[policy](chapter_number, chapter, translate, language)
    return ComposedChapter(
        chapter_number=chapter_number,
        units=units,
        verse_count=verse_count(chapter_number, chapter),
    )


def pending_translation(_chapter_number: int, _verse_number: int, _language: str) -> str:
    """Lookup to use while a translation set is still being fetched."""
    return TRANSLATION_LOADING
