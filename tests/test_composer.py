import pytest

from quran_tracker.composer import (
    CANONICAL_OPENER,
    OPENER_TRANSLATION,
    TRANSLATION_LOADING,
    TRANSLATION_NOT_AVAILABLE,
    OpenerPolicy,
    compose,
    pending_translation,
    resolve_policy,
)
from quran_tracker.errors import ChapterNotFound, NoVersesInChapter
from quran_tracker.models import Chapter, UnitRole


def echo_translate(chapter_number, verse_number, language):
    return f"{language}:{chapter_number}:{verse_number}"


def no_translation(chapter_number, verse_number, language):
    return None


def lookup_from(translations):
    def translate(chapter_number, verse_number, language):
        return translations.get(chapter_number, {}).get(verse_number)
    return translate


def roles(composed):
    return [unit.role for unit in composed.units]


def numbers(composed):
    return [unit.verse_number for unit in composed.units]


@pytest.mark.parametrize("number, policy", [
    (1, OpenerPolicy.ALWAYS_SEPARATE),
    (9, OpenerPolicy.NEVER_PRESENT),
    (2, OpenerPolicy.DETECT_AND_SPLIT),
    (8, OpenerPolicy.DETECT_AND_SPLIT),
    (10, OpenerPolicy.DETECT_AND_SPLIT),
    (114, OpenerPolicy.DETECT_AND_SPLIT),
])
def test_resolve_policy(number, policy):
    assert resolve_policy(number) is policy


def test_al_baqarah_splits_opener_from_first_verse():
    verses = {1: f"{CANONICAL_OPENER} الٓمٓ"}
    verses.update({n: f"verse {n}" for n in range(2, 287)})
    composed = compose(2, Chapter(number=2, verses=verses), echo_translate, "en")

    opener, remainder = composed.units[0], composed.units[1]
    assert opener.role is UnitRole.SPLIT_OPENER
    assert opener.text == CANONICAL_OPENER
    assert opener.translation == OPENER_TRANSLATION
    assert opener.verse_number is None
    assert not opener.counted

    assert remainder.role is UnitRole.REMAINDER
    assert remainder.verse_number == 1
    assert remainder.text == "الٓمٓ"
    assert remainder.translation == "en:2:1"

    rest = composed.units[2:]
    assert len(rest) == 285
    assert all(unit.role is UnitRole.VERSE for unit in rest)
    assert [unit.verse_number for unit in rest] == list(range(2, 287))
    assert composed.verse_count == 286


def test_first_verse_without_opener_emits_ordinary_units():
    chapter = Chapter(number=112, verses={1: "qul", 2: "allahu", 3: "lam"})
    composed = compose(112, chapter, echo_translate)

    assert roles(composed) == [UnitRole.VERSE] * 3
    assert numbers(composed) == [1, 2, 3]
    assert composed.verse_count == 3


def test_opener_must_be_a_prefix():
    chapter = Chapter(number=27, verses={1: f"ta sin {CANONICAL_OPENER}", 2: "two"})
    composed = compose(27, chapter, echo_translate)
    assert UnitRole.SPLIT_OPENER not in roles(composed)
    assert composed.units[0].text == f"ta sin {CANONICAL_OPENER}"


def test_opener_match_is_diacritic_sensitive():
    bare_opener = "بسم الله الرحمن الرحيم"
    chapter = Chapter(number=3, verses={1: f"{bare_opener} الم", 2: "two"})
    composed = compose(3, chapter, echo_translate)
    assert roles(composed) == [UnitRole.VERSE, UnitRole.VERSE]


def test_split_branch_stops_at_first_gap():
    chapter = Chapter(number=5, verses={1: f"{CANONICAL_OPENER} one", 2: "two", 3: "three", 5: "five"})
    composed = compose(5, chapter, echo_translate)

    assert numbers(composed) == [None, 1, 2, 3]
    assert composed.verse_count == 4


def test_unsplit_branch_emits_every_key_in_order():
    chapter = Chapter(number=5, verses={5: "five", 1: "one", 3: "three", 2: "two"})
    composed = compose(5, chapter, echo_translate)
    assert numbers(composed) == [1, 2, 3, 5]


def test_al_fatihah_always_has_detached_opener_and_six_verses():
    chapter = Chapter(number=1, verses={n: f"v{n}" for n in range(1, 11)})
    composed = compose(1, chapter, echo_translate)

    assert composed.units[0].role is UnitRole.OPENER
    assert composed.units[0].text == CANONICAL_OPENER
    assert not composed.units[0].counted
    assert numbers(composed) == [None, 1, 2, 3, 4, 5, 6]
    assert composed.verse_count == 6


def test_al_fatihah_prefers_explicit_opener():
    chapter = Chapter(number=1, verses={1: "v1"}, opener="custom opener")
    composed = compose(1, chapter, echo_translate)
    assert composed.units[0].text == "custom opener"


def test_al_fatihah_skips_missing_verses():
    chapter = Chapter(number=1, verses={1: "v1", 2: "v2", 4: "v4"})
    composed = compose(1, chapter, echo_translate)

    assert numbers(composed) == [None, 1, 2, 4]
    assert composed.verse_count == 6


def test_at_tawbah_never_has_an_opener():
    chapter = Chapter(
        number=9,
        verses={1: f"{CANONICAL_OPENER} bara'atun", 2: "two", 4: "four"},
        opener=CANONICAL_OPENER,
    )
    composed = compose(9, chapter, echo_translate)

    assert UnitRole.OPENER not in roles(composed)
    assert UnitRole.SPLIT_OPENER not in roles(composed)
    assert numbers(composed) == [1, 2, 4]
    assert composed.units[0].text == f"{CANONICAL_OPENER} bara'atun"
    assert composed.verse_count == 3


def test_missing_translation_degrades_to_placeholder():
    translations = {3: {1: "first", 3: "third"}}
    chapter = Chapter(number=3, verses={1: "one", 2: "two", 3: "three"})
    composed = compose(3, chapter, lookup_from(translations))

    assert [unit.translation for unit in composed.units] == ["first", TRANSLATION_NOT_AVAILABLE, "third"]


def test_unavailable_translation_set_degrades_every_verse():
    chapter = Chapter(number=1, verses={n: f"v{n}" for n in range(1, 7)})
    composed = compose(1, chapter, no_translation)

    assert composed.units[0].translation == OPENER_TRANSLATION
    assert all(unit.translation == TRANSLATION_NOT_AVAILABLE for unit in composed.units[1:])


def test_pending_translation_placeholder():
    chapter = Chapter(number=112, verses={1: "a", 2: "b"})
    composed = compose(112, chapter, pending_translation)
    assert {unit.translation for unit in composed.units} == {TRANSLATION_LOADING}


def test_language_is_passed_to_lookup():
    chapter = Chapter(number=112, verses={1: "a"})
    composed = compose(112, chapter, echo_translate, "ur")
    assert composed.units[0].translation == "ur:112:1"


def test_compose_is_idempotent():
    chapter = Chapter(number=2, verses={1: f"{CANONICAL_OPENER} alif", 2: "two", 3: "three"})
    first = compose(2, chapter, echo_translate, "en")
    second = compose(2, chapter, echo_translate, "en")
    assert first == second


def test_missing_chapter_raises_chapter_not_found():
    with pytest.raises(ChapterNotFound) as excinfo:
        compose(200, None, echo_translate)
    assert excinfo.value.chapter_number == 200


@pytest.mark.parametrize("number", [1, 9, 2])
def test_empty_chapter_raises_no_verses(number):
    with pytest.raises(NoVersesInChapter):
        compose(number, Chapter(number=number, verses={}), echo_translate)


@pytest.mark.parametrize("number, verses", [
    (1, {n: f"v{n}" for n in range(1, 7)}),
    (9, {1: "a", 2: "b"}),
    (2, {1: f"{CANONICAL_OPENER} alif", 2: "b"}),
    (112, {1: "a", 2: "b"}),
])
def test_translations_are_looked_up_by_requested_number(number, verses):
    # The Chapter carries a different number than the one asked for
    chapter = Chapter(number=999, verses=verses)
    composed = compose(number, chapter, echo_translate, "en")

    for unit in composed.units:
        if unit.counted:
            assert unit.translation == f"en:{number}:{unit.verse_number}"
