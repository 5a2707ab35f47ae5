import pytest

from poemcraft.core.types import PoemRequest
from poemcraft.services.templates import render_fallback


def _req(**kw):
    kw.setdefault("style", "heartfelt")
    return PoemRequest(**kw)


def test_birthday_heartfelt_substitutes_primary_name():
    poem = render_fallback(_req(occasion="birthday", names="Sam, Jo"))
    assert poem == (
        "Another year has come to pass,\n"
        "With memories that will always last,\n"
        "Dear Sam, on this special day,\n"
        "We celebrate you in every way.\n"
        "\n"
        "Your laughter brightens every room,\n"
        "Your kindness helps dispel all gloom,\n"
        "May this birthday bring you joy so true,\n"
        "And all your dreams come shining through."
    )


def test_default_subject_name():
    assert "dear friend's birthday is here today!" in render_fallback(_req(occasion="birthday", style="playful"))
    assert render_fallback(_req(occasion="children", childrenTheme="characters")).startswith("little one,")


def test_missing_style_falls_back_to_heartfelt():
    poem = render_fallback(_req(occasion="wedding", style="humorous", names="Alice, Bob"))
    assert poem.startswith("Two hearts that beat as one today,\nAlice and Bob have found their perfect way,")


def test_couple_default_when_no_names():
    elegant = render_fallback(_req(occasion="wedding", style="elegant"))
    assert "Two hearts united, hand in hand," in elegant
    heartfelt = render_fallback(_req(occasion="wedding"))
    assert heartfelt.splitlines()[:2] == ["Two hearts that beat as one today,", "Two souls have found their perfect way,"]
    # style fallback picks the heartfelt stand-in too
    assert render_fallback(_req(occasion="wedding", style="playful")) == heartfelt


def test_unknown_occasion_uses_generic_stanza():
    poem = render_fallback(_req(occasion="retirement", names="Pat"))
    assert poem.splitlines()[0] == "A special retirement poem for Pat!"
    assert poem.endswith("May blessings in your life be found!")


def test_children_multiple_items_use_generic_multi_stanza():
    poem = render_fallback(_req(occasion="children", style="playful", childrenOptions=["puppy", "kitten"]))
    lines = poem.splitlines()
    assert lines[0] == "little one, let's explore a world so bright,"
    assert lines[1] == "With puppy, kitten - what a sight!"
    assert lines[-1] == "With this happy, cheerful song!"


@pytest.mark.parametrize(
    "theme, options, style, first_line",
    [
        ("animals", ["puppy"], "playful", "Mia, here's a puppy story just for you,"),
        ("animals", ["puppy"], "heartfelt", "Dear Mia, a puppy's love is pure and bright,"),
        ("toys", ["teddy bear"], "playful", "Mia, your teddy bear is here to say,"),
        ("animals-puppy", None, "playful", "Mia, here's a puppy story just for you,"),
        (None, None, "heartfelt", "Dear Mia, a puppy's love is pure and bright,"),
        (None, ["puppy"], "playful", "Mia, here's a puppy story just for you,"),
        ("", ["teddy bear"], "playful", "Mia, here's a special poem for you,"),
    ],
)
def test_children_specific_templates(theme, options, style, first_line):
    poem = render_fallback(
        _req(occasion="children", style=style, names="Mia", childrenTheme=theme, childrenOptions=options)
    )
    assert poem.splitlines()[0] == first_line


def test_children_single_item_without_template_is_generic():
    poem = render_fallback(_req(occasion="children", style="elegant", childrenTheme="toys", childrenOptions=["teddy bear"]))
    assert poem.splitlines()[:2] == ["little one, here's a special poem for you,", "About teddy bear and all they do!"]


def test_children_theme_without_item():
    poem = render_fallback(_req(occasion="children", childrenTheme="nature"))
    assert "About all the things you love and all they do!" in poem


def test_learning_specific_and_generic():
    assert render_fallback(_req(occasion="learning", style="playful", learningTopic="numbers")).startswith(
        "little one, let's count from one to ten,"
    )
    generic = render_fallback(_req(occasion="learning", learningTopic="seasons", names="Leo"))
    assert generic.splitlines()[0] == "Leo, let's learn about seasons & weather,"
    no_topic = render_fallback(_req(occasion="learning"))
    assert no_topic.splitlines()[0] == "little one, let's learn about learning,"


def test_fallback_is_deterministic():
    req = _req(occasion="children", style="playful", childrenOptions=["owl", "fox", "whale"], names="Ada")
    assert render_fallback(req) == render_fallback(req) == render_fallback(req.model_copy())
