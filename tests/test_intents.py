"""Tests for the intent classifier."""

import pytest

from pausepaws.intents import classify


@pytest.mark.parametrize("text, intent", [
    ("feed him", "feed"),
    ("Time for dinner!", "feed"),
    ("some water please", "water"),
    ("are you thirsty?", "water"),
    ("can I pet you", "pet"),
    ("CUDDLES", "pet"),
    ("let's play", "play"),
    ("wanna play fetch?", "play"),
    ("I had a rough day", "none"),
    ("", "none"),
])
def test_classify(text, intent):
    assert classify(text) == intent


def test_feed_wins_over_later_intents():
    """Sets are checked in order: feed, water, pet, play."""
    assert classify("play then eat") == "feed"
    assert classify("pet me and drink water") == "water"
    assert classify("pet, then play") == "pet"


def test_substring_matches_inflections():
    """Keywords match anywhere in the text, so inflected forms hit their stem."""
    assert classify("I petted Luna") == "pet"
    assert classify("we played all day") == "play"
    assert classify("I watered Buddy") == "water"
    assert classify("she cuddled up") == "pet"
    assert classify("feedme") == "feed"
