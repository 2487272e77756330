"""Tests for the action responder."""

import random

import pytest

from pausepaws.actions import ACTION_DELTAS, deflect, respond
from pausepaws.personas import get_persona

DOG = get_persona("dog")
CAT = get_persona("cat")


@pytest.mark.parametrize("intent, animation, duration", [
    ("feed", "eating", 10_000),
    ("water", "drinking", 8_000),
    ("pet", "petting", 4_000),
    ("play", "playing", 8_000),
])
def test_respond_fixed_fields(intent, animation, duration):
    result = respond(intent, DOG, random.Random(1))
    assert result.animation == animation
    assert result.duration_ms == duration
    assert result.stat_delta == ACTION_DELTAS[intent]
    assert result.voice_text in DOG.flavor[intent]


def test_feed_deltas():
    assert ACTION_DELTAS["feed"] == {"hunger": 25, "happiness": 15}
    assert ACTION_DELTAS["play"] == {"happiness": 20, "energy": -15}


def test_display_depends_on_source():
    assert respond("feed", DOG, random.Random(0), source="ui").display_text == "You fed Buddy."
    assert respond("feed", DOG, random.Random(0), source="chat").display_text == "🦴 Preparing Buddy's meal..."


def test_seeded_rng_is_deterministic():
    a = [respond("play", CAT, random.Random(7)).voice_text for _ in range(3)]
    b = [respond("play", CAT, random.Random(7)).voice_text for _ in range(3)]
    assert a == b


def test_pet_plain_location():
    result = respond("pet", DOG, random.Random(0), location="back")
    assert result.display_text == "❤️ You scratched Buddy's back."
    assert result.voice_text in DOG.location_lines["back"]
    assert result.stat_delta == {"happiness": 10}
    assert result.duration_ms == 3_000


def test_pet_favorite_spot():
    result = respond("pet", CAT, random.Random(0), location="chin")
    assert result.voice_text in CAT.favorite_lines
    assert result.stat_delta == {"happiness": 15}
    assert result.duration_ms == 5_000


def test_location_ignored_for_other_intents():
    result = respond("feed", DOG, random.Random(0), location="ears")
    assert result.animation == "eating"
    assert result.voice_text in DOG.flavor["feed"]


def test_unknown_location():
    with pytest.raises(ValueError, match="petting spot"):
        respond("pet", DOG, random.Random(0), location="tail")


def test_deflect():
    result = deflect("feed", DOG)
    assert result.animation == "idle"
    assert result.stat_delta == {}
    assert result.duration_ms == 3_000
    assert result.display_text == "🦴 Buddy is still full. Try playing instead?"
    assert result.voice_text == "I'm still quite full, thank you."
