"""Tests for the structured reply protocol."""

from pausepaws.protocol import parse_structured, strip_emoji


def test_plain_reply_used_for_display_and_voice():
    r = parse_structured("I'm here for you. ❤️")
    assert r.structured is False
    assert r.display_text == "I'm here for you. ❤️"
    assert r.voice == "I'm here for you. ❤️"


def test_structured_reply():
    reply = (
        '[VOICE]: "Let\'s breathe together."\n'
        "[VISUAL]: *sits calmly*\n"
        "[PROGRESS]: ■■□□\n"
        "[TEXT]: 🌬️ Breathing break\n"
        "[ACTION]: Breathe in slowly"
    )
    r = parse_structured(reply)
    assert r.structured is True
    assert r.voice == "Let's breathe together."
    assert r.visual == "*sits calmly*"
    assert r.progress == "■■□□"
    assert r.text == "🌬️ Breathing break"
    assert r.action == "Breathe in slowly"
    assert "[VOICE]" not in r.display_text
    assert r.display_text.startswith("[VISUAL]: *sits calmly*")


def test_first_label_wins():
    r = parse_structured("[VOICE]: one\n[VOICE]: two\n[TEXT]: hi")
    assert r.voice == "one"


def test_repeated_voice_line_kept_in_display():
    r = parse_structured("[VOICE]: one\n[VOICE]: two\n[TEXT]: hi")
    assert r.display_text == "[VOICE]: two\n[TEXT]: hi"


def test_voice_only_reply_displays_voice():
    r = parse_structured('[VOICE]: "Hello there"')
    assert r.display_text == "Hello there"
    assert r.voice == "Hello there"


def test_missing_voice_falls_back_to_display():
    r = parse_structured("[TEXT]: ✨ Calm")
    assert r.voice == "[TEXT]: ✨ Calm"


def test_strip_emoji():
    assert strip_emoji("Woof! 🐶 Let's play ❤️") == "Woof!  Let's play"
    assert strip_emoji("✨🌙") == ""
