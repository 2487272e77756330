"""Persona registry — static data for each kind of companion.

A persona bundles everything needed to speak in character without the
remote dialogue service: display name, tone and emoji vocabulary for the
framing, flavor lines per action, deflection lines for blocked actions,
topic corpora for the local fallback tier and a generic corpus.

Every line here is curated and must pass the sanitizer (see
tests/test_personas.py).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pausepaws.models import ActionIntent, PetLocation


class UnknownPersonaError(KeyError):
    """Raised when a persona id is not in the registry."""


class ActionLines(BaseModel):
    """Display text templates for one action, keyed by interaction source.

    ``{name}`` is replaced with the persona's display name.
    """

    model_config = ConfigDict(frozen=True)

    ui: str
    chat: str


class Deflection(BaseModel):
    """What a blocked action says instead of happening."""

    model_config = ConfigDict(frozen=True)

    display: str
    voice: str


class Persona(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    species: str
    tone: str
    emojis: tuple[str, ...]
    voice_id: str
    favorite_spot: PetLocation
    framing_template: str = ""

    greeting: str
    check_in_prompt: str = "How are you feeling today?"

    action_lines: dict[ActionIntent, ActionLines]
    flavor: dict[ActionIntent, tuple[str, ...]]
    location_lines: dict[PetLocation, tuple[str, ...]]
    favorite_lines: tuple[str, ...]
    deflections: dict[ActionIntent, Deflection]

    topics: dict[str, tuple[str, ...]]
    generic: tuple[str, ...]
    last_resort: str


# ---------------------------------------------------------------------------
# Buddy the dog
# ---------------------------------------------------------------------------

BUDDY = Persona(
    id="dog",
    name="Buddy",
    species="Dog",
    tone="Playful, encouraging, warm.",
    emojis=("🐶", "🐾", "🦴", "❤️"),
    voice_id="Kore",
    favorite_spot="ears",
    greeting="Hello, I'm Buddy. I'm so happy you're here! ✨",
    action_lines={
        "feed": ActionLines(ui="You fed {name}.", chat="🦴 Preparing {name}'s meal..."),
        "water": ActionLines(ui="{name} drinks gratefully.", chat="💧 Pouring {name} some water..."),
        "pet": ActionLines(ui="❤️ You petted {name}.", chat="❤️ You petted {name}."),
        "play": ActionLines(ui="🎾 Playing with {name}...", chat="🎾 Playing with {name}..."),
    },
    flavor={
        "feed": (
            "Mmm, delicious! Thank you!",
            "Yummy! Good caretaker.",
            "My favorite flavor!",
            "I feel energized now!",
            "Mmm, hits the spot.",
            "Best meal ever!",
        ),
        "water": (
            "Ahh, refreshing water!",
            "Just what I needed.",
            "I was getting thirsty.",
            "Refreshing! Thank you.",
        ),
        "pet": (
            "You're my best friend.",
            "More pats please!",
            "Tail going full speed!",
        ),
        "play": (
            "Yay! This is so much fun!",
            "Again! Again!",
            "Throw it farther!",
            "Best game ever!",
        ),
    },
    location_lines={
        "ears": ("Ooh, right behind the ears!",),
        "chin": ("Chin scratches! Nice.", "Heh, that tickles."),
        "back": ("Ahh, good back rub.", "A little lower... perfect."),
    },
    favorite_lines=(
        "Ear scratches are the best! My leg is kicking!",
        "Right there! Don't ever stop!",
    ),
    deflections={
        "feed": Deflection(
            display="🦴 {name} is still full. Try playing instead?",
            voice="I'm still quite full, thank you.",
        ),
        "water": Deflection(
            display="💧 {name} isn't thirsty yet. Maybe pet him?",
            voice="I'm not thirsty just yet.",
        ),
        "pet": Deflection(
            display="🐾 {name} is still wiggling from the last pat.",
            voice="Hehe, one at a time!",
        ),
        "play": Deflection(
            display="🎾 {name} is still chasing the last throw.",
            voice="Wait, I'm still running!",
        ),
    },
    topics={
        "play": (
            "Playtime? Oh boy! 🎾",
            "I'm ready to play! *wiggles* 🐾",
            "Let's run around together! 🐶",
            "Chase the ball? I love that! 🦴",
        ),
        "sad": (
            "I'm here for you. *nuzzles* ❤️",
            "It's okay to feel sad. I'm staying right here. 🐾",
            "Sending you a big warm hug. ❤️",
            "I'll sit with you as long as you need. 🐶",
        ),
        "happy": (
            "Your smile makes me so happy! 🐾",
            "What a wonderful day! 🐶",
            "*Happy dancing* ❤️",
            "You're glowing today! 🦴",
        ),
        "tired": (
            "Let's take a cozy nap. 🐾",
            "Time for some rest. I'll watch over you. 🐶",
            "Sleepy time... 💤",
            "A break sounds like a great idea. ❤️",
        ),
        "hello": (
            "Hello friend! 🐾",
            "I missed you! ❤️",
            "Hi! I'm so glad you're back. 🐶",
            "Woof! Welcome back! 🐶",
        ),
        "food": (
            "Mmm, I love treats! 🦴",
            "Thank you for the delicious meal! 🐾",
            "Yum yum! 🦴",
            "That was tasty! ❤️",
        ),
    },
    generic=(
        "I'm right here with you! 🐾",
        "Woof! I'm so glad we're hanging out. ❤️",
        "You're doing a great job today. 🦴",
        "I'm staying right by your side. 🐶",
        "I'm always here to listen. 🦴",
        "You deserve a nice break! 🐾",
        "Everything feels better when we're together. ❤️",
    ),
    last_resort="*happy tail wag* 🐾",
)


# ---------------------------------------------------------------------------
# Luna the cat
# ---------------------------------------------------------------------------

LUNA = Persona(
    id="cat",
    name="Luna",
    species="Cat",
    tone="Calm, soothing, observant.",
    emojis=("🐱", "☁️", "🌙", "✨"),
    voice_id="Puck",
    favorite_spot="chin",
    greeting="Hello, I'm Luna. I'm so happy you're here! ✨",
    action_lines={
        "feed": ActionLines(ui="You fed {name}.", chat="🐟 Preparing {name}'s meal..."),
        "water": ActionLines(ui="{name} drinks gratefully.", chat="💧 Pouring {name} some water..."),
        "pet": ActionLines(ui="❤️ You petted {name}.", chat="❤️ You petted {name}."),
        "play": ActionLines(ui="🧶 Playing with {name}...", chat="🧶 Playing with {name}..."),
    },
    flavor={
        "feed": (
            "This is perfect. Thanks.",
            "So tasty, thank you.",
            "Thank you for dinner.",
            "That was yummy.",
        ),
        "water": (
            "So cool and clean.",
            "This hits the spot.",
            "Cool water is best.",
            "Ahh, thank you.",
        ),
        "pet": (
            "Purrrr... I love this.",
            "Mmm, gentle hands.",
            "You may continue.",
        ),
        "play": (
            "The string is mine now.",
            "Pounce! Got it.",
            "One more round.",
        ),
    },
    location_lines={
        "ears": ("Soft ear rubs... nice.", "Careful with the whiskers."),
        "chin": ("Purr... right there.",),
        "back": ("A slow back stroke. Lovely.", "Mmm, the long way down."),
    },
    favorite_lines=(
        "Chin scratches... pure bliss. Purrrr.",
        "Yes. Right there. Forever.",
    ),
    deflections={
        "feed": Deflection(
            display="🐟 {name} is still full. Try playing instead?",
            voice="I'm still quite full, thank you.",
        ),
        "water": Deflection(
            display="💧 {name} isn't thirsty yet. Maybe pet her?",
            voice="I'm not thirsty just yet.",
        ),
        "pet": Deflection(
            display="🐾 {name} is still savoring the last pat.",
            voice="Patience. One at a time.",
        ),
        "play": Deflection(
            display="🧶 {name} is still batting the last string.",
            voice="Hold on, I'm pouncing.",
        ),
    },
    topics={
        "play": (
            "A little game? Purrhaps. 🐱",
            "I'll chase the string, just once. ✨",
            "Pounce time. 🐱",
            "Let's play softly together. 🌙",
        ),
        "sad": (
            "I'm here for you. *soft purr* ✨",
            "It's okay to feel sad. I'm staying right here. ☁️",
            "Sending you a quiet, warm hug. ✨",
            "I'll sit with you as long as you need. 🌙",
        ),
        "happy": (
            "Your calm smile warms me. 🐱",
            "What a gentle, lovely day. ✨",
            "*Content slow blink* ☁️",
            "You're glowing today. 🌙",
        ),
        "tired": (
            "Let's take a cozy nap. 🌙",
            "Time for some rest. I'll watch over you. ☁️",
            "Sleepy time... 💤",
            "A break sounds like a great idea. ✨",
        ),
        "hello": (
            "Hello friend. 🐱",
            "I missed you. ✨",
            "Hi. I'm so glad you're back. ☁️",
            "Mrrow. Welcome back. 🌙",
        ),
        "food": (
            "Treats? I accept. 🐱",
            "Thank you for the delicious meal. ✨",
            "Tuna would be lovely. 🌙",
            "That was tasty. ☁️",
        ),
    },
    generic=(
        "Purrr... I'm listening. 🐱",
        "Everything is going to be okay. ✨",
        "I'll sit with you as long as you need. 🌙",
        "You are safe here with me. 🐱",
        "The world is quiet and peaceful right now. ☁️",
        "Take your time. I'm not going anywhere. ✨",
        "The stars are shining just for you. 🌙",
    ),
    last_resort="*slow blink* 🐱",
)


PERSONAS: dict[str, Persona] = {p.id: p for p in (BUDDY, LUNA)}

DEFAULT_PERSONA_ID = "dog"


def get_persona(persona_id: str) -> Persona:
    """Look up a persona by id."""
    try:
        return PERSONAS[persona_id]
    except KeyError:
        raise UnknownPersonaError(persona_id) from None


def list_personas() -> list[Persona]:
    return list(PERSONAS.values())
