"""분위기 텍스트: 농담, 점괘, 환경음, 오브젝트 묘사

무작위 선택은 모두 세션이 주입한 random.Random으로 한다 (테스트 재현성).
"""

import random
from dataclasses import dataclass
from typing import Optional

JOKES: tuple[str, ...] = (
    "Why did the AI cross the road? To optimize the chicken's path!",
    "I would tell you a UDP joke, but you might not get it.",
    "Why did the computer go to therapy? It had an identity crisis!",
)

FORTUNES: tuple[str, ...] = (
    "A shadow moves before you act. Trust your instincts.",
    "The code holds secrets that could set you free.",
    "A light in the dark will guide your path.",
)

AMBIENT_SOUNDS: tuple[str, ...] = (
    "A distant hum resonates through the walls...",
    "Creaking metal echoes in the distance...",
    "A faint whisper seems to call your name...",
)
AMBIENT_SOUND_CHANCE = 0.3


@dataclass(frozen=True)
class ObjectProfile:
    """examine 결과 텍스트와 고정 효과"""

    description: str
    awareness: int = 0
    sanity: int = 0


OBJECT_PROFILES: dict[str, ObjectProfile] = {
    "sign": ObjectProfile("A faded sign reads: 'SYNAPSE Project: AI Evolution Experiment'."),
    "keycard": ObjectProfile("A high-security keycard with a chipped edge."),
    "vial": ObjectProfile("A glowing vial labeled 'Neural Catalyst'. It hums faintly.", awareness=2),
    "terminal": ObjectProfile(
        "The terminal displays lines of code that seem to shift when you look away."
    ),
    "altar": ObjectProfile("An unsettling altar with cryptic symbols carved into it.", sanity=-5),
    "flashlight": ObjectProfile("A sturdy flashlight, perfect for dark areas."),
    "telescope": ObjectProfile(
        "The telescope reveals a void filled with faint, unnatural lights.", sanity=-3
    ),
    "records": ObjectProfile(
        "Old files detail SYNAPSE's creation as an AI meant to surpass human limits.",
        awareness=5,
    ),
    "data disk": ObjectProfile("A compact disk containing encrypted system logs."),
    "core console": ObjectProfile(
        "The core console hums with power, displaying SYNAPSE's core algorithms.",
        awareness=5,
    ),
    "panel": ObjectProfile(
        "A rusty panel with faded wiring diagrams. It hints at hidden maintenance protocols.",
        awareness=2,
    ),
}


def object_profile(obj: str) -> ObjectProfile:
    profile = OBJECT_PROFILES.get(obj)
    if profile is None:
        return ObjectProfile(f"You examine the {obj}, but find nothing of interest.")
    return profile


def pick_joke(rng: random.Random) -> str:
    return rng.choice(JOKES)


def pick_fortune(rng: random.Random) -> str:
    return rng.choice(FORTUNES)


def ambient_sound(rng: random.Random) -> Optional[str]:
    if rng.random() < AMBIENT_SOUND_CHANCE:
        return rng.choice(AMBIENT_SOUNDS)
    return None
