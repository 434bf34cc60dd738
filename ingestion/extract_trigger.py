from __future__ import annotations

from ingestion.records import UNKNOWN_TRIGGER

# list order is the tie-break when two phrases of equal length both match
TRIGGER_CATEGORIES: dict[str, tuple[str, ...]] = {
    "environmental": (
        "loud noise",
        "thunder",
        "fireworks",
        "flashing lights",
        "bright lights",
        "heat",
        "vacuum",
    ),
    "rest_sleep": (
        "woke up",
        "lack of sleep",
        "sleeping",
        "napping",
        "resting",
    ),
    "food": (
        "after eating",
        "before eating",
        "new food",
        "hungry",
    ),
    "activity": (
        "exercise",
        "playing",
        "car ride",
        "excitement",
    ),
    "misc": (
        "stress",
        "medication change",
        "missed medication",
        "vet visit",
        "grooming",
        "visitors",
    ),
}
TRIGGER_VOCABULARY: tuple[str, ...] = tuple(
    phrase for phrases in TRIGGER_CATEGORIES.values() for phrase in phrases
)


def _display_trigger(phrase: str) -> str:
    return phrase[:1].upper() + phrase[1:]


def extract_trigger(text: str) -> str:
    lower = (text or "").lower()
    matches = [phrase for phrase in TRIGGER_VOCABULARY if phrase in lower]
    if not matches:
        return UNKNOWN_TRIGGER
    # longest phrase wins ("loud noise" over "fireworks")
    return _display_trigger(max(matches, key=len))
