"""Bucketing helpers for memory levels and word difficulty."""

from wordmaster.models.database.words import DifficultyLevel


def classify_memory_level(memory_level: float) -> str:
    """Display classification: critical, learning, reviewing, well_known, mastered."""
    if memory_level >= 100:
        return "mastered"
    if memory_level >= 81:
        return "well_known"
    if memory_level >= 51:
        return "reviewing"
    if memory_level >= 21:
        return "learning"
    return "critical"


def memory_bucket(memory_level: float) -> str:
    """Feed filter bucket: learning (<40), reviewing (40-69), well_known (>=70)."""
    if memory_level < 40:
        return "learning"
    if memory_level < 70:
        return "reviewing"
    return "well_known"


def classify_difficulty(word_length: int) -> DifficultyLevel:
    if word_length <= 4:
        return DifficultyLevel.EASY
    if word_length <= 7:
        return DifficultyLevel.MEDIUM
    if word_length <= 10:
        return DifficultyLevel.HARD
    return DifficultyLevel.VERY_HARD


# (key, upper bound exclusive, label) for decay stats distribution
MEMORY_BANDS = (
    ("very_weak", 20, "0-20%"),
    ("weak", 40, "20-40%"),
    ("average", 60, "40-60%"),
    ("strong", 80, "60-80%"),
    ("mastered", None, "80-100%"),
)


def memory_band(memory_level: float) -> str:
    for key, upper, _ in MEMORY_BANDS:
        if upper is None or memory_level < upper:
            return key
    return MEMORY_BANDS[-1][0]
