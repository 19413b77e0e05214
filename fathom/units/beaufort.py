"""
Beaufort wind-force scale.

Thirteen levels (0-12), each keyed by the minimum sustained wind speed in
knots. Lookups go through level_for_knots(); everything that needs a force
number for a wind speed calls it rather than re-deriving the level.
"""

import math
from dataclasses import dataclass

KMH_PER_KNOT = 1.852
MAX_LEVEL = 12


@dataclass(frozen=True)
class BeaufortEntry:
    """One row of the Beaufort scale."""
    level: int
    min_kt: float
    description: str
    sea_effect: str

    def to_dict(self) -> dict:
        return {
            "level": self.level,
            "minKt": self.min_kt,
            "description": self.description,
            "seaEffect": self.sea_effect,
        }


BEAUFORT_SCALE: tuple[BeaufortEntry, ...] = (
    BeaufortEntry(0, 0, "Calm", "Sea like a mirror."),
    BeaufortEntry(1, 1, "Light air",
                  "Ripples with appearance of scales are formed, without foam crests."),
    BeaufortEntry(2, 4, "Light breeze",
                  "Small wavelets still short but more pronounced; crests have a glassy "
                  "appearance but do not break."),
    BeaufortEntry(3, 7, "Gentle breeze",
                  "Large wavelets; crests begin to break; foam of glassy appearance. "
                  "Perhaps scattered white horses."),
    BeaufortEntry(4, 11, "Moderate breeze",
                  "Small waves becoming longer; fairly frequent white horses."),
    BeaufortEntry(5, 17, "Fresh breeze",
                  "Moderate waves taking a more pronounced long form; many white horses "
                  "are formed. Chance of some spray."),
    BeaufortEntry(6, 22, "Strong breeze",
                  "Large waves begin to form; the white foam crests are more extensive "
                  "everywhere. Probably some spray."),
    BeaufortEntry(7, 28, "Near gale",
                  "Sea heaps up and white foam from breaking waves begins to be blown in "
                  "streaks along the direction of the wind."),
    BeaufortEntry(8, 34, "Gale",
                  "Moderately high waves of greater length; edges of crests break into "
                  "spindrift. Foam is blown in well-marked streaks."),
    BeaufortEntry(9, 41, "Strong gale",
                  "High waves. Dense streaks of foam along the direction of the wind. "
                  "Sea begins to roll. Spray may affect visibility."),
    BeaufortEntry(10, 48, "Storm",
                  "Very high waves with long overhanging crests. Resulting foam in great "
                  "patches is blown in dense white streaks."),
    BeaufortEntry(11, 56, "Violent storm",
                  "Exceptionally high waves. Sea is completely covered with long white "
                  "patches of foam. Visibility affected."),
    BeaufortEntry(12, 64, "Hurricane",
                  "The air is filled with foam and spray. Sea completely white with "
                  "driving spray; visibility very seriously affected."),
)


def level_for_knots(knots: float) -> int:
    """Highest level whose min_kt threshold is <= knots. Never below 0."""
    for entry in reversed(BEAUFORT_SCALE):
        if knots >= entry.min_kt:
            return entry.level
    return 0


def entry_for_level(level: int) -> BeaufortEntry:
    """
    Entry for an integer level in [0, 12].
    Callers clamp first; anything else raises IndexError.
    """
    if not 0 <= level <= MAX_LEVEL:
        raise IndexError(f"Beaufort level out of range: {level}")
    return BEAUFORT_SCALE[level]


def clamp_level(value: float) -> int:
    """Floor a (possibly fractional) force number into [0, 12]."""
    return max(0, min(MAX_LEVEL, math.floor(value)))


def knots_to_kmh(knots: float) -> float:
    return knots * KMH_PER_KNOT


def kmh_to_knots(kmh: float) -> float:
    return kmh / KMH_PER_KNOT
