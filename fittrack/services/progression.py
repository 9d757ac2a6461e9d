"""Next-session targets derived from the last logged set.

The rule only ever moves one knob at a time:

* rating >= 8 with at least 8 reps: add 2.5 kg, keep the reps;
* rating 4-7 with fewer than 7 reps: add one rep, keep the weight;
* anything else, including ratings below 4: keep both.

A missing rating yields the input unchanged, which callers treat as
"no suggestion available".
"""

from dataclasses import dataclass
from enum import Enum

WEIGHT_STEP_KG = 2.5


class Technique(str, Enum):
    poor = "poor"
    regular = "regular"
    good = "good"


TECHNIQUE_RPE: dict[Technique, int] = {
    Technique.poor: 3,
    Technique.regular: 6,
    Technique.good: 9,
}


def technique_to_rpe(technique: Technique) -> int:
    return TECHNIQUE_RPE[Technique(technique)]


@dataclass(frozen=True)
class Suggestion:
    weight: float
    reps: int

    def differs_from(self, weight: float, reps: int) -> bool:
        return self.weight != weight or self.reps != reps


def suggest(weight: float, reps: int, rpe: int | None) -> Suggestion:
    if rpe is None:
        return Suggestion(weight=weight, reps=reps)

    if rpe >= 8 and reps >= 8:
        return Suggestion(weight=weight + WEIGHT_STEP_KG, reps=reps)
    if 4 <= rpe <= 7 and reps < 7:
        return Suggestion(weight=weight, reps=reps + 1)
    return Suggestion(weight=weight, reps=reps)


def has_suggestion(weight: float, reps: int, rpe: int | None) -> bool:
    return suggest(weight, reps, rpe).differs_from(weight, reps)
