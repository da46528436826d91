"""
GV60 wall-switch operations as fixed relay pulse sequences.

Contact wiring follows the Mertik Maxitrol "External Source Operation" diagram:
relay channel N drives GV60 contact N. Closing a contact is a 0 on its line.

Some recipes intentionally leave a line untouched in their last step
(e.g. "on" never re-opens CH2). Do not "fix" these.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from gofire.hardware.outputs import CLOSED, OPEN, Line

Assignment = Tuple[Line, int]


@dataclass(frozen=True)
class Step:
    assignments: Tuple[Assignment, ...]
    hold: float = 0.0


@dataclass(frozen=True)
class Recipe:
    name: str
    description: str
    steps: Tuple[Step, ...]


OFF = Recipe(
    name="off",
    description="close contacts 1 & 2 & 3 for 1 second",
    steps=(
        Step(((Line.CH1, CLOSED), (Line.CH2, CLOSED), (Line.CH3, CLOSED)), hold=1.0),
        Step(((Line.CH1, OPEN), (Line.CH2, OPEN), (Line.CH3, OPEN))),
    ),
)

ON = Recipe(
    name="on",
    description="ignition: close contacts 1 & 3 for 1 second",
    steps=(
        Step(((Line.CH1, CLOSED), (Line.CH2, OPEN), (Line.CH3, CLOSED)), hold=1.0),
        Step(((Line.CH1, OPEN), (Line.CH3, OPEN))),
    ),
)

# Min to full flame takes up to 12 seconds; move in 2 second increments.
FLAME_UP = Recipe(
    name="flameup",
    description="close contact 1 for 2 seconds",
    steps=(
        Step(((Line.CH1, CLOSED), (Line.CH2, OPEN), (Line.CH3, OPEN)), hold=2.0),
        Step(((Line.CH1, OPEN),)),
    ),
)

FLAME_DOWN = Recipe(
    name="flamedown",
    description="close contact 3 for 2 seconds",
    steps=(
        Step(((Line.CH1, OPEN), (Line.CH2, OPEN), (Line.CH3, CLOSED)), hold=2.0),
        Step(((Line.CH3, OPEN),)),
    ),
)

RECIPES: Dict[str, Recipe] = {r.name: r for r in (OFF, ON, FLAME_UP, FLAME_DOWN)}


def find_recipe(name: str) -> Recipe:
    try:
        return RECIPES[name]
    except KeyError:
        raise KeyError(f"Unknown recipe '{name}'") from None
