from enum import IntEnum
from typing import Dict, NamedTuple, Tuple

import numpy as np


class Variant(IntEnum):
    # SAND must stay 0: zeroed storage reads as an inactive Sand placeholder
    SAND = 0
    DIRT = 1
    WATER = 2
    BRICK = 3


class Rule(NamedTuple):
    name: str
    movement_chance: int       # percent per frame of trying a lateral move
    physical: bool             # takes part in the simulation step
    liquid: bool               # solids sink through it
    color: Tuple[int, int, int]


# ---------- Movement rule table ----------
RULES: Dict[Variant, Rule] = {
    Variant.SAND:  Rule("Sand",  50, True,  False, (194, 178, 128)),
    Variant.DIRT:  Rule("Dirt",  20, True,  False, (110, 75, 40)),
    Variant.WATER: Rule("Water", 90, True,  True,  (40, 100, 230)),
    Variant.BRICK: Rule("Brick", 0,  False, False, (200, 40, 40)),
}

NAMES = {v: rule.name for v, rule in RULES.items()}

PALETTE = np.array([RULES[v].color for v in sorted(Variant)], dtype=np.uint8)


def movement_chance(variant: int) -> int:
    return RULES[Variant(variant)].movement_chance


def is_physical(variant: int) -> bool:
    return RULES[Variant(variant)].physical


def is_liquid(variant: int) -> bool:
    return RULES[Variant(variant)].liquid
