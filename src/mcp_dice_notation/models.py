from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TypeAlias


# Counts and sides are unsigned 32-bit; modifiers are signed 32-bit.
MAX_DICE_COUNT: int = 2**32 - 1
MAX_DICE_SIDES: int = 2**32 - 1
MAX_MODIFIER: int = 2**31 - 1


class RollKind(enum.Enum):
    REGULAR = "regular"
    WITH_ADVANTAGE = "advantage"
    WITH_DISADVANTAGE = "disadvantage"


class Operation(enum.Enum):
    ADDITION = "+"
    SUBTRACTION = "-"


@dataclass(frozen=True)
class DiceRoll:
    dice_sides: int
    number_of_dice: int = 1
    modifier: int | None = None
    roll_kind: RollKind = RollKind.REGULAR


@dataclass(frozen=True)
class RollWithOperation:
    """A dice roll and the operator joining it to the previous term of its group."""

    roll: DiceRoll
    operation: Operation = Operation.ADDITION


RollGroup: TypeAlias = list[RollWithOperation]
ParsedLine: TypeAlias = list[RollGroup]


@dataclass(frozen=True)
class ParsedNotation:
    input: str
    normalized_input: str
    groups: ParsedLine
    normalized_expression: str
