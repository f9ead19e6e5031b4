from __future__ import annotations

from typing import Any

from .models import DiceRoll, Operation, ParsedLine, RollGroup, RollKind, RollWithOperation


_ROLL_KIND_SUFFIX: dict[RollKind, str] = {
    RollKind.REGULAR: "",
    RollKind.WITH_ADVANTAGE: "a",
    RollKind.WITH_DISADVANTAGE: "d",
}


def format_roll(roll: DiceRoll) -> str:
    chunk = f"{roll.number_of_dice}d{roll.dice_sides}"
    if roll.modifier is not None:
        chunk += f"{roll.modifier:+d}"
    return chunk + _ROLL_KIND_SUFFIX[roll.roll_kind]


def _format_group(group: RollGroup) -> str:
    chunks: list[str] = []
    for entry in group:
        piece = format_roll(entry.roll)
        if entry.operation is Operation.SUBTRACTION:
            chunks.append(f"-{piece}")
        elif chunks:
            chunks.append(f"+{piece}")
        else:
            chunks.append(piece)
    return "".join(chunks)


def to_notation(groups: ParsedLine) -> str:
    """Render parsed groups back to canonical notation.

    The output always parses back to an equal structure: counts are written
    explicitly, the leading '+' of a group is dropped and groups are joined
    with ','.
    """

    return ",".join(_format_group(group) for group in groups)


def to_dict(entry: RollWithOperation) -> dict[str, Any]:
    roll = entry.roll
    return {
        "operation": entry.operation.name.lower(),
        "number_of_dice": roll.number_of_dice,
        "dice_sides": roll.dice_sides,
        "modifier": roll.modifier,
        "roll_kind": roll.roll_kind.value,
        "notation": format_roll(roll),
    }


def groups_to_dicts(groups: ParsedLine) -> list[list[dict[str, Any]]]:
    return [[to_dict(entry) for entry in group] for group in groups]
