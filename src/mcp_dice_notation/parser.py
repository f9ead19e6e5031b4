from __future__ import annotations

import logging
import re
from typing import Any, Callable, TypeVar

from .errors import InvalidNumberInput, ParseError, UnknownError
from .models import (
    MAX_DICE_COUNT,
    MAX_DICE_SIDES,
    MAX_MODIFIER,
    DiceRoll,
    Operation,
    ParsedLine,
    ParsedNotation,
    RollGroup,
    RollKind,
    RollWithOperation,
)
from .notation import to_notation


logger = logging.getLogger(__name__)

T = TypeVar("T")

# Every recognizer takes (text, pos) and returns (new_pos, value), or raises
# _NoMatch without side effects. Lookaheads call a recognizer and discard the
# position it returns.
Recognizer = Callable[[str, int], tuple[int, Any]]

_WHITESPACE_RE = re.compile(r"\s+")
_DIGITS_RE = re.compile(r"[0-9]+")

_END_MARKERS = frozenset("+-,")
_GROUP_SEPARATOR = ","

_OPERATORS: dict[str, Operation] = {
    "+": Operation.ADDITION,
    "-": Operation.SUBTRACTION,
}

_ROLL_KIND_SUFFIXES: dict[str, RollKind] = {
    "a": RollKind.WITH_ADVANTAGE,
    "d": RollKind.WITH_DISADVANTAGE,
}


class _NoMatch(Exception):
    def __init__(self, expected: str, text: str, pos: int) -> None:
        super().__init__(expected)
        self.expected = expected
        self.text = text
        self.pos = pos

    def describe(self) -> str:
        return f"expected {self.expected} at: {self.text[self.pos:]!r}"


def normalize_text(text: str) -> str:
    # Spacing is insignificant anywhere, including inside a token.
    return _WHITESPACE_RE.sub("", text)


def _optional(recognizer: Recognizer, text: str, pos: int, default: T) -> tuple[int, T]:
    try:
        return recognizer(text, pos)
    except _NoMatch:
        return pos, default


def _first_of(forms: tuple[Recognizer, ...], text: str, pos: int) -> tuple[int, T]:
    """Try each form in order and commit to the first that matches."""
    failure: _NoMatch | None = None
    for form in forms:
        try:
            return form(text, pos)
        except _NoMatch as exc:
            failure = exc
    assert failure is not None
    raise failure


# --- primitives -------------------------------------------------------------


def _at_end_marker(text: str, pos: int) -> bool:
    return pos >= len(text) or text[pos] in _END_MARKERS


def _digits(text: str, pos: int) -> tuple[int, str]:
    m = _DIGITS_RE.match(text, pos)
    if not m:
        raise _NoMatch("digits", text, pos)
    return m.end(), m.group()


def _operator(text: str, pos: int) -> tuple[int, Operation]:
    operation = _OPERATORS.get(text[pos : pos + 1])
    if operation is None:
        raise _NoMatch("'+' or '-'", text, pos)
    return pos + 1, operation


def _dice_separator(text: str, pos: int) -> tuple[int, str]:
    if text[pos : pos + 1].lower() != "d":
        raise _NoMatch("'d'", text, pos)
    return pos + 1, "d"


def _roll_kind(text: str, pos: int) -> tuple[int, RollKind]:
    # The suffix only counts when it closes the term, so the 'd' of a following
    # "d<sides>" is never taken for disadvantage.
    kind = _ROLL_KIND_SUFFIXES.get(text[pos : pos + 1].lower())
    if kind is None or not _at_end_marker(text, pos + 1):
        return pos, RollKind.REGULAR
    return pos + 1, kind


# --- dice terms -------------------------------------------------------------


def _to_int(digits: str, maximum: int) -> int:
    value = int(digits)
    if value > maximum:
        raise ValueError(f"number too large to fit in target type: {digits}")
    return value


def _build_roll(
    count: str | None,
    sides: str,
    operation: Operation | None,
    modifier: str | None,
    roll_kind: RollKind,
) -> DiceRoll:
    try:
        number_of_dice = _to_int(count, MAX_DICE_COUNT) if count else 1
        dice_sides = _to_int(sides, MAX_DICE_SIDES)
        signed_modifier = None
        if operation is not None and modifier is not None:
            signed_modifier = _to_int(modifier, MAX_MODIFIER)
            if operation is Operation.SUBTRACTION:
                signed_modifier = -signed_modifier
    except ValueError as exc:
        raise InvalidNumberInput(str(exc)) from exc

    return DiceRoll(
        dice_sides=dice_sides,
        number_of_dice=number_of_dice,
        modifier=signed_modifier,
        roll_kind=roll_kind,
    )


def _dice_parts(text: str, pos: int) -> tuple[int, tuple[str | None, str]]:
    pos, count = _optional(_digits, text, pos, None)
    pos, _ = _dice_separator(text, pos)
    pos, sides = _digits(text, pos)
    return pos, (count, sides)


def _starts_dice_sides(text: str, pos: int) -> bool:
    try:
        sep_end, _ = _dice_separator(text, pos)
        _digits(text, sep_end)
    except _NoMatch:
        return False
    return True


def _dice_with_modifier(text: str, pos: int) -> tuple[int, DiceRoll]:
    pos, (count, sides) = _dice_parts(text, pos)
    pos, operation = _operator(text, pos)
    pos, modifier = _digits(text, pos)
    # "1d6+2d4" is two terms, not 1d6 with modifier 2 and a stray "d4".
    if _starts_dice_sides(text, pos):
        raise _NoMatch("a modifier not followed by 'd<sides>'", text, pos)
    pos, roll_kind = _roll_kind(text, pos)
    return pos, _build_roll(count, sides, operation, modifier, roll_kind)


def _dice_without_modifier(text: str, pos: int) -> tuple[int, DiceRoll]:
    pos, (count, sides) = _dice_parts(text, pos)
    pos, roll_kind = _roll_kind(text, pos)
    return pos, _build_roll(count, sides, None, None, roll_kind)


# Order matters: the modifier form is the more specific pattern.
_DICE_TERM_FORMS: tuple[Recognizer, ...] = (_dice_with_modifier, _dice_without_modifier)


def _dice_term(text: str, pos: int) -> tuple[int, DiceRoll]:
    return _first_of(_DICE_TERM_FORMS, text, pos)


# --- statements and groups --------------------------------------------------


def _initial_statement(text: str, pos: int) -> tuple[int, RollWithOperation]:
    pos, operation = _optional(_operator, text, pos, Operation.ADDITION)
    pos, roll = _dice_term(text, pos)
    return pos, RollWithOperation(roll=roll, operation=operation)


def _chained_statement(text: str, pos: int) -> tuple[int, RollWithOperation]:
    pos, operation = _operator(text, pos)
    pos, roll = _dice_term(text, pos)
    return pos, RollWithOperation(roll=roll, operation=operation)


def _group(text: str, pos: int) -> tuple[int, RollGroup]:
    pos, first = _initial_statement(text, pos)
    group: RollGroup = [first]
    while True:
        try:
            pos, entry = _chained_statement(text, pos)
        except _NoMatch:
            return pos, group
        group.append(entry)


def _groups(text: str, pos: int) -> tuple[int, ParsedLine]:
    pos, group = _group(text, pos)
    groups: ParsedLine = [group]
    while text.startswith(_GROUP_SEPARATOR, pos):
        try:
            next_pos, group = _group(text, pos + len(_GROUP_SEPARATOR))
        except _NoMatch:
            # Leave the separator unconsumed; it is reported as trailing input.
            break
        groups.append(group)
        pos = next_pos
    return pos, groups


# --- entry points -----------------------------------------------------------


def parse_line(text: str) -> ParsedLine:
    """Parse one line of dice notation into comma-separated groups of rolls.

    Raises ParseError when the text does not match the grammar or is not fully
    consumed, and InvalidNumberInput when a count, side or modifier does not
    fit its integer width. Nothing partial is ever returned.
    """

    compact = normalize_text(text)
    try:
        pos, groups = _groups(compact, 0)
    except _NoMatch as exc:
        logger.debug("Rejected %r: %s", text, exc.describe())
        raise ParseError(exc.describe()) from None
    except InvalidNumberInput as exc:
        logger.debug("Rejected %r: %s", text, exc.detail)
        raise

    remaining = compact[pos:].strip()
    if remaining:
        logger.debug("Rejected %r: trailing input %r", text, remaining)
        raise ParseError(f"Expected remaining input to be empty, found: {remaining}")
    if not groups:
        raise UnknownError()

    logger.debug("Parsed %r into %d group(s)", text, len(groups))
    return groups


def parse_request(text: str) -> ParsedNotation:
    groups = parse_line(text)
    return ParsedNotation(
        input=text,
        normalized_input=normalize_text(text),
        groups=groups,
        normalized_expression=to_notation(groups),
    )
