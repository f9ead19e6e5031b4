from __future__ import annotations

import enum


class ErrorKind(enum.Enum):
    PARSE_ERROR = "PARSE_ERROR"
    INVALID_NUMBER_INPUT = "INVALID_NUMBER_INPUT"
    UNKNOWN = "UNKNOWN"


class ParserError(ValueError):
    """Base class for everything `parse_line` raises.

    Instances carry data only (`kind` and `detail`); turn them into user-facing
    text with `format_error`.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail)
        self.detail = detail

    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and other.detail == self.detail

    def __hash__(self) -> int:
        return hash((type(self), self.detail))


class ParseError(ParserError):
    """The text does not match the grammar, or input is left over."""

    kind = ErrorKind.PARSE_ERROR


class InvalidNumberInput(ParserError):
    """A digit run does not fit its target integer width.

    The conversion failure is chained as ``__cause__``.
    """

    kind = ErrorKind.INVALID_NUMBER_INPUT


class UnknownError(ParserError):
    kind = ErrorKind.UNKNOWN


_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.PARSE_ERROR: "An error occurred while parsing the input. {detail}",
    ErrorKind.INVALID_NUMBER_INPUT: "An invalid number was entered.",
    ErrorKind.UNKNOWN: "An unknown error occurred.",
}


def format_error(err: ParserError) -> str:
    message = _MESSAGES[err.kind].format(detail=err.detail).strip()
    return f"[{err.kind.value}] {message}"
