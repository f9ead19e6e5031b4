from __future__ import annotations

import logging
import sys
from typing import Any

from mcp.server.fastmcp import FastMCP

from .config import settings
from .errors import ParserError, format_error
from .notation import groups_to_dicts
from .parser import parse_request


logger = logging.getLogger(__name__)

mcp = FastMCP(settings.server_name)


def parse_notation_payload(text: str) -> dict[str, Any]:
    parsed = parse_request(text)
    return {
        "input": parsed.input,
        "normalized_expression": parsed.normalized_expression,
        "groups": groups_to_dicts(parsed.groups),
    }


@mcp.tool()
def parse_dice_notation(text: str):
    """Parse one line of dice notation such as '2d6+3,1d20a-1'.

    Input: text (string)
    Output: structured JSON with one list of terms per comma-separated group

    Raises a hard error (exception) on invalid input.
    """

    try:
        return parse_notation_payload(text)
    except ParserError as e:
        logger.info("Rejected dice notation %r: %s", text, format_error(e))
        # Fail-fast: surface stable error codes in the message.
        raise ValueError(format_error(e)) from None


def configure_logging(level: str) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=level.upper(),
        format="[%(asctime)s] [%(levelname)s] [%(name)s] - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def run() -> None:
    configure_logging(settings.log_level)
    # Default transport is stdio.
    mcp.run()


if __name__ == "__main__":
    run()
