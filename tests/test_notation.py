import pytest

from mcp_dice_notation.notation import format_roll, groups_to_dicts, to_notation
from mcp_dice_notation.parser import parse_line, parse_request


@pytest.mark.parametrize(
    ("text", "normalized_expression"),
    [
        ("d20", "1d20"),
        ("+2d6 + 3", "2d6+3"),
        ("d20 + 1d6-2, -2d8a", "1d20+1d6-2,-2d8a"),
        ("1d20-1D", "1d20-1d"),
        ("1d4+2d6-1d8", "1d4+2d6-1d8"),
    ],
)
def test_normalized_expression(text, normalized_expression):
    parsed = parse_request(text)
    assert parsed.input == text
    assert parsed.normalized_expression == normalized_expression
    assert parse_line(normalized_expression) == parsed.groups


def test_format_roll_includes_modifier_sign():
    [[first, second]] = parse_line("3d8+0-d6-4")
    assert format_roll(first.roll) == "3d8+0"
    assert format_roll(second.roll) == "1d6-4"
    assert to_notation([[first, second]]) == "3d8+0-1d6-4"


def test_groups_to_dicts():
    assert groups_to_dicts(parse_line("2d6+3,-d20d")) == [
        [
            {
                "operation": "addition",
                "number_of_dice": 2,
                "dice_sides": 6,
                "modifier": 3,
                "roll_kind": "regular",
                "notation": "2d6+3",
            }
        ],
        [
            {
                "operation": "subtraction",
                "number_of_dice": 1,
                "dice_sides": 20,
                "modifier": None,
                "roll_kind": "disadvantage",
                "notation": "1d20d",
            }
        ],
    ]
