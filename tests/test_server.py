import pytest

from mcp_dice_notation.server import parse_dice_notation


def test_parse_dice_notation_tool():
    result = parse_dice_notation("1d20 + 5 a, 2d6")

    assert result["input"] == "1d20 + 5 a, 2d6"
    assert result["normalized_expression"] == "1d20+5a,2d6"
    assert [len(group) for group in result["groups"]] == [1, 1]
    assert result["groups"][0][0]["roll_kind"] == "advantage"
    assert result["groups"][0][0]["modifier"] == 5


@pytest.mark.parametrize(
    ("text", "prefix"),
    [
        ("1d6extra", "[PARSE_ERROR]"),
        ("", "[PARSE_ERROR]"),
        ("1d6+2147483648", "[INVALID_NUMBER_INPUT]"),
    ],
)
def test_parse_dice_notation_rejections(text, prefix):
    with pytest.raises(ValueError) as exc:
        parse_dice_notation(text)
    assert type(exc.value) is ValueError
    assert str(exc.value).startswith(prefix)
