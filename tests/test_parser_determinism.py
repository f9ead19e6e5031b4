from mcp_dice_notation.parser import parse_request


def test_parse_is_deterministic():
    text = "2d6 + 3, 1d20 - 1 a, d4 - 2d8"
    a = parse_request(text)
    b = parse_request(text)

    assert a.normalized_input == b.normalized_input
    assert a.groups == b.groups
    assert a.normalized_expression == b.normalized_expression


def test_results_are_not_shared_between_calls():
    a = parse_request("1d6,1d8")
    b = parse_request("1d6,1d8")

    assert a.groups is not b.groups
    assert a.groups[0] is not b.groups[0]
