import pytest

from scout.tools.registry import DEFAULT_REGISTRY


def validate(args):
    return DEFAULT_REGISTRY.validate("computer", args)


def test_coordinate_upper_bounds_are_inclusive():
    outcome = validate({"action": "left_click", "coordinate": [1024, 768]})
    assert outcome.ok
    assert outcome.arguments == {"action": "left_click", "coordinate": [1024, 768]}


@pytest.mark.parametrize(
    ("coordinate", "field"),
    [([1025, 10], "coordinate.0"), ([10, 769], "coordinate.1"), ([-1, 0], "coordinate.0")],
)
def test_coordinate_out_of_screen_is_rejected(coordinate, field):
    outcome = validate({"action": "left_click", "coordinate": coordinate})
    assert not outcome.ok
    assert outcome.violations[0].startswith(f"{field}:")


def test_origin_is_on_screen():
    assert validate({"action": "mouse_move", "coordinate": [0, 0]}).ok


@pytest.mark.parametrize(
    "action", ["mouse_move", "left_click", "right_click", "middle_click", "double_click", "triple_click"]
)
def test_pointer_actions_require_coordinate(action):
    outcome = validate({"action": action})
    assert outcome.violations == (f"coordinate: required for action '{action}'",)


def test_drag_requires_both_coordinates():
    outcome = validate({"action": "left_click_drag", "coordinate": [5, 5]})
    assert outcome.violations == ("start_coordinate: required for action 'left_click_drag'",)
    assert validate(
        {"action": "left_click_drag", "coordinate": [5, 5], "start_coordinate": [1, 1]}
    ).ok


@pytest.mark.parametrize("action", ["type", "key"])
def test_text_actions_require_non_empty_text(action):
    assert not validate({"action": action}).ok
    assert not validate({"action": action, "text": ""}).ok
    assert validate({"action": action, "text": "ctrl+s"}).ok


def test_hold_key_requires_text_and_duration():
    outcome = validate({"action": "hold_key"})
    assert outcome.violations == (
        "text: required for action 'hold_key'",
        "duration: required for action 'hold_key'",
    )
    assert validate({"action": "hold_key", "text": "shift", "duration": 1.5}).ok


def test_wait_without_duration_is_rejected():
    assert validate({"action": "wait"}).violations == ("duration: required for action 'wait'",)
    assert validate({"action": "wait", "duration": 2}).ok
    assert not validate({"action": "wait", "duration": 0}).ok


def test_scroll_requires_direction_and_amount():
    missing_amount = validate({"action": "scroll", "scroll_direction": "down"})
    assert missing_amount.violations == ("scroll_amount: required for action 'scroll'",)
    missing_direction = validate({"action": "scroll", "scroll_amount": 3})
    assert missing_direction.violations == ("scroll_direction: required for action 'scroll'",)
    assert validate({"action": "scroll", "scroll_direction": "up", "scroll_amount": 0}).ok
    assert not validate({"action": "scroll", "scroll_direction": "up", "scroll_amount": -1}).ok


@pytest.mark.parametrize("action", ["screenshot", "cursor_position", "left_mouse_down", "left_mouse_up"])
def test_actions_without_requirements(action):
    assert validate({"action": action}).arguments == {"action": action}


def test_unknown_action_is_rejected():
    outcome = validate({"action": "teleport"})
    assert not outcome.ok
    assert outcome.violations[0].startswith("action:")


@pytest.mark.parametrize("coordinate", [["1024", "768"], [True, False], [10.5, 20]])
def test_coordinate_components_must_be_integers(coordinate):
    outcome = validate({"action": "left_click", "coordinate": coordinate})
    assert not outcome.ok
    assert outcome.violations[0].startswith("coordinate.0:")


@pytest.mark.parametrize(
    ("args", "field"),
    [
        ({"action": "scroll", "coordinate": [1, 1], "scroll_direction": "down", "scroll_amount": "3"}, "scroll_amount"),
        ({"action": "scroll", "coordinate": [1, 1], "scroll_direction": "down", "scroll_amount": True}, "scroll_amount"),
        ({"action": "wait", "duration": "2"}, "duration"),
        ({"action": "wait", "duration": True}, "duration"),
    ],
)
def test_numeric_fields_reject_strings_and_booleans(args, field):
    outcome = validate(args)
    assert not outcome.ok
    assert outcome.violations[0].startswith(f"{field}:")
