"""Unit tests for groupchess/api/actions.py"""

import pytest
from pydantic import ValidationError

from groupchess.api.actions import (
    AcceptAction,
    DeclineAction,
    MoveAction,
    decode_action,
    encode_action,
)
from groupchess.core.exceptions import UnknownActionError


# -- Encoding --
def test_encode_accept() -> None:
    assert encode_action(AcceptAction(challenger=11, challenged=22)) == "accept:11:22"


def test_encode_decline() -> None:
    assert encode_action(DeclineAction(challenger=11, challenged=22)) == "decline:11:22"


def test_encode_move() -> None:
    action = MoveAction(from_square="e2", to_square="e4")
    assert action.token == "e2e4"
    assert encode_action(action) == "move:e2e4"


# -- Decoding --
def test_decode_accept() -> None:
    assert decode_action("accept:11:22") == AcceptAction(challenger=11, challenged=22)


def test_decode_decline_with_negative_ids() -> None:
    """Some platforms use negative identifiers."""
    assert decode_action("decline:-11:22") == DeclineAction(challenger=-11, challenged=22)


def test_decode_move() -> None:
    action = decode_action("move:g7g8")
    assert isinstance(action, MoveAction)
    assert (action.from_square, action.to_square) == ("g7", "g8")


@pytest.mark.parametrize(
    "data",
    [
        "",
        "resign:11:22",  # unknown tag
        "accept_11_22",  # legacy separator
        "accept:11",  # missing challenged
        "accept:11:22:33",  # too many parts
        "accept:eleven:22",  # not an id
        "decline::22",  # empty id
        "move:e2e",  # truncated
        "move:e2e4q",  # promotion suffix is not part of the protocol
        "move:i2e4",  # file out of range
        "move:e0e4",  # rank out of range
        "move:",
        "accept:\u00b2:1",  # superscript two is a digit to str.isdigit but not to int
        "decline:1:\u0663\u00b9",  # non-ASCII digits
        "accept:\u0663:1",
    ],
)
def test_decode_rejects_malformed_payloads(data: str) -> None:
    with pytest.raises(UnknownActionError):
        _ = decode_action(data)


def test_move_action_validates_squares() -> None:
    with pytest.raises(ValidationError):
        _ = MoveAction(from_square="e9", to_square="e4")


def test_actions_are_immutable() -> None:
    action = AcceptAction(challenger=1, challenged=2)
    with pytest.raises(ValidationError):
        action.challenged = 3
