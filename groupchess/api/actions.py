"""
Button payloads.

Every selectable button carries one of these actions, encoded as a short string:
`accept:<challenger>:<challenged>`, `decline:<challenger>:<challenged>` or `move:<from><to>`.
Decoding never trusts the payload beyond its shape: the referee re-validates it against live state.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from groupchess.core.exceptions import UnknownActionError
from groupchess.core.models import UserId
from groupchess.core.shared_types import ActionKind

SEPARATOR = ":"
FILES = "abcdefgh"
RANKS = "12345678"


def is_square_name(value: str) -> bool:
    return len(value) == 2 and value[0] in FILES and value[1] in RANKS


class _Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class AcceptAction(_Action):
    kind: Literal["accept"] = "accept"
    challenger: UserId
    challenged: UserId


class DeclineAction(_Action):
    kind: Literal["decline"] = "decline"
    challenger: UserId
    challenged: UserId


class MoveAction(_Action):
    kind: Literal["move"] = "move"
    from_square: str
    to_square: str

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not is_square_name(value):
            raise ValueError(f"Cannot interpret {value!r} as a square name.")
        return value

    @property
    def token(self) -> str:
        return f"{self.from_square}{self.to_square}"


Action = Annotated[
    Union[AcceptAction, DeclineAction, MoveAction], Field(discriminator="kind")
]
_action_adapter: TypeAdapter[Action] = TypeAdapter(Action)


def encode_action(action: Action) -> str:
    if isinstance(action, MoveAction):
        return SEPARATOR.join([action.kind, action.token])
    return SEPARATOR.join([action.kind, str(action.challenger), str(action.challenged)])


def decode_action(data: str) -> Action:
    """Parse a button payload. Anything that is not a well-formed known action raises UnknownActionError."""
    kind, _, rest = data.partition(SEPARATOR)
    fields: dict[str, object] = {"kind": kind}

    if kind == ActionKind.MOVE:
        if len(rest) != 4:
            raise UnknownActionError(f"Malformed move payload: {data!r}")
        fields.update(from_square=rest[:2], to_square=rest[2:])
    elif kind in (ActionKind.ACCEPT, ActionKind.DECLINE):
        parts = rest.split(SEPARATOR)
        if len(parts) != 2 or not all(_is_user_id(part) for part in parts):
            raise UnknownActionError(f"Malformed {kind} payload: {data!r}")
        fields.update(challenger=int(parts[0]), challenged=int(parts[1]))
    else:
        raise UnknownActionError(f"Unknown action tag in payload: {data!r}")

    try:
        return _action_adapter.validate_python(fields)
    except ValidationError as exc:
        raise UnknownActionError(f"Invalid payload {data!r}: {exc}") from exc


def _is_user_id(value: str) -> bool:
    digits = value[1:] if value.startswith("-") else value
    return digits.isascii() and digits.isdigit()
