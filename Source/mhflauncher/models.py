"""
Session model: the server-issued state for the current login.

The server is trusted to assign unique character ids; the client only keeps
that property intact while applying its own create/delete results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr
from pydantic.alias_generators import to_camel


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str = field(repr=False)


class WireModel(BaseModel):
    """Base for server payloads: lowerCamelCase keys on the wire, no coercion."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Empty(WireModel):
    """Body of responses that carry no data."""


class User(WireModel):
    rights: StrictInt
    token: StrictStr = Field(repr=False)


class Character(WireModel):
    id: StrictInt
    name: StrictStr
    # Older servers omit isNew for existing characters
    is_new: StrictBool = False
    is_female: StrictBool
    weapon: StrictInt
    hr: StrictInt
    gr: StrictInt
    last_login: StrictInt


class MezFes(WireModel):
    """Active MezFes event; stall codes stay raw until launch time."""

    id: StrictInt
    start: StrictInt
    end: StrictInt
    solo_tickets: StrictInt
    group_tickets: StrictInt
    stalls: List[StrictInt]


class Session(WireModel):
    current_ts: StrictInt
    expiry_ts: StrictInt
    entrance_count: StrictInt
    notifications: List[StrictStr]
    user: User
    characters: List[Character]
    mez_fes: Optional[MezFes] = None

    @classmethod
    def empty(cls) -> "Session":
        return cls(
            current_ts=0,
            expiry_ts=0,
            entrance_count=0,
            notifications=[],
            user=User(rights=0, token=""),
            characters=[],
        )

    # --- Characters ---
    def character_ids(self) -> List[int]:
        return [c.id for c in self.characters]

    def find_character(self, char_id: int) -> Optional[Character]:
        for c in self.characters:
            if c.id == char_id:
                return c
        return None

    def add_character(self, character: Character) -> None:
        for i, c in enumerate(self.characters):
            if c.id == character.id:
                self.characters[i] = character
                return
        self.characters.append(character)

    def remove_character(self, char_id: int) -> None:
        self.characters = [c for c in self.characters if c.id != char_id]
