# Copyright 2026 Seqdraft Contributors
# SPDX-License-Identifier: Apache-2.0

"""Diagram tree entities produced by the parser."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############

DEFAULT_ROLE = "entity"


class Adornment(Enum):
    """Shape of an arrow end."""

    CLOSED = "closed"
    OPEN = "open"


class Signal(BaseModel):
    """A directed message between two participants.

    At least one of ``head`` and ``tail`` is set; the parser rejects arrows
    with neither.
    """

    kind: Literal["signal"] = "signal"
    source: str
    target: str
    tail: Adornment | None = None
    head: Adornment | None = None
    dotted: bool = False
    message: str | None = None
    activates: bool = False
    deactivates: bool = False

    @property
    def is_self_signal(self) -> bool:
        return self.source == self.target


class ConditionalBlock(BaseModel):
    """A labelled block such as ``opt`` or one branch of an ``alt`` group."""

    kind: Literal["block"] = "block"
    label: Literal["opt", "alt", "else"]
    condition: str | None = None
    statements: list[Statement] = _Field(default_factory=list)


class AltGroup(BaseModel):
    """One ``alt``/``else``/``end`` construct: an ``alt`` block followed by ``else`` blocks."""

    kind: Literal["alt_group"] = "alt_group"
    blocks: list[ConditionalBlock] = _Field(default_factory=list)


# A statement of a sequence; the `kind` discriminator selects the concrete model.
Statement = Annotated[Signal | ConditionalBlock | AltGroup, _Field(discriminator="kind")]


class Diagram(BaseModel):
    """Root of the diagram tree.

    Attributes:
        title: Optional diagram title.
        statements: Top-level statements in document order.
        participants: Participant name to role, in registration order.
        aliases: Alias to canonical participant name.
    """

    title: str | None = None
    statements: list[Statement] = _Field(default_factory=list)
    participants: dict[str, str] = _Field(default_factory=dict)
    aliases: dict[str, str] = _Field(default_factory=dict)

    def participant(self, name: str) -> str | None:
        """Return the role of *name*, or None if it is not a participant."""
        return self.participants.get(name)

    def alias(self, alias: str) -> str | None:
        """Return the participant name bound to *alias*, or None."""
        return self.aliases.get(alias)

    def add_participant(self, name: str, role: str = DEFAULT_ROLE) -> None:
        self.participants[name] = role

    def add_alias(self, alias: str, name: str) -> None:
        self.aliases[alias] = name

    def resolve(self, name: str) -> str:
        """Return the canonical participant name for *name*.

        Aliases are looked up once; an alias bound to another alias is not
        followed further.
        """
        return self.aliases.get(name, name)


# Resolve forward references in self-referential models.
ConditionalBlock.model_rebuild()
AltGroup.model_rebuild()
Diagram.model_rebuild()
