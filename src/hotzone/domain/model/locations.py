"""Users and the zone → container location hierarchy."""

from __future__ import annotations

from dataclasses import dataclass

from hotzone.domain.model.base import Entity, OwnedEntity


@dataclass(eq=False, kw_only=True)
class User(Entity):
    display_name: str
    email: str | None = None


@dataclass(eq=False, kw_only=True)
class Zone(OwnedEntity):
    """Top-level place (a room, a shelf unit) holding containers."""

    name: str


@dataclass(eq=False, kw_only=True)
class Container(OwnedEntity):
    """A box, binder or long box inside a zone; items reference containers."""

    zone_id: int
    name: str
