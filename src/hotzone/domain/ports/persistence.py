"""Ports for persisting domain aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from hotzone.domain.model import Card, Comic, Container, InventoryItem, User, Zone

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


class StoreMutationError(RuntimeError):
    """Raised by store adapters when a single insert/update cannot be applied."""


class DuplicateItemError(StoreMutationError):
    """Raised when an insert violates a uniqueness constraint of the store."""


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class OwnedRepository[TEntity](Repository[TEntity], Protocol):
    """Repository whose reads are scoped to one owning user."""

    def list_for_user(self, user_id: int) -> Sequence[TEntity]: ...


@runtime_checkable
class UserRepository(Repository[User], Protocol):
    """Repository contract for users."""

    def get(self, user_id: int) -> User | None: ...


@runtime_checkable
class ZoneRepository(OwnedRepository[Zone], Protocol):
    """Repository contract for zones."""

    def get_by_name(self, user_id: int, name: str) -> Zone | None: ...


@runtime_checkable
class ContainerRepository(OwnedRepository[Container], Protocol):
    """Repository contract for containers."""

    def get_by_name(self, user_id: int, zone_id: int, name: str) -> Container | None: ...


@runtime_checkable
class ItemRepository[TItem: InventoryItem](OwnedRepository[TItem], Protocol):
    """Repository contract for one item category.

    ``add`` flushes immediately so uniqueness violations surface as
    ``DuplicateItemError`` at the call site.
    """

    def update_owned(
        self,
        item_id: int,
        *,
        user_id: int,
        values: Mapping[str, object],
    ) -> int:
        """Update one item scoped by owner, returning the number of affected rows."""
        ...


@runtime_checkable
class CardRepository(ItemRepository[Card], Protocol):
    """Repository contract for cards."""


@runtime_checkable
class ComicRepository(ItemRepository[Comic], Protocol):
    """Repository contract for comics."""
