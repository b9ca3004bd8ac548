"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from hotzone.domain.model import ItemCategory

if TYPE_CHECKING:
    from types import TracebackType

    from hotzone.domain.model import InventoryItem
    from hotzone.domain.ports.persistence import (
        CardRepository,
        ComicRepository,
        ContainerRepository,
        ItemRepository,
        UserRepository,
        ZoneRepository,
    )


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection."""

    @property
    def repositories(self) -> TRepositories: ...  # the repo list itself should be immutable

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@dataclass(slots=True)
class InventoryRepositories(RepositoryCollection):
    """Repositories covering users, locations and both item categories."""

    users: UserRepository
    zones: ZoneRepository
    containers: ContainerRepository
    cards: CardRepository
    comics: ComicRepository

    def items(self, category: ItemCategory) -> ItemRepository[InventoryItem]:
        if category is ItemCategory.CARD:
            return self.cards  # pyright: ignore[reportReturnType]
        return self.comics  # pyright: ignore[reportReturnType]


type InventoryUnitOfWork = UnitOfWork[InventoryRepositories]
