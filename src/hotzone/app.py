"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from hotzone.adapters.spreadsheet import read_workbook, write_workbook
from hotzone.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyInventoryUnitOfWork,
    is_started,
    startup,
)
from hotzone.config import get_storage_config
from hotzone.domain import locations
from hotzone.domain.export import build_export_sheets, export_filename
from hotzone.domain.model import User
from hotzone.domain.overview import inventory_stats, summarize_containers, summarize_zones
from hotzone.domain.ports.unit_of_work import InventoryUnitOfWork
from hotzone.domain.reconciliation import ReconciliationEngine

if TYPE_CHECKING:
    from hotzone.domain.model import Container, Zone
    from hotzone.domain.overview import ContainerSummary, InventoryStats, ZoneSummary
    from hotzone.domain.ports.spreadsheet import SpreadsheetReader, SpreadsheetWriter
    from hotzone.domain.reconciliation import ImportResult

UnitOfWorkFactory = Callable[[], InventoryUnitOfWork]


log = getLogger(__name__)


class UnknownUserError(LookupError):
    """Raised when an operation names a user that does not exist."""


def _resolve_unit_of_work(unit_of_work_factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if unit_of_work_factory is not None:
        return unit_of_work_factory
    if not is_started():
        startup()
    return SqlAlchemyInventoryUnitOfWork


def _require_user(uow: InventoryUnitOfWork, user_id: int) -> User:
    user = uow.repositories.users.get(user_id)
    if user is None:
        raise UnknownUserError(f"No user with id {user_id}")
    return user


def create_user(
    *,
    display_name: str,
    email: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> User:
    name = display_name.strip()
    if not name:
        raise ValueError("Display name must not be blank")
    with _resolve_unit_of_work(unit_of_work_factory)() as uow:
        user = User(display_name=name, email=email)
        uow.repositories.users.add(user)
        uow.commit()
    log.info("Created user %r (id=%s)", user.display_name, user.id)
    return user


def create_zone(
    *,
    user_id: int,
    name: str,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Zone:
    with _resolve_unit_of_work(unit_of_work_factory)() as uow:
        _require_user(uow, user_id)
        return locations.create_zone(uow, user_id=user_id, name=name)


def create_container(
    *,
    user_id: int,
    zone_name: str,
    name: str,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Container:
    with _resolve_unit_of_work(unit_of_work_factory)() as uow:
        _require_user(uow, user_id)
        return locations.create_container(uow, user_id=user_id, zone_name=zone_name, name=name)


def import_spreadsheet(
    data: bytes,
    *,
    user_id: int,
    reader: SpreadsheetReader | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> ImportResult:
    """Reconcile an uploaded workbook against the inventory of ``user_id``."""

    effective_uow = _resolve_unit_of_work(unit_of_work_factory)
    with effective_uow() as uow:
        _require_user(uow, user_id)

    log.info("Starting spreadsheet import for user %s (%s bytes)", user_id, len(data))
    engine = ReconciliationEngine(
        read_workbook=reader or read_workbook,
        unit_of_work_factory=effective_uow,
    )
    return engine.reconcile(data, user_id=user_id)


def export_spreadsheet(
    *,
    user_id: int,
    output: Path | None = None,
    today: date | None = None,
    writer: SpreadsheetWriter | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Path:
    """Write every item owned by ``user_id`` to a re-importable workbook."""

    with _resolve_unit_of_work(unit_of_work_factory)() as uow:
        _require_user(uow, user_id)
        repositories = uow.repositories
        cards = repositories.cards.list_for_user(user_id)
        comics = repositories.comics.list_for_user(user_id)
        sheets = build_export_sheets(
            cards,
            comics,
            repositories.containers.list_for_user(user_id),
            repositories.zones.list_for_user(user_id),
        )

    target = output or get_storage_config().export_dir() / export_filename(today or date.today())
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes((writer or write_workbook)(sheets))
    log.info(
        "Exported %s cards and %s comics for user %s to %s",
        len(cards),
        len(comics),
        user_id,
        target,
    )
    return target


def list_zones(
    *,
    user_id: int,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[ZoneSummary]:
    """Zones of ``user_id`` with their container and item counts."""

    with _resolve_unit_of_work(unit_of_work_factory)() as uow:
        _require_user(uow, user_id)
        repositories = uow.repositories
        return summarize_zones(
            repositories.zones.list_for_user(user_id),
            repositories.containers.list_for_user(user_id),
            repositories.cards.list_for_user(user_id),
            repositories.comics.list_for_user(user_id),
        )


def list_containers(
    *,
    user_id: int,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[ContainerSummary]:
    """Containers of ``user_id``; their names are what import rows must reference."""

    with _resolve_unit_of_work(unit_of_work_factory)() as uow:
        _require_user(uow, user_id)
        repositories = uow.repositories
        return summarize_containers(
            repositories.containers.list_for_user(user_id),
            repositories.zones.list_for_user(user_id),
            repositories.cards.list_for_user(user_id),
            repositories.comics.list_for_user(user_id),
        )


def inventory_overview(
    *,
    user_id: int,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> InventoryStats:
    with _resolve_unit_of_work(unit_of_work_factory)() as uow:
        _require_user(uow, user_id)
        repositories = uow.repositories
        return inventory_stats(
            repositories.zones.list_for_user(user_id),
            repositories.containers.list_for_user(user_id),
            repositories.cards.list_for_user(user_id),
            repositories.comics.list_for_user(user_id),
        )
