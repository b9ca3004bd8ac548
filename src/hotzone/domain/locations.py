"""Zone and container management for one user's location hierarchy."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hotzone.domain.model import Container, Zone

if TYPE_CHECKING:
    from hotzone.domain.ports.unit_of_work import InventoryUnitOfWork

log = logging.getLogger(__name__)


class LocationError(ValueError):
    """Raised when a zone or container cannot be created as requested."""


def _clean_name(kind: str, name: str) -> str:
    cleaned = name.strip()
    if not cleaned:
        raise LocationError(f"{kind} name must not be blank")
    return cleaned


def create_zone(uow: InventoryUnitOfWork, *, user_id: int, name: str) -> Zone:
    """Create a zone for ``user_id``; names are unique per user (case-insensitive)."""

    zone_name = _clean_name("Zone", name)
    zones = uow.repositories.zones
    if zones.get_by_name(user_id, zone_name) is not None:
        raise LocationError(f'Zone "{zone_name}" already exists')
    zone = Zone(user_id=user_id, name=zone_name)
    zones.add(zone)
    uow.commit()
    log.info("Created zone %r (id=%s) for user %s", zone.name, zone.id, user_id)
    return zone


def create_container(
    uow: InventoryUnitOfWork,
    *,
    user_id: int,
    zone_name: str,
    name: str,
) -> Container:
    """Create a container inside an existing zone owned by ``user_id``."""

    container_name = _clean_name("Container", name)
    zone = uow.repositories.zones.get_by_name(user_id, _clean_name("Zone", zone_name))
    if zone is None or zone.id is None:
        raise LocationError(f'Zone "{zone_name.strip()}" not found')

    containers = uow.repositories.containers
    if containers.get_by_name(user_id, zone.id, container_name) is not None:
        raise LocationError(
            f'Container "{container_name}" already exists in zone "{zone.name}"'
        )
    container = Container(user_id=user_id, zone_id=zone.id, name=container_name)
    containers.add(container)
    uow.commit()
    log.info(
        "Created container %r (id=%s) in zone %r for user %s",
        container.name,
        container.id,
        zone.name,
        user_id,
    )
    return container
