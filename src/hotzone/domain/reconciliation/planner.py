"""Row classification against an in-memory snapshot of the actor's records.

Responsibilities of this stage:
- resolve container names to container ids
- reject intra-batch duplicates, invalid rows and unknown ids
- classify every remaining row as update, create or no-op

``classify_row`` is pure: it reads the snapshot and container directory but
never mutates them, and returns one tagged outcome per row. Accumulation into
a ``ReconciliationPlan`` is left to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from hotzone.domain.model import ItemCategory

from .compare import changed_fields
from .deduplicate import DUPLICATE_IN_BATCH_MESSAGE, find_batch_duplicates
from .fields import CONTAINER_ID_FIELD, FieldKind, schema_for
from .keys import composite_key, record_key
from .normalize import (
    InvalidFieldValueError,
    coerce_decimal,
    coerce_flag,
    coerce_int,
    coerce_text,
    normalize_cell,
    render_number,
)
from .plan import (
    CreateOutcome,
    NoOpOutcome,
    ReconciliationPlan,
    RejectOutcome,
    RejectReason,
    UpdateOutcome,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from hotzone.domain.model import Container, InventoryItem, Zone

    from .keys import CompositeKey
    from .plan import BatchRow, FieldSet, RowOutcome

log = logging.getLogger(__name__)

EXISTING_DUPLICATE_MESSAGE = (
    "Cannot create this row - duplicate error: item may already exist in database"
)


def normalize_identifier(raw: object) -> str | None:
    """Canonical text form of an explicit id; ``None`` when the cell is blank.

    Spreadsheets render numeric ids as ``42``, ``42.0`` or ``"042"``; all of
    them normalize to ``"42"``.
    """

    value = normalize_cell(raw)
    if value is None:
        return None
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, (int, float)):
        return render_number(value)
    if value.isdigit():
        return str(int(value))
    return value


def _fold_name(name: str) -> str:
    return name.strip().lower()


@dataclass(frozen=True, slots=True)
class RecordSnapshot:
    """Existing records of one category, indexed by id and by composite key."""

    category: ItemCategory
    by_id: Mapping[str, InventoryItem] = field(default_factory=dict["str", "InventoryItem"])
    keys: frozenset[CompositeKey] = frozenset()

    @classmethod
    def build(
        cls,
        category: ItemCategory,
        records: Iterable[InventoryItem],
        *,
        user_id: int,
    ) -> RecordSnapshot:
        by_id: dict[str, InventoryItem] = {}
        keys: set[CompositeKey] = set()
        for record in records:
            if record.category is not category or not record.is_owned_by(user_id):
                continue
            identifier = normalize_identifier(record.id)
            if identifier is not None:
                by_id[identifier] = record
            keys.add(record_key(record))
        return cls(category=category, by_id=by_id, keys=frozenset(keys))

    def find(self, identifier: str) -> InventoryItem | None:
        return self.by_id.get(identifier)

    def contains_key(self, key: CompositeKey) -> bool:
        return key in self.keys

    def __len__(self) -> int:
        return len(self.by_id)


class ContainerDirectory:
    """Case-insensitive container name lookup for one user's catalog.

    Names are unique per zone, not per user. When several containers share a
    name, the row's ``zone_name`` picks between them; otherwise the first one in
    catalog order wins.
    """

    def __init__(self, containers: Iterable[Container], zones: Iterable[Zone] = ()) -> None:
        self._zone_names: dict[int | None, str] = {zone.id: _fold_name(zone.name) for zone in zones}
        self._by_name: dict[str, list[Container]] = {}
        for container in containers:
            self._by_name.setdefault(_fold_name(container.name), []).append(container)

    def resolve(self, name: str, *, zone_name: str | None = None) -> Container | None:
        candidates = self._by_name.get(_fold_name(name), [])
        if len(candidates) > 1 and zone_name is not None:
            in_zone = [
                candidate
                for candidate in candidates
                if self._zone_names.get(candidate.zone_id) == _fold_name(zone_name)
            ]
            candidates = in_zone or candidates
        return candidates[0] if candidates else None

    def __len__(self) -> int:
        return sum(len(containers) for containers in self._by_name.values())


def resolve_container(row: BatchRow, directory: ContainerDirectory) -> Container | RejectOutcome:
    name = row.container_name
    if name is None:
        return RejectOutcome(
            row=row,
            reason=RejectReason.MISSING_CONTAINER,
            message="Missing container_name",
        )
    container = directory.resolve(name, zone_name=row.zone_name)
    if container is None:
        return RejectOutcome(
            row=row,
            reason=RejectReason.CONTAINER_NOT_FOUND,
            message=f'Container "{name}" not found',
        )
    return container


def build_field_set(row: BatchRow, *, container_id: int) -> FieldSet:
    """Coerce a row's raw cells into the typed values stored for its category.

    Raises ``InvalidFieldValueError`` for non-numeric text in numeric fields.
    """

    fields: FieldSet = {CONTAINER_ID_FIELD: container_id}
    for spec in schema_for(row.category).fields:
        raw = row.values.get(spec.name)
        match spec.kind:
            case FieldKind.TEXT:
                fields[spec.name] = coerce_text(raw)
            case FieldKind.INTEGER:
                number = coerce_int(spec.name, raw)
                fields[spec.name] = spec.default if number is None else number
            case FieldKind.DECIMAL:
                fields[spec.name] = coerce_decimal(spec.name, raw)
            case FieldKind.FLAG:
                fields[spec.name] = coerce_flag(raw)
    return fields


def classify_row(
    row: BatchRow,
    *,
    container_id: int,
    snapshot: RecordSnapshot,
) -> RowOutcome:
    """Classify one row whose container is already resolved."""

    schema = schema_for(row.category)
    if schema.missing_required(row.values):
        return RejectOutcome(
            row=row,
            reason=RejectReason.MISSING_REQUIRED_FIELDS,
            message=schema.missing_required_message(),
        )

    try:
        fields = build_field_set(row, container_id=container_id)
    except InvalidFieldValueError as exc:
        return RejectOutcome(row=row, reason=RejectReason.INVALID_VALUE, message=str(exc))

    identifier = normalize_identifier(row.raw_id)
    if identifier is not None:
        record = snapshot.find(identifier)
        if record is None or record.id is None:
            return RejectOutcome(
                row=row,
                reason=RejectReason.UNKNOWN_ID,
                message=(
                    f"No {row.category.value} found with id: {identifier} "
                    "(or it belongs to another user)"
                ),
            )
        changed = changed_fields(record, fields)
        if not changed:
            return NoOpOutcome(row=row, target_id=record.id)
        return UpdateOutcome(row=row, target_id=record.id, fields=fields, changed=changed)

    if snapshot.contains_key(composite_key(row.category, container_id, row.values)):
        return RejectOutcome(
            row=row,
            reason=RejectReason.DUPLICATE_EXISTING,
            message=EXISTING_DUPLICATE_MESSAGE,
        )
    return CreateOutcome(row=row, fields=fields)


def plan_category(
    rows: Sequence[BatchRow],
    *,
    snapshot: RecordSnapshot,
    directory: ContainerDirectory,
) -> list[RowOutcome]:
    """Classify all rows of one category, in row order."""

    resolved: dict[int, Container | RejectOutcome] = {
        row.row_number: resolve_container(row, directory) for row in rows
    }
    keyed_rows: list[tuple[int, CompositeKey]] = []
    for row in rows:
        container = resolved[row.row_number]
        if isinstance(container, RejectOutcome):
            continue
        key = composite_key(row.category, _container_id(container), row.values)
        keyed_rows.append((row.row_number, key))
    duplicates = find_batch_duplicates(keyed_rows)
    if duplicates.duplicate_groups:
        log.info(
            "Found %s duplicate %s rows in upload: %s",
            len(duplicates.duplicate_rows),
            snapshot.category.value,
            duplicates.duplicate_groups,
        )

    outcomes: list[RowOutcome] = []
    for row in rows:
        container = resolved[row.row_number]
        if isinstance(container, RejectOutcome):
            outcomes.append(container)
        elif duplicates.is_duplicate(row.row_number):
            outcomes.append(
                RejectOutcome(
                    row=row,
                    reason=RejectReason.DUPLICATE_IN_BATCH,
                    message=DUPLICATE_IN_BATCH_MESSAGE,
                )
            )
        else:
            outcomes.append(
                classify_row(row, container_id=_container_id(container), snapshot=snapshot)
            )
    return outcomes


def plan_upload(
    rows_by_category: Mapping[ItemCategory, Sequence[BatchRow]],
    *,
    snapshots: Mapping[ItemCategory, RecordSnapshot],
    directory: ContainerDirectory,
) -> ReconciliationPlan:
    """Classify every row of every category into one plan (cards before comics)."""

    plan = ReconciliationPlan()
    for category in ItemCategory:
        rows = rows_by_category.get(category, ())
        snapshot = snapshots.get(category)
        if snapshot is None:
            snapshot = RecordSnapshot(category=category)
        for outcome in plan_category(rows, snapshot=snapshot, directory=directory):
            _log_outcome(outcome)
            plan.add(outcome)
    return plan


def _container_id(container: Container) -> int:
    if container.id is None:
        raise ValueError(f"Container {container.name!r} has not been persisted")
    return container.id


def _log_outcome(outcome: RowOutcome) -> None:
    match outcome:
        case RejectOutcome():
            log.debug(
                "Rejected %s row %s (%s): %s",
                outcome.row.category.value,
                outcome.row.row_number,
                outcome.reason.value,
                outcome.message,
            )
        case UpdateOutcome():
            log.debug(
                "Update %s id=%s from row %s, changed=%s",
                outcome.row.category.value,
                outcome.target_id,
                outcome.row.row_number,
                ", ".join(outcome.changed),
            )
