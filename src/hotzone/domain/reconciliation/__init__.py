"""Bulk spreadsheet reconciliation against a user's inventory.

Layered flow:
1) parse the workbook into rows per category sheet
2) snapshot the user's existing records and container catalog
3) resolve container names and reject intra-batch duplicates
4) classify each row as update, create, no-op or reject
5) apply updates, then creates, one row at a time
6) report counts and per-row errors
"""

from __future__ import annotations

from .engine import ImportResult, ImportStatus, ReconciliationEngine
from .executor import CategoryCounts, ExecutionResult, execute_plan
from .fields import CARD_SCHEMA, COMIC_SCHEMA, CategorySchema, schema_for
from .keys import CompositeKey, composite_key, record_key
from .plan import (
    BatchRow,
    CreateOutcome,
    NoOpOutcome,
    ReconciliationPlan,
    RejectOutcome,
    RejectReason,
    RowError,
    RowOutcome,
    UpdateOutcome,
)
from .planner import ContainerDirectory, RecordSnapshot, classify_row, plan_upload

__all__ = [
    "CARD_SCHEMA",
    "COMIC_SCHEMA",
    "BatchRow",
    "CategoryCounts",
    "CategorySchema",
    "CompositeKey",
    "ContainerDirectory",
    "CreateOutcome",
    "ExecutionResult",
    "ImportResult",
    "ImportStatus",
    "NoOpOutcome",
    "ReconciliationEngine",
    "ReconciliationPlan",
    "RecordSnapshot",
    "RejectOutcome",
    "RejectReason",
    "RowError",
    "RowOutcome",
    "UpdateOutcome",
    "classify_row",
    "composite_key",
    "execute_plan",
    "plan_upload",
    "record_key",
    "schema_for",
]
