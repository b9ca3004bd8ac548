from __future__ import annotations

from hotzone.domain.reconciliation.deduplicate import find_batch_duplicates


def test_every_member_of_a_colliding_group_is_flagged() -> None:
    duplicates = find_batch_duplicates([(2, "a"), (3, "b"), (4, "a"), (5, "a")])

    assert duplicates.duplicate_rows == frozenset({2, 4, 5})
    assert duplicates.duplicate_groups == ((2, 4, 5),)
    assert not duplicates.is_duplicate(3)


def test_unique_rows_produce_no_groups() -> None:
    duplicates = find_batch_duplicates([(2, "a"), (3, "b")])

    assert duplicates.duplicate_groups == ()
    assert duplicates.duplicate_rows == frozenset()


def test_empty_batch() -> None:
    assert find_batch_duplicates([]).duplicate_rows == frozenset()


def test_duplicate_rows_are_computed_once_per_batch() -> None:
    keyed_rows = [(row_number, str(row_number % 500)) for row_number in range(2, 5002)]

    duplicates = find_batch_duplicates(keyed_rows)

    assert duplicates.duplicate_rows is duplicates.duplicate_rows
    assert len(duplicates.duplicate_rows) == 5000
    assert all(duplicates.is_duplicate(row_number) for row_number, _ in keyed_rows)
