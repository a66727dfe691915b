"""Tests for the exercise catalog: add/remove ordering, clamping, locking."""

import uuid

import pytest

from mytrainer.workout.catalog import (
    ExerciseCatalog, ExerciseEntry, clamp_duration, snap_duration,
    MIN_DURATION, MAX_DURATION, DURATION_STEP, DEFAULT_DURATION,
)


@pytest.fixture
def catalog():
    return ExerciseCatalog()


class TestConstants:

    def test_duration_range(self):
        assert MIN_DURATION == 10
        assert MAX_DURATION == 600
        assert DURATION_STEP == 10
        assert DEFAULT_DURATION == 60

    @pytest.mark.parametrize("raw, expected", [
        (0, 10), (-5, 10), (9, 10), (10, 10), (45, 45), (600, 600), (601, 600), (10_000, 600),
    ])
    def test_clamp_duration(self, raw, expected):
        assert clamp_duration(raw) == expected

    @pytest.mark.parametrize("raw, expected", [
        (14, 10), (15, 20), (16, 20), (25, 30), (35, 40), (63, 60), (3, 10), (1000, 600),
    ])
    def test_snap_duration(self, raw, expected):
        assert snap_duration(raw) == expected


class TestEntry:

    def test_spoken_instruction(self):
        e = ExerciseEntry(name="Push-ups", duration=30)
        assert e.spoken_instruction == "Push-ups for 30 seconds"

    def test_display_text(self):
        e = ExerciseEntry(name="Plank", duration=20)
        assert e.display_text == "Plank - 20 seconds"

    def test_ids_are_unique(self):
        a = ExerciseEntry(name="A", duration=10)
        b = ExerciseEntry(name="A", duration=10)
        assert isinstance(a.id, uuid.UUID)
        assert a.id != b.id

    def test_not_spoken_initially(self):
        assert ExerciseEntry(name="A", duration=10).has_been_spoken is False


class TestAdd:

    def test_add_appends_in_order(self, catalog):
        catalog.add("Push-ups", 30)
        catalog.add("Plank", 20)
        catalog.add("Squats", 40)
        assert [e.name for e in catalog] == ["Push-ups", "Plank", "Squats"]

    def test_add_returns_entry(self, catalog):
        entry = catalog.add("Lunges", 50)
        assert entry is catalog[0]
        assert entry.duration == 50

    def test_add_clamps_duration(self, catalog):
        low = catalog.add("Low", 0)
        high = catalog.add("High", 9999)
        assert low.duration == MIN_DURATION
        assert high.duration == MAX_DURATION

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_empty_name_is_noop(self, catalog, name):
        catalog.add("Keep", 10)
        assert catalog.add(name, 30) is None
        assert len(catalog) == 1

    def test_name_is_stripped(self, catalog):
        assert catalog.add("  Burpees ", 10).name == "Burpees"

    def test_total_duration(self, catalog):
        catalog.add("A", 10)
        catalog.add("B", 25)
        assert catalog.total_duration() == 35

    def test_total_duration_empty(self, catalog):
        assert catalog.total_duration() == 0


class TestRemove:

    def test_remove_preserves_order(self, catalog):
        for name in ("A", "B", "C", "D"):
            catalog.add(name, 10)
        assert catalog.remove(1) is True
        assert [e.name for e in catalog] == ["A", "C", "D"]

    @pytest.mark.parametrize("index", [-1, 3, 99])
    def test_out_of_range_is_noop(self, catalog, index):
        for name in ("A", "B", "C"):
            catalog.add(name, 10)
        assert catalog.remove(index) is False
        assert len(catalog) == 3

    def test_interleaved_edits_match_insertion_order(self, catalog):
        """Order always equals insertion order minus removed entries."""
        expected: list[str] = []
        ops = [("add", "A"), ("add", "B"), ("remove", 0), ("add", "C"),
               ("add", "D"), ("remove", 1), ("add", "E"), ("remove", 5)]
        for op, arg in ops:
            if op == "add":
                catalog.add(arg, 10)
                expected.append(arg)
            elif 0 <= arg < len(expected):
                catalog.remove(arg)
                del expected[arg]
            else:
                catalog.remove(arg)
        assert [e.name for e in catalog] == expected == ["B", "D", "E"]


class TestLocking:

    def test_lock_blocks_add(self, catalog):
        catalog.add("A", 10)
        catalog.lock()
        assert catalog.add("B", 10) is None
        assert [e.name for e in catalog] == ["A"]

    def test_lock_blocks_remove(self, catalog):
        catalog.add("A", 10)
        catalog.lock()
        assert catalog.remove(0) is False
        assert len(catalog) == 1

    def test_reset_clears_and_unlocks(self, catalog):
        catalog.add("A", 10)
        catalog.lock()
        catalog.reset()
        assert len(catalog) == 0
        assert catalog.is_locked is False
        assert catalog.add("B", 10) is not None

    def test_entries_is_a_copy(self, catalog):
        catalog.add("A", 10)
        entries = catalog.entries
        assert isinstance(entries, tuple)
        catalog.add("B", 10)
        assert len(entries) == 1
