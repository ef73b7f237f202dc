"""
Tests for layout store operations and invariants
"""

import random
import threading

import pytest

from app.core.errors import ValidationError
from app.models import Guest, TableShape
from app.services.layout_store import LayoutStore

@pytest.fixture
def store():
    """Fresh, empty layout store"""
    return LayoutStore()

@pytest.fixture
def jane():
    return Guest(first_name="Jane", last_name="Doe", entree="Beef Tenderloin", has_allergy=False)

@pytest.fixture
def table(store):
    """A round table with 8 seats"""
    return store.add_table("round", 8)

def test_add_tables_numbering_and_totals(store):
    """Test tables are numbered in creation order and seats add up"""
    first = store.add_table("round", 8)
    second = store.add_table("rectangle", 6)

    assert first.number == 1
    assert second.number == 2
    assert first.shape is TableShape.ROUND
    assert second.shape is TableShape.RECTANGLE
    assert first.id != second.id
    assert store.compute_statistics().total_seats == 14

def test_new_tables_are_staggered(store):
    """Test successive tables do not land on the same spot"""
    first = store.add_table("round", 8)
    second = store.add_table("round", 8)
    third = store.add_table("round", 8)

    assert (first.x, first.y) == (200, 200)
    assert (second.x, second.y) == (250, 250)
    assert (third.x, third.y) == (300, 300)
    assert first.guests == {}

@pytest.mark.parametrize("seat_count", [-1, 0, 1])
def test_add_table_rejects_too_few_seats(store, seat_count):
    """Test seat counts under the minimum leave the store untouched"""
    with pytest.raises(ValidationError):
        store.add_table("round", seat_count)

    assert store.list_tables() == []
    # The number counter did not advance
    assert store.add_table("round", 2).number == 1

def test_add_table_rejects_unknown_shape(store):
    """Test unknown shapes are rejected"""
    with pytest.raises(ValidationError) as exc_info:
        store.add_table("oval", 6)
    assert "Unknown table shape 'oval'" in exc_info.value.errors

def test_assign_and_remove_guest(store, table, jane):
    """Test removing a guest twice is harmless"""
    store.assign_guest(table.id, 1, jane)
    assert store.get_table(table.id).guests[1] == jane

    store.remove_guest(table.id, 1)
    assert 1 not in store.get_table(table.id).guests

    result = store.remove_guest(table.id, 1)
    assert result is not None
    assert 1 not in result.guests

def test_assign_overwrites_existing_occupant(store, table, jane):
    """Test the last assignment to a seat wins"""
    john = Guest(first_name="John", last_name="Smith", entree="Grilled Salmon")
    store.assign_guest(table.id, 3, jane)
    store.assign_guest(table.id, 3, john)

    assert store.get_table(table.id).guests[3] == john
    assert store.compute_statistics().guests_placed == 1

@pytest.mark.parametrize("first_name,last_name", [
    ("", "Doe"),
    ("Jane", ""),
    ("   ", "Doe"),
    ("Jane", "\t"),
])
def test_assign_rejects_blank_names(store, table, jane, first_name, last_name):
    """Test blank names fail and keep the previous occupant"""
    store.assign_guest(table.id, 1, jane)

    with pytest.raises(ValidationError):
        store.assign_guest(table.id, 1, Guest(first_name=first_name, last_name=last_name))

    assert store.get_table(table.id).guests[1] == jane

def test_assign_rejects_blank_names_on_empty_seat(store, table):
    """Test a rejected assignment leaves an empty seat empty"""
    with pytest.raises(ValidationError) as exc_info:
        store.assign_guest(table.id, 2, Guest(first_name="", last_name=""))

    assert exc_info.value.errors == ["First name is required", "Last name is required"]
    assert store.get_table(table.id).guests == {}

@pytest.mark.parametrize("seat_number", [0, -1, 9, 100])
def test_assign_rejects_out_of_range_seat(store, table, jane, seat_number):
    """Test seats outside 1..seat_count are rejected"""
    with pytest.raises(ValidationError):
        store.assign_guest(table.id, seat_number, jane)
    assert store.get_table(table.id).guests == {}

def test_stale_table_ids_are_ignored(store, jane):
    """Test edits to unknown tables are silent no-ops"""
    assert store.reposition("missing", 10, 10) is None
    assert store.assign_guest("missing", 1, jane) is None
    assert store.remove_guest("missing", 1) is None
    assert store.renumber_table("missing", 4) is None
    assert store.set_description("missing", "Head table") is None
    assert store.remove_table("missing") is None
    assert store.compute_statistics().total_seats == 0

def test_reposition_clamps_and_is_idempotent(store, table):
    """Test positions are clamped at zero and replays change nothing"""
    store.reposition(table.id, 50, 50)
    once = store.get_table(table.id)
    store.reposition(table.id, 50, 50)
    twice = store.get_table(table.id)
    assert (once.x, once.y) == (twice.x, twice.y) == (50, 50)

    moved = store.reposition(table.id, -30, 12.5)
    assert (moved.x, moved.y) == (0, 12.5)

def test_renumber_allows_duplicates(store, table):
    """Test duplicate numbers are allowed and reported"""
    other = store.add_table("rectangle", 6)
    assert store.duplicate_numbers() == []

    renumbered = store.renumber_table(other.id, table.number)
    assert renumbered.number == 1
    assert store.duplicate_numbers() == [1]
    # The id is untouched by renumbering
    assert renumbered.id == other.id

def test_renumber_does_not_affect_counter(store, table):
    """Test new tables keep counting after a renumber"""
    store.renumber_table(table.id, 42)
    assert store.add_table("round", 4).number == 2

def test_set_description(store, table):
    """Test free-text descriptions"""
    assert store.set_description(table.id, "Family of the bride").description == "Family of the bride"
    assert store.set_description(table.id, None).description is None

def test_entree_options(store):
    """Test custom entrées append to the default menu"""
    defaults = store.entree_options()
    assert "Beef Tenderloin" in defaults

    options = store.add_entree_option("  Mushroom Risotto ")
    assert options == defaults + ["Mushroom Risotto"]
    assert store.custom_entrees() == ["Mushroom Risotto"]

def test_entree_duplicates_rejected(store):
    """Test duplicate or blank entrées are rejected without changes"""
    store.add_entree_option("Mushroom Risotto")

    with pytest.raises(ValidationError):
        store.add_entree_option("Mushroom Risotto ")
    with pytest.raises(ValidationError):
        store.add_entree_option("Grilled Salmon")
    with pytest.raises(ValidationError):
        store.add_entree_option("   ")

    assert store.custom_entrees() == ["Mushroom Risotto"]

def test_custom_default_menu():
    """Test a store built with its own menu uses it instead of the configured one"""
    store = LayoutStore(default_entrees=["Short Rib", "Halibut"])

    assert store.entree_options() == ["Short Rib", "Halibut"]
    assert "Grilled Salmon" not in store.entree_options()

    with pytest.raises(ValidationError):
        store.add_entree_option(" Halibut ")
    store.remove_entree_option("Short Rib")
    store.add_entree_option("Grilled Salmon")

    assert store.entree_options() == ["Short Rib", "Halibut", "Grilled Salmon"]

def test_entree_remove_is_idempotent(store):
    """Test removing an entrée twice, or a default one, is harmless"""
    store.add_entree_option("Lamb Chops")
    store.remove_entree_option("Lamb Chops")
    store.remove_entree_option("Lamb Chops")
    store.remove_entree_option("Grilled Salmon")

    assert store.custom_entrees() == []
    assert "Grilled Salmon" in store.entree_options()

def test_remove_table_cascades_guests(store, table, jane):
    """Test removing a table removes its guests from the counts"""
    other = store.add_table("rectangle", 6)
    store.assign_guest(table.id, 1, jane)
    store.assign_guest(other.id, 2, jane)

    removed = store.remove_table(table.id)
    assert removed.guests[1] == jane

    stats = store.compute_statistics()
    assert stats.total_seats == 6
    assert stats.guests_placed == 1
    assert store.get_table(table.id) is None

def test_removed_ids_never_reused(store):
    """Test ids stay unique across removals"""
    seen = set()
    for _ in range(50):
        table = store.add_table("round", 4)
        assert table.id not in seen
        seen.add(table.id)
        store.remove_table(table.id)

def test_returned_tables_are_copies(store, table, jane):
    """Test callers cannot change the store through returned tables"""
    table.guests[1] = jane
    table.x = -500
    stored = store.get_table(table.id)
    assert stored.guests == {}
    assert stored.x == 200

def test_occupied_seats_order(store, jane):
    """Test occupied seats come back in table then seat order"""
    first = store.add_table("round", 8)
    second = store.add_table("rectangle", 6)
    store.assign_guest(second.id, 1, jane)
    store.assign_guest(first.id, 5, jane)
    store.assign_guest(first.id, 2, jane)

    order = [(t.number, seat) for t, seat, _ in store.occupied_seats()]
    assert order == [(1, 2), (1, 5), (2, 1)]

def test_snapshot(store, table, jane):
    """Test the serialized layout"""
    store.assign_guest(table.id, 4, jane)
    snapshot = store.snapshot()

    assert snapshot["next_table_number"] == 2
    assert snapshot["statistics"] == {"total_seats": 8, "guests_placed": 1, "seats_remaining": 7}
    assert snapshot["tables"][0]["shape"] == "round"
    assert snapshot["tables"][0]["guests"]["4"]["first_name"] == "Jane"

def test_reset(store, table):
    """Test reset empties the layout"""
    store.add_entree_option("Lamb Chops")
    store.reset()

    assert store.list_tables() == []
    assert store.custom_entrees() == []
    assert store.add_table("round", 4).id != table.id

def test_statistics_invariant_under_random_edits(store):
    """Test placed plus remaining always equals total seats"""
    rng = random.Random(1234)
    names = ["Ann", "Ben", "Cara", "Dev", "", "  "]

    for _ in range(500):
        tables = store.list_tables()
        action = rng.choice(["add", "assign", "assign", "remove", "move", "renumber", "drop"])

        try:
            if action == "add" or not tables:
                store.add_table(rng.choice(["round", "rectangle"]), rng.randint(0, 12))
            else:
                table = rng.choice(tables)
                table_id = table.id if rng.random() > 0.1 else "stale-id"
                if action == "assign":
                    guest = Guest(first_name=rng.choice(names), last_name=rng.choice(names))
                    store.assign_guest(table_id, rng.randint(0, table.seat_count + 1), guest)
                elif action == "remove":
                    store.remove_guest(table_id, rng.randint(1, table.seat_count))
                elif action == "move":
                    store.reposition(table_id, rng.uniform(-100, 900), rng.uniform(-100, 900))
                elif action == "renumber":
                    store.renumber_table(table_id, rng.randint(1, 5))
                elif action == "drop" and rng.random() < 0.2:
                    store.remove_table(table_id)
        except ValidationError:
            pass

        stats = store.compute_statistics()
        assert stats.guests_placed + stats.seats_remaining == stats.total_seats
        for table in store.list_tables():
            assert table.seat_count >= 2
            assert all(1 <= seat <= table.seat_count for seat in table.guests)
            assert table.x >= 0 and table.y >= 0

def test_concurrent_edits_are_serialized(store):
    """Test edits from several threads are all applied"""
    tables = [store.add_table("round", 10) for _ in range(4)]

    def seat_everyone(table_id):
        for seat in range(1, 11):
            store.assign_guest(table_id, seat, Guest(first_name="Guest", last_name=str(seat)))

    threads = [threading.Thread(target=seat_everyone, args=(t.id,)) for t in tables]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    stats = store.compute_statistics()
    assert stats.guests_placed == 40
    assert stats.seats_remaining == 0
