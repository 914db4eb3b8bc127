import pytest

from ring_store import RingStore


@pytest.fixture
def store():
    s = RingStore()
    for position, owner in [(0.5, "b"), (0.1, "a"), (0.9, "c"), (0.3, "a")]:
        assert s.insert_if_absent(position, owner)
    return s


def test_entries_are_ordered(store):
    assert list(store) == [(0.1, "a"), (0.3, "a"), (0.5, "b"), (0.9, "c")]
    assert len(store) == 4
    assert 0.3 in store


def test_insert_if_absent_keeps_existing_owner(store):
    assert not store.insert_if_absent(0.5, "z")
    assert store.entry(store.first_at_or_after(0.5)) == (0.5, "b")
    assert len(store) == 4


def test_first_at_or_after_wraps(store):
    assert store.first_at_or_after(0.0) == 0
    assert store.first_at_or_after(0.3) == 1
    assert store.first_at_or_after(0.31) == 2
    assert store.first_at_or_after(0.95) == 0
    assert store.entry(4) == (0.1, "a")


def test_first_at_or_after_on_empty_store():
    with pytest.raises(IndexError):
        RingStore().first_at_or_after(0.5)


def test_erase_and_count_by_value(store):
    assert store.count_by_value("a") == 2
    assert store.erase(0.1) == "a"
    assert store.count_by_value("a") == 1
    with pytest.raises(KeyError):
        store.erase(0.1)
    assert store.erase_value("a") == 1
    assert store.erase_value("a") == 0
    assert list(store) == [(0.5, "b"), (0.9, "c")]


def test_copy_is_independent(store):
    other = store.copy()
    other.erase_value("c")
    assert len(store) == 4
    assert len(other) == 3
