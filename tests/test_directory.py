import pytest

from chat_tracker import (
    DuplicateEntryError,
    HashDirectory,
    InvalidBucketCountError,
    bucket_for,
)


# ----------------------------------------------------------------------------
# Setup
# ----------------------------------------------------------------------------

@pytest.fixture
def directory():
    return HashDirectory(8, "test")


@pytest.fixture
def single_bucket():
    """Every name collides in a directory with one bucket."""
    return HashDirectory(1, "test")


# ----------------------------------------------------------------------------
# Test construction
# ----------------------------------------------------------------------------

@pytest.mark.parametrize("bucket_count", [0, -3, 2.5, "10", None, True])
def test_rejects_invalid_bucket_count(bucket_count):
    with pytest.raises(InvalidBucketCountError):
        HashDirectory(bucket_count)


def test_invalid_bucket_count_is_value_error():
    with pytest.raises(ValueError):
        HashDirectory(0)


def test_bucket_count_is_fixed(directory):
    for i in range(100):
        directory.insert(f"name{i}", i)
    assert directory.bucket_count == 8
    assert len(directory) == 100
    assert directory.load_factor == pytest.approx(12.5)


# ----------------------------------------------------------------------------
# Test bucket_for()
# ----------------------------------------------------------------------------

def test_bucket_for_is_deterministic_and_in_range():
    for name in ["", "alice", "room1", "ünïcödé"]:
        first = bucket_for(name, 13)
        assert first == bucket_for(name, 13)
        assert 0 <= first < 13


def test_bucket_for_single_bucket():
    assert bucket_for("anything", 1) == 0


# ----------------------------------------------------------------------------
# Test insert() / find()
# ----------------------------------------------------------------------------

def test_insert_and_find(directory):
    entity = object()
    directory.insert("alice", entity)

    assert directory.find("alice") is entity
    assert "alice" in directory


def test_find_missing(directory):
    assert directory.find("nobody") is None
    assert "nobody" not in directory


def test_insert_duplicate_raises(directory):
    directory.insert("alice", 1)
    with pytest.raises(DuplicateEntryError) as exc_info:
        directory.insert("alice", 2)

    assert exc_info.value.name == "alice"
    assert directory.find("alice") == 1
    assert len(directory) == 1


def test_colliding_names_are_kept_apart(single_bucket):
    single_bucket.insert("a", 1)
    single_bucket.insert("b", 2)
    single_bucket.insert("c", 3)

    assert single_bucket.find("a") == 1
    assert single_bucket.find("b") == 2
    assert single_bucket.find("c") == 3
    assert single_bucket.bucket_sizes() == {0: 3}


def test_empty_string_is_a_valid_name(directory):
    directory.insert("", "blank")
    assert directory.find("") == "blank"


# ----------------------------------------------------------------------------
# Test remove() / clear()
# ----------------------------------------------------------------------------

def test_remove_returns_entity(single_bucket):
    single_bucket.insert("a", 1)
    single_bucket.insert("b", 2)

    assert single_bucket.remove("a") == 1
    assert single_bucket.find("a") is None
    assert single_bucket.find("b") == 2
    assert len(single_bucket) == 1


def test_remove_missing(directory):
    assert directory.remove("ghost") is None
    assert len(directory) == 0


def test_name_can_be_reinserted_after_remove(directory):
    directory.insert("room", 1)
    directory.remove("room")
    directory.insert("room", 2)
    assert directory.find("room") == 2


def test_clear_releases_everything(directory):
    for i in range(5):
        directory.insert(str(i), i)

    released = directory.clear()

    assert sorted(released) == [0, 1, 2, 3, 4]
    assert len(directory) == 0
    assert list(directory) == []
    assert directory.bucket_sizes() == {}
