"""Domain Types: identifier format and enum values."""

from library_api.core.domain_types import (
    BOOK_SORT_FIELDS, DEFAULT_SORT_FIELD, Genre, is_object_id, new_object_id,
)


def test_new_object_id_is_24_lowercase_hex():
    oid = new_object_id()
    assert len(oid) == 24
    assert oid == oid.lower()
    assert is_object_id(oid)


def test_new_object_ids_are_unique():
    assert len({new_object_id() for _ in range(500)}) == 500


def test_is_object_id_accepts_uppercase_hex():
    assert is_object_id("507F1F77BCF86CD799439011")


def test_is_object_id_rejects_bad_values():
    assert not is_object_id("507f1f77bcf86cd79943901")     # 23 chars
    assert not is_object_id("507f1f77bcf86cd7994390111")   # 25 chars
    assert not is_object_id("507f1f77bcf86cd79943901z")
    assert not is_object_id(12345)
    assert not is_object_id(None)


def test_genre_has_six_members():
    assert {g.value for g in Genre} == {
        "FICTION", "NON_FICTION", "SCIENCE", "HISTORY", "BIOGRAPHY", "FANTASY",
    }


def test_default_sort_field_is_mapped():
    assert BOOK_SORT_FIELDS[DEFAULT_SORT_FIELD] == "created_at"
