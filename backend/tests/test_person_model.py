"""Tests for the in-memory person record."""

from datetime import datetime

from person_registry.models.person import Person
from person_registry.utils.time import utc_now_naive


def test_new_person_has_no_id_and_a_timestamp():
    before = utc_now_naive()
    person = Person(name="Ana", email="ana@test.com")
    after = utc_now_naive()

    assert person.id is None
    assert person.created_at is not None
    assert before <= person.created_at <= after


def test_same_email_means_same_person():
    a = Person(name="Ana", email="ana@test.com", id=1)
    b = Person(name="Someone Else", email="ana@test.com", id=99, created_at=datetime(2020, 1, 1))

    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1


def test_different_email_never_equal():
    a = Person(name="Ana", email="ana@test.com", id=1)
    b = Person(name="Ana", email="ana2@test.com", id=1)

    assert a != b


def test_email_comparison_is_case_sensitive():
    assert Person(name="Ana", email="Ana@test.com") != Person(name="Ana", email="ana@test.com")


def test_comparison_with_other_types():
    person = Person(name="Ana", email="ana@test.com")

    assert person != "ana@test.com"
    assert person != None  # noqa: E711
    assert person == person


def test_repr_includes_every_field():
    person = Person(name="Ana", email="ana@test.com", id=7, created_at=datetime(2024, 5, 6, 7, 8, 9))
    text = repr(person)

    assert "id=7" in text
    assert "name='Ana'" in text
    assert "email='ana@test.com'" in text
    assert "2024" in text
