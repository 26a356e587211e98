import pytest

from person_registry.exceptions import ErrorKind
from person_registry.exceptions import PersonError
from person_registry.exceptions import conflict_error
from person_registry.exceptions import not_found_error
from person_registry.exceptions import storage_error
from person_registry.exceptions import validation_error


def test_error_carries_kind_and_message():
    err = PersonError(ErrorKind.VALIDATION, "name is required")

    assert err.kind is ErrorKind.VALIDATION
    assert err.message == "name is required"
    assert err.cause is None
    assert str(err) == "[validation_error] name is required"


def test_error_keeps_cause_and_chains_it():
    cause = RuntimeError("disk gone")
    err = storage_error("Error saving person", cause)

    assert err.kind is ErrorKind.STORAGE
    assert err.cause is cause
    assert err.__cause__ is cause
    assert "disk gone" in str(err)


@pytest.mark.parametrize(
    "factory,kind",
    [
        (validation_error, ErrorKind.VALIDATION),
        (conflict_error, ErrorKind.CONFLICT),
        (not_found_error, ErrorKind.NOT_FOUND),
        (storage_error, ErrorKind.STORAGE),
    ],
)
def test_helpers_tag_the_right_kind(factory, kind):
    err = factory("boom")

    assert isinstance(err, PersonError)
    assert err.kind is kind


def test_callers_can_match_on_kind():
    def classify(exc: PersonError) -> str:
        if exc.kind is ErrorKind.CONFLICT:
            return "retry with another email"
        if exc.kind is ErrorKind.NOT_FOUND:
            return "gone"
        return "other"

    with pytest.raises(PersonError) as exc_info:
        raise conflict_error("a person with this email already exists")

    assert classify(exc_info.value) == "retry with another email"


def test_kind_values_are_plain_strings():
    assert ErrorKind.NOT_FOUND == "not_found_error"
