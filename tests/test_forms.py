import pytest

from catalog.forms import EMPTY_FIELD_MESSAGES, sanitize, validate_book_form

VALID = {"title": "Emma", "author": "a1", "summary": "A matchmaker", "isbn": "123"}


def test_valid_submission_has_no_errors():
    form, errors = validate_book_form(VALID)

    assert errors == []
    assert form.model_dump() == VALID


@pytest.mark.parametrize("field", ["title", "author", "summary", "isbn"])
@pytest.mark.parametrize("blank", ["", "   ", "\t\n"])
def test_blank_field_is_rejected_with_its_message(field, blank):
    form, errors = validate_book_form({**VALID, field: blank})

    assert [e.field for e in errors] == [field]
    assert errors[0].message == EMPTY_FIELD_MESSAGES[field]
    assert getattr(form, field) == ""


def test_messages_match_the_form_wording():
    assert EMPTY_FIELD_MESSAGES == {
        "title": "Title must not be empty.",
        "author": "Author must not be empty.",
        "summary": "Summary must not be empty.",
        "isbn": "ISBN must not be empty",
    }


def test_every_failing_field_is_reported_in_field_order():
    _, errors = validate_book_form({})

    assert [e.field for e in errors] == ["title", "author", "summary", "isbn"]


def test_failed_submission_keeps_the_other_values():
    form, errors = validate_book_form({**VALID, "title": "", "summary": "  kept  "})

    assert len(errors) == 1
    assert form.summary == "kept"
    assert form.author == "a1"


def test_values_are_trimmed_then_escaped():
    form, errors = validate_book_form({**VALID, "title": "  <b>Tom & Jerry</b> "})

    assert errors == []
    assert form.title == "&lt;b&gt;Tom &amp; Jerry&lt;/b&gt;"


def test_sanitize_handles_missing_values():
    assert sanitize(None) == ""
    assert sanitize(' "quoted" ') == "&#34;quoted&#34;"
