"""
Letter payload validation tests
"""

import pytest

from app.schemas.letter_schemas import REQUIRED_FIELDS
from app.services.validation_service import is_valid_email, sanitize_create, sanitize_update
from app.utils.errors import FieldValidationError, UserIdNotAllowedError
from conftest import letter_payload


class TestSanitizeCreate:
    def test_valid_payload_is_trimmed(self):
        payload = letter_payload(applicantName="  Jane Doe  ", tone=" formal\n")
        fields = sanitize_create(payload)
        assert fields.applicant_name == "Jane Doe"
        assert fields.tone == "formal"
        assert fields.anecdote is None
        assert fields.content is None

    def test_every_missing_field_is_listed(self):
        payload = letter_payload()
        del payload["applicantName"]
        payload["tone"] = ""
        payload["lorType"] = None
        payload["softTraits"] = "   "

        with pytest.raises(FieldValidationError) as excinfo:
            sanitize_create(payload)

        error = excinfo.value
        assert error.code == "VALIDATION_ERROR"
        assert error.details["missingFields"] == ["applicantName", "softTraits", "tone", "lorType"]
        for field in ("applicantName", "softTraits", "tone", "lorType"):
            assert field in error.message

    def test_falsy_non_strings_count_as_missing(self):
        payload = letter_payload(tone=0, lorType=False, softTraits=[])
        del payload["applicantName"]

        with pytest.raises(FieldValidationError) as excinfo:
            sanitize_create(payload)

        assert excinfo.value.details["missingFields"] == ["applicantName", "softTraits", "tone", "lorType"]

    def test_empty_payload_lists_all_sixteen(self):
        with pytest.raises(FieldValidationError) as excinfo:
            sanitize_create({})
        assert excinfo.value.details["missingFields"] == list(REQUIRED_FIELDS)

    @pytest.mark.parametrize("forbidden", ["userId", "user_id"])
    def test_user_id_rejected_before_field_checks(self, forbidden):
        with pytest.raises(UserIdNotAllowedError) as excinfo:
            sanitize_create({forbidden: "someone-else"})
        assert excinfo.value.code == "USER_ID_NOT_ALLOWED"

    def test_user_id_rejected_even_when_payload_valid(self):
        with pytest.raises(UserIdNotAllowedError):
            sanitize_create(letter_payload(userId="attacker"))

    @pytest.mark.parametrize("email", [
        "not-an-email",
        "@uni.edu",
        "prof@",
        "prof@uni",
        "prof@@uni.edu",
        "pr of@uni.edu",
        "prof@uni.",
    ])
    def test_invalid_email_rejected(self, email):
        with pytest.raises(FieldValidationError) as excinfo:
            sanitize_create(letter_payload(referrerEmail=email))
        assert "referrerEmail" in excinfo.value.message

    def test_email_is_trimmed_and_lowercased(self):
        fields = sanitize_create(letter_payload(referrerEmail="  Prof.Smith@UNI.edu "))
        assert fields.referrer_email == "prof.smith@uni.edu"

    def test_optional_fields(self):
        fields = sanitize_create(letter_payload(anecdote="  Stayed late to fix the lab server. ", content="   "))
        assert fields.anecdote == "Stayed late to fix the lab server."
        assert fields.content is None

    def test_non_string_field_rejected(self):
        with pytest.raises(FieldValidationError) as excinfo:
            sanitize_create(letter_payload(durationKnown=3))
        assert excinfo.value.details["invalidFields"] == ["durationKnown"]

    def test_non_object_body_rejected(self):
        with pytest.raises(FieldValidationError):
            sanitize_create(["applicantName"])

    def test_unknown_fields_ignored(self):
        fields = sanitize_create(letter_payload(favouriteColour="green"))
        assert "favouriteColour" not in fields.model_dump(by_alias=True)


class TestSanitizeUpdate:
    def test_only_present_fields_are_set(self):
        changes = sanitize_update({"tone": "  warm "})
        assert changes.changes() == {"tone": "warm"}

    def test_explicit_null_clears_optional_field(self):
        changes = sanitize_update({"anecdote": "", "content": None})
        assert changes.changes() == {"anecdote": None, "content": None}

    def test_required_field_cannot_be_emptied(self):
        with pytest.raises(FieldValidationError) as excinfo:
            sanitize_update({"applicantName": " ", "tone": None})
        assert excinfo.value.details["emptyFields"] == ["applicantName", "tone"]

    def test_email_checked_only_when_present(self):
        assert sanitize_update({"tone": "warm"}).changes() == {"tone": "warm"}
        with pytest.raises(FieldValidationError):
            sanitize_update({"referrerEmail": "broken"})

    def test_email_normalized(self):
        changes = sanitize_update({"referrerEmail": " NEW@Uni.EDU "})
        assert changes.changes() == {"referrer_email": "new@uni.edu"}

    @pytest.mark.parametrize("forbidden", ["userId", "user_id"])
    def test_user_id_rejected(self, forbidden):
        with pytest.raises(UserIdNotAllowedError):
            sanitize_update({forbidden: "x", "referrerEmail": "broken"})


def test_is_valid_email():
    assert is_valid_email("a@b.co")
    assert not is_valid_email("a@b")
