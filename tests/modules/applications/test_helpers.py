"""
Tests for request payload helpers.
"""

import pytest

from app.core.exceptions import ValidationError
from app.modules.applications.helpers import (
    collect_json_fields,
    parse_json_field,
    validate_payload,
)
from app.modules.applications.schemas import LocationInfo, PersonalInfo


class TestValidatePayload:
    def test_valid_payload_returns_model(self, personal_info):
        result = validate_payload(PersonalInfo, {**personal_info, "email": "Aline@Example.COM"})

        assert isinstance(result, PersonalInfo)
        assert result.email == "aline@example.com"

    def test_lists_every_missing_field(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(LocationInfo, {"province": "Kigali"})

        assert exc_info.value.fields == ["district", "sector", "cell", "village"]
        assert exc_info.value.status_code == 400

    def test_prefix_is_applied(self, personal_info):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(
                PersonalInfo, {**personal_info, "email": "not-an-email"}, prefix="personal_info"
            )

        assert exc_info.value.fields == ["personal_info.email"]
        assert exc_info.value.details == {"fields": ["personal_info.email"]}


class TestParseJsonField:
    @pytest.mark.parametrize("value", [None, ""])
    def test_absent_values_are_none(self, value):
        assert parse_json_field("education", value) is None

    def test_decodes_json(self):
        assert parse_json_field("education", '[{"institution": "UR"}]') == [
            {"institution": "UR"}
        ]

    def test_invalid_json_names_field(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_json_field("payment", "{not json")

        assert exc_info.value.fields == ["payment"]


class TestCollectJsonFields:
    def test_skips_fields_not_sent(self):
        decoded = collect_json_fields(
            {"personal_info": '{"first_name": "Aline"}', "payment": None, "education": ""}
        )

        assert decoded == {"personal_info": {"first_name": "Aline"}}

    def test_reports_all_invalid_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            collect_json_fields(
                {"personal_info": "{", "location_info": "{}", "course_selection": "[oops"}
            )

        assert exc_info.value.fields == ["personal_info", "course_selection"]
