"""Unit tests for survey response read parameter validation."""

import pytest

from ohmage.domain.shared.error import InvalidInputError
from ohmage.domain.survey.model import SurveyResponseReadParameters


def make_parameters(**overrides) -> dict[str, list[str]]:
    parameters = {
        "auth_token": ["0f8b4cf6-1c7e-4f51-9e4c-3b1d2a6c7e90"],
        "campaign_urn": ["urn:campaign:ucla:health"],
        "client": ["android"],
        "column_list": ["urn:ohmage:special:all"],
        "user_list": ["urn:ohmage:special:all"],
        "output_format": ["json-rows"],
    }
    for name, value in overrides.items():
        if value is None:
            parameters.pop(name, None)
        else:
            parameters[name] = value if isinstance(value, list) else [value]
    return parameters


def rejection(parameters) -> InvalidInputError:
    with pytest.raises(InvalidInputError) as exc_info:
        SurveyResponseReadParameters.from_parameter_map(parameters)
    return exc_info.value


class TestValidRequests:
    def test_required_only(self):
        result = SurveyResponseReadParameters.from_parameter_map(make_parameters())

        assert result.campaign_urn == "urn:campaign:ucla:health"
        assert result.output_format == "json-rows"
        assert result.start_date is None
        assert result.pretty_print is None

    def test_optional_and_flags(self):
        result = SurveyResponseReadParameters.from_parameter_map(
            make_parameters(
                start_date="2014-01-01",
                end_date="2014-12-31",
                pretty_print="true",
                suppress_metadata="false",
                sort_order="user,timestamp,survey",
            )
        )

        assert result.start_date == "2014-01-01"
        assert result.pretty_print is True
        assert result.suppress_metadata is False
        assert result.return_id is None
        assert result.sort_order == "user,timestamp,survey"


class TestRejections:
    @pytest.mark.parametrize("name", ["auth_token", "campaign_urn", "output_format"])
    def test_missing_required(self, name):
        error = rejection(make_parameters(**{name: None}))
        assert error.field == name
        assert error.message == f"Invalid survey response read request: missing {name} parameter"

    def test_blank_required(self):
        assert rejection(make_parameters(client="   ")).field == "client"

    def test_empty_value_list_is_missing(self):
        error = rejection(make_parameters(user_list=[]))
        assert "missing user_list parameter" in error.message

    def test_repeated_parameter(self):
        error = rejection(make_parameters(start_date=["2014-01-01", "2014-02-01"]))
        assert error.field == "start_date"
        assert "incorrect number of values (2)" in error.message

    def test_unknown_parameter(self):
        error = rejection(make_parameters(colour="blue"))
        assert error.field == "colour"
        assert "unknown parameter colour" in error.message

    def test_value_too_long(self):
        error = rejection(make_parameters(output_format="json-columns-x"))
        assert error.field == "output_format"
        assert "allowed length of 12" in error.message

    @pytest.mark.parametrize("value", ["yes", "TRUE", "1"])
    def test_non_boolean_flag(self, value):
        error = rejection(make_parameters(return_id=value))
        assert error.field == "return_id"
        assert "must be true or false" in error.message

    def test_missing_required_checked_before_unknown(self):
        error = rejection(make_parameters(auth_token=None, colour="blue"))
        assert error.field == "auth_token"

    def test_repeats_checked_before_unknown(self):
        error = rejection(make_parameters(colour="blue", privacy_state=["shared", "private"]))
        assert error.field == "privacy_state"
