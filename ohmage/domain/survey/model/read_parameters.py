"""Validation of survey response read requests."""

import logging
from collections.abc import Mapping, Sequence
from typing import NoReturn

from ohmage.domain.shared.error import InvalidInputError
from ohmage.domain.shared.model.value import ValueObject
from ohmage.util.text import is_boolean_string, is_empty_or_whitespace_only

logger = logging.getLogger(__name__)

REQUIRED_PARAMETERS = (
    "auth_token",
    "campaign_urn",
    "client",
    "column_list",
    "user_list",
    "output_format",
)

OPTIONAL_PARAMETERS = (
    "start_date",
    "end_date",
    "prompt_id_list",
    "survey_id_list",
    "pretty_print",
    "suppress_metadata",
    "return_id",
    "privacy_state",
    "sort_order",
)

BOOLEAN_PARAMETERS = ("pretty_print", "suppress_metadata", "return_id")

# Upper bounds on raw parameter lengths
MAX_LENGTHS: dict[str, int] = {
    "start_date": 10,  # yyyy-mm-dd
    "end_date": 10,  # yyyy-mm-dd
    "campaign_urn": 250,  # db column length
    "client": 250,  # db column length
    "auth_token": 36,  # UUID
    "user_list": 150,  # about ten users
    "prompt_id_list": 2500,
    "survey_id_list": 2500,
    "column_list": 2500,
    "output_format": 12,  # "json-columns"
    "pretty_print": 5,  # "false"
    "suppress_metadata": 5,  # "false"
    "return_id": 5,  # "false"
    "sort_order": 21,  # "user,timestamp,survey"
    "privacy_state": 7,  # "private"
}


class SurveyResponseReadParameters(ValueObject):
    """Validated parameters of a survey response read request."""

    auth_token: str
    campaign_urn: str
    client: str
    column_list: str
    user_list: str
    output_format: str
    start_date: str | None = None
    end_date: str | None = None
    prompt_id_list: str | None = None
    survey_id_list: str | None = None
    pretty_print: bool | None = None
    suppress_metadata: bool | None = None
    return_id: bool | None = None
    privacy_state: str | None = None
    sort_order: str | None = None

    @classmethod
    def from_parameter_map(
        cls, parameters: Mapping[str, Sequence[str]]
    ) -> "SurveyResponseReadParameters":
        """Validate a request's parameters, given as name -> list of values.

        Library entry point for whatever serves survey response reads; the
        ``parameters`` mapping has the shape of a parsed query string
        (``urllib.parse.parse_qs`` or ``request.query_params`` grouped by name).

        Checks, in order: required parameters are present and non-blank, no
        parameter is repeated, no unknown parameter is present, no value
        exceeds its maximum length, boolean flags are "true" or "false".

        Raises:
            InvalidInputError: On the first failed check, naming the parameter.
        """
        for name in REQUIRED_PARAMETERS:
            values = parameters.get(name) or []
            if not values or is_empty_or_whitespace_only(values[0]):
                _reject(f"missing {name} parameter", name)

        for name, values in parameters.items():
            if len(values) != 1:
                _reject(
                    f"an incorrect number of values ({len(values)}) was found for parameter {name}",
                    name,
                )

        for name in parameters:
            if name not in REQUIRED_PARAMETERS and name not in OPTIONAL_PARAMETERS:
                _reject(f"unknown parameter {name}", name)

        values = {name: parameters[name][0] for name in parameters}

        for name, value in values.items():
            if len(value) > MAX_LENGTHS[name]:
                _reject(f"parameter {name} exceeds its allowed length of {MAX_LENGTHS[name]}", name)

        flags: dict[str, bool] = {}
        for name in BOOLEAN_PARAMETERS:
            if name in values:
                if not is_boolean_string(values[name]):
                    _reject(f"parameter {name} must be true or false", name)
                flags[name] = values[name] == "true"

        return cls(**{**values, **flags})


def _reject(reason: str, name: str) -> NoReturn:
    logger.warning(reason)
    raise InvalidInputError(f"Invalid survey response read request: {reason}", field=name)
