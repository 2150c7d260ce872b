"""Survey domain models."""

from .read_parameters import SurveyResponseReadParameters

__all__ = ["SurveyResponseReadParameters"]
