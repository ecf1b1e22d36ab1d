"""
Assessment Intent Validator.

Checks a raw assessment request before it reaches the estimator:
- ability_level: one of Remedial / Standard / Honors / AP
- assessment_type: one of Quiz / Test / Practice
- time_minutes: integer within [min_assessment_minutes, max_assessment_minutes]
- emphasis: optional, one of the five emphasis tags
- focus_areas: optional list of at most max_focus_areas non-empty strings
- classroom_context: optional string of at most max_classroom_context_chars

Every failing check contributes its message; nothing short-circuits
across fields.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from bloomspec.core.errors import InvalidIntentError
from bloomspec.core.taxonomy import AbilityLevel, AssessmentType, Emphasis
from config import Settings, get_settings


@dataclass(frozen=True)
class IntentValidationResult:
    """Outcome of validating an assessment request."""
    valid: bool
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"valid": self.valid, "errors": list(self.errors)}


def _choices(enum_cls) -> str:
    return ", ".join(member.value for member in enum_cls)


def validate_ability_level(level: Any) -> list[str]:
    if not isinstance(level, str) or not level:
        return ["Ability level must be a valid string."]
    if level not in {member.value for member in AbilityLevel}:
        return [f'Invalid ability level "{level}". Must be one of: {_choices(AbilityLevel)}.']
    return []


def validate_assessment_type(assessment_type: Any) -> list[str]:
    if not isinstance(assessment_type, str) or not assessment_type:
        return ["Assessment type must be a valid string."]
    if assessment_type not in {member.value for member in AssessmentType}:
        return [f'Invalid assessment type "{assessment_type}". Must be one of: {_choices(AssessmentType)}.']
    return []


def validate_time(minutes: Any, settings: Settings | None = None) -> list[str]:
    """Whole minutes inside the configured assessment window."""
    settings = settings or get_settings()
    if isinstance(minutes, bool) or not isinstance(minutes, (int, float)):
        return ["Time must be a valid integer."]
    if isinstance(minutes, float) and not minutes.is_integer():
        return ["Time must be a valid integer."]

    errors = []
    if minutes < settings.min_assessment_minutes:
        errors.append(f"Time must be at least {settings.min_assessment_minutes} minutes.")
    if minutes > settings.max_assessment_minutes:
        errors.append(f"Time must not exceed {settings.max_assessment_minutes} minutes.")
    return errors


def validate_emphasis(emphasis: Any) -> list[str]:
    if emphasis is None:
        return []
    if not isinstance(emphasis, str) or emphasis not in {member.value for member in Emphasis}:
        return [f'Invalid emphasis "{emphasis}". Must be one of: {_choices(Emphasis)}.']
    return []


def validate_focus_areas(areas: Any, settings: Settings | None = None) -> list[str]:
    settings = settings or get_settings()
    if areas is None:
        return []
    if isinstance(areas, str) or not isinstance(areas, (list, tuple)):
        return ["Focus areas must be a list."]

    errors = []
    if len(areas) > settings.max_focus_areas:
        errors.append(f"Maximum {settings.max_focus_areas} focus areas allowed.")
    if any(not isinstance(area, str) or not area.strip() for area in areas):
        errors.append("Each focus area must be a non-empty string.")
    return errors


def validate_classroom_context(context: Any, settings: Settings | None = None) -> list[str]:
    settings = settings or get_settings()
    if context is None:
        return []
    if not isinstance(context, str):
        return ["Classroom context must be a string."]
    if len(context) > settings.max_classroom_context_chars:
        return [f"Classroom context must not exceed {settings.max_classroom_context_chars} characters."]
    return []


def validate_assessment_intent(
    intent: Mapping[str, Any],
    settings: Settings | None = None,
) -> IntentValidationResult:
    """
    Validate a raw assessment request.

    Args:
        intent: Mapping with ability_level, assessment_type, time_minutes
            and the optional emphasis, focus_areas, classroom_context
        settings: Bounds (application settings when omitted)

    Returns:
        IntentValidationResult with every error message
    """
    settings = settings or get_settings()

    errors = [
        *validate_ability_level(intent.get("ability_level")),
        *validate_assessment_type(intent.get("assessment_type")),
        *validate_time(intent.get("time_minutes"), settings),
        *validate_emphasis(intent.get("emphasis")),
        *validate_focus_areas(intent.get("focus_areas"), settings),
        *validate_classroom_context(intent.get("classroom_context"), settings),
    ]

    if errors:
        logger.debug(f"Assessment intent rejected with {len(errors)} error(s)")
    return IntentValidationResult(valid=not errors, errors=errors)


def assert_valid_assessment_intent(intent: Mapping[str, Any], settings: Settings | None = None) -> None:
    """Raise InvalidIntentError listing every problem with the request."""
    result = validate_assessment_intent(intent, settings)
    if not result.valid:
        raise InvalidIntentError(result.errors)
