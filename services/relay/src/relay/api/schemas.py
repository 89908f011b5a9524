"""API request/response schemas and request validation."""
from typing import Any

from pydantic import BaseModel

from topic_shared.schemas import AcademicLevel, GenerationRequest

from relay.errors import InputValidationError

REQUIRED_FIELDS = ("keywords", "fieldOfStudy", "academicLevel")
INVALID_LEVEL_MESSAGE = (
    f'Invalid academic level. Must be "{AcademicLevel.MASTERS.value}" or "{AcademicLevel.PHD.value}".'
)


class ErrorResponse(BaseModel):
    error: str


def parse_generation_request(payload: Any) -> GenerationRequest:
    """Validate a decoded JSON body: missing fields first, then the academic level."""
    if not isinstance(payload, dict):
        raise InputValidationError(
            f"Request body must be a JSON object with {', '.join(REQUIRED_FIELDS)}."
        )
    missing = [name for name in REQUIRED_FIELDS if not payload.get(name)]
    if missing:
        raise InputValidationError(f"Missing required parameters ({', '.join(missing)}).")

    level = payload["academicLevel"]
    if level not in [member.value for member in AcademicLevel]:
        raise InputValidationError(INVALID_LEVEL_MESSAGE)

    keywords = payload["keywords"]
    field_of_study = payload["fieldOfStudy"]
    if not isinstance(keywords, str) or not isinstance(field_of_study, str):
        raise InputValidationError("keywords and fieldOfStudy must be strings.")

    return GenerationRequest(
        keywords=keywords,
        field_of_study=field_of_study,
        academic_level=AcademicLevel(level),
    )
