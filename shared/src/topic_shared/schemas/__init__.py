"""Common DTOs and schemas."""
from topic_shared.schemas.generation import (
    CONFIGURATION_ERROR_PREFIX,
    AcademicLevel,
    GenerationRequest,
    ResponseChunk,
)
from topic_shared.schemas.health import HealthResponse

__all__ = ["CONFIGURATION_ERROR_PREFIX", "AcademicLevel", "GenerationRequest", "HealthResponse", "ResponseChunk"]
