"""Wire schemas for topic generation requests and streamed chunks."""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, StrictBool

CONFIGURATION_ERROR_PREFIX = "Server configuration error"


class AcademicLevel(str, Enum):
    MASTERS = "کارشناسی ارشد"
    PHD = "دکتری"


class GenerationRequest(BaseModel):
    """Body of POST /api/chat. Serialized with camelCase aliases."""

    model_config = ConfigDict(populate_by_name=True)

    keywords: str = Field(..., min_length=1)
    field_of_study: str = Field(..., min_length=1, alias="fieldOfStudy")
    academic_level: AcademicLevel = Field(..., alias="academicLevel")

    def to_wire(self) -> dict[str, str]:
        return self.model_dump(mode="json", by_alias=True)


class ResponseChunk(BaseModel):
    """One line of the relay stream.

    A text chunk is `{"text": ..., "done": ...}`, an error chunk is
    `{"error": ..., "done": true}`. Unset fields are left out of the JSON line.
    """

    text: str | None = None
    error: str | None = None
    done: StrictBool = False

    def to_line(self) -> str:
        return self.model_dump_json(exclude_none=True) + "\n"

    @classmethod
    def terminal(cls) -> "ResponseChunk":
        return cls(text="", done=True)
