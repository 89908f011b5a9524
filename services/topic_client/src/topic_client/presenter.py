"""Request building, text accumulation and user-facing error messages."""
from typing import AsyncIterator, Callable

from topic_shared.schemas import (
    CONFIGURATION_ERROR_PREFIX,
    AcademicLevel,
    GenerationRequest,
    ResponseChunk,
)

from topic_client.errors import (
    GenerationFailedError,
    InvalidInputError,
    RelayHTTPError,
    TopicClientError,
)

FILL_REQUIRED_FIELDS_MESSAGE = "لطفاً همه فیلدهای مورد نیاز را پر کنید."
SERVER_CONFIG_MESSAGE = "خطا در پیکربندی سرور. لطفاً با مدیر سامانه تماس بگیرید."
GENERATION_FAILED_TEMPLATE = "خطا: {message}"
UNKNOWN_ERROR_MESSAGE = "خطای ناشناخته‌ای رخ داد."


def build_request(keywords: str, field_of_study: str, academic_level: AcademicLevel | str) -> GenerationRequest:
    """Form-side check: keywords and field of study must not be blank."""
    if not keywords.strip() or not field_of_study.strip():
        raise InvalidInputError(FILL_REQUIRED_FIELDS_MESSAGE)
    return GenerationRequest(
        keywords=keywords,
        field_of_study=field_of_study,
        academic_level=AcademicLevel(academic_level),
    )


async def collect_topics(
    chunks: AsyncIterator[ResponseChunk],
    on_text: Callable[[str], None] | None = None,
) -> str:
    """Accumulate streamed text up to the first done chunk.

    An error chunk raises GenerationFailedError; text received before it is lost.
    """
    parts: list[str] = []
    async for chunk in chunks:
        if chunk.error:
            raise GenerationFailedError(chunk.error)
        if chunk.text:
            parts.append(chunk.text)
            if on_text is not None:
                on_text(chunk.text)
        if chunk.done:
            break
    return "".join(parts)


def describe_error(exc: BaseException) -> str:
    """Map a failure onto one of: fill required fields, server configuration, generation failed."""
    if isinstance(exc, InvalidInputError):
        return FILL_REQUIRED_FIELDS_MESSAGE
    if isinstance(exc, RelayHTTPError):
        if exc.status_code == 400:
            return FILL_REQUIRED_FIELDS_MESSAGE
        if exc.message.startswith(CONFIGURATION_ERROR_PREFIX):
            return SERVER_CONFIG_MESSAGE
    if isinstance(exc, TopicClientError):
        return GENERATION_FAILED_TEMPLATE.format(message=exc.message)
    return UNKNOWN_ERROR_MESSAGE
