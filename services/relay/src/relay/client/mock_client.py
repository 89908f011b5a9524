"""Mock model client for local development: streams a canned Markdown answer."""
import asyncio
import re
from typing import AsyncIterator

from relay.client.base import TopicModelClient

_QUOTED = re.compile(r'"([^"]+)"')


def _quoted_values(prompt: str) -> tuple[str, str]:
    """Field of study and keywords, in the order the prompt quotes them."""
    values = _QUOTED.findall(prompt)
    field = values[0] if values else "رشته نامشخص"
    keywords = values[1] if len(values) > 1 else field
    return field, keywords


def build_mock_answer(prompt: str) -> str:
    field, keywords = _quoted_values(prompt)
    terms = [t.strip() for t in re.split(r"[,،\n]", keywords) if t.strip()] or [keywords]
    lines = [f"## موضوعات پیشنهادی در {field} (mock)", ""]
    for i in range(3):
        term = terms[i % len(terms)]
        lines.append(f"{i + 1}. **بررسی نقش {term} در {field}**")
        lines.append(f"   توضیح کوتاه: این پاسخ در حالت mock برای «{term}» ساخته شده است.")
    return "\n".join(lines) + "\n"


class MockTopicClient(TopicModelClient):
    def __init__(self, delay_seconds: float = 0.0) -> None:
        self._delay = delay_seconds

    async def stream_generate(self, prompt: str) -> AsyncIterator[str]:
        # Whitespace stays attached to the preceding word so fragments concatenate back exactly.
        for fragment in re.findall(r"\S+\s*|\s+", build_mock_answer(prompt)):
            await asyncio.sleep(self._delay)
            yield fragment
