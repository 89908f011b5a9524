"""Tests for the mock model client."""
import pytest

from relay.client.mock_client import MockTopicClient, build_mock_answer
from relay.service.prompts import build_prompt
from topic_shared.schemas import AcademicLevel


def test_mock_answer_mentions_field_and_keywords() -> None:
    prompt = build_prompt(AcademicLevel.MASTERS, "اقتصاد", "تورم، بیکاری")
    answer = build_mock_answer(prompt)
    assert "اقتصاد" in answer
    assert "تورم" in answer
    assert "بیکاری" in answer
    assert "mock" in answer


@pytest.mark.asyncio
async def test_mock_streams_fragments_that_rebuild_the_answer() -> None:
    prompt = build_prompt(AcademicLevel.PHD, "فیزیک", "ابررسانایی")
    client = MockTopicClient()
    fragments = [f async for f in client.stream_generate(prompt)]
    assert len(fragments) > 1
    assert all(fragments)
    assert "".join(fragments) == build_mock_answer(prompt)
