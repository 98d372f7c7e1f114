"""
Tests for the Groq client, the client factory and the LLM-backed generator
"""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from core.config import settings
from core.exceptions import GenerationError, LLMError
from domain.generation.generator import SYSTEM_PROMPT, LLMContentGenerator
from domain.generation.llm.base import BaseLLMClient
from domain.generation.llm.factory import create_llm_client
from domain.generation.llm.groq_client import GroqClient
from domain.generation.parser import VARIANT_END, VARIANT_START


def completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def mock_groq(response=None, error=None):
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=response, side_effect=error)
    client.close = AsyncMock()
    return client


class ScriptedLLM(BaseLLMClient):
    """Returns a fixed response, optionally after a delay or by raising"""

    def __init__(self, response="", delay=0.0, error=None):
        super().__init__(model="scripted", max_tokens=100)
        self.response = response
        self.delay = delay
        self.error = error
        self.calls = []

    async def complete(self, prompt, system_prompt=None):
        self.calls.append((prompt, system_prompt))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.response


# ---------------------------------------------------------------------------
# GROQ CLIENT
# ---------------------------------------------------------------------------


class TestGroqClient:

    async def test_complete_sends_messages(self):
        client = mock_groq(completion("Hello there"))
        groq = GroqClient(model="llama-test", max_tokens=256, temperature=0.5, client=client)

        assert await groq.complete("Write copy", system_prompt="Be brief") == "Hello there"

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "llama-test"
        assert kwargs["max_tokens"] == 256
        assert kwargs["messages"] == [
            {"role": "system", "content": "Be brief"},
            {"role": "user", "content": "Write copy"},
        ]

    async def test_empty_choices(self):
        groq = GroqClient(model="m", max_tokens=10, client=mock_groq(SimpleNamespace(choices=[])))
        assert await groq.complete("hi") == ""

    async def test_null_content(self):
        groq = GroqClient(model="m", max_tokens=10, client=mock_groq(completion(None)))
        assert await groq.complete("hi") == ""

    async def test_api_error_wrapped(self):
        groq = GroqClient(model="m", max_tokens=10, client=mock_groq(error=RuntimeError("rate limited")))
        with pytest.raises(LLMError, match="rate limited"):
            await groq.complete("hi")

    async def test_close(self):
        client = mock_groq()
        await GroqClient(model="m", max_tokens=10, client=client).close()
        client.close.assert_awaited_once()


class TestFactory:

    def test_unknown_provider(self):
        with pytest.raises(LLMError, match="Unknown LLM provider"):
            create_llm_client(provider="nope")

    def test_missing_key(self, monkeypatch):
        monkeypatch.setattr(settings, "groq_api_key", "")
        monkeypatch.delenv("GROQ_API_KEY", raising=False)
        with pytest.raises(LLMError, match="API key"):
            create_llm_client(provider="groq")

    def test_creates_groq_client(self):
        client = create_llm_client(provider="GROQ", api_key="test-key")
        assert isinstance(client, GroqClient)
        assert client.model == settings.llm_model


# ---------------------------------------------------------------------------
# LLM CONTENT GENERATOR
# ---------------------------------------------------------------------------


class TestLLMContentGenerator:

    async def test_parses_variants(self):
        raw = "".join(f"{VARIANT_START}{t}{VARIANT_END}" for t in ["One", "Two", "Three"])
        llm = ScriptedLLM(raw)
        variants = await LLMContentGenerator(llm).generate("prompt", 2)

        assert variants == ["One", "Two"]
        assert llm.calls == [("prompt", SYSTEM_PROMPT)]

    async def test_short_output_returned(self, caplog):
        variants = await LLMContentGenerator(ScriptedLLM("Only one")).generate("prompt", 3)
        assert variants == ["Only one"]
        assert "1 of 3" in caplog.text

    async def test_zero_count_skips_call(self):
        llm = ScriptedLLM("unused")
        assert await LLMContentGenerator(llm).generate("prompt", 0) == []
        assert llm.calls == []

    async def test_timeout(self):
        generator = LLMContentGenerator(ScriptedLLM("late", delay=1.0), timeout=0.01)
        with pytest.raises(GenerationError, match="timed out"):
            await generator.generate("prompt", 1)

    async def test_client_error_wrapped(self):
        generator = LLMContentGenerator(ScriptedLLM(error=LLMError("boom")))
        with pytest.raises(GenerationError, match="boom"):
            await generator.generate("prompt", 1)
