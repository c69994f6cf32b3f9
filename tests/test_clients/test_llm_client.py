"""Tests for LLMClient (Claude API wrapper)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import anthropic
import httpx
import pytest

from ats_tailor.clients.llm_client import LLMClient, LLMResponse

PATCH_TARGET = "ats_tailor.clients.llm_client.anthropic.AsyncAnthropic"


def _make_api_message(text: str, input_tokens: int = 100, output_tokens: int = 50) -> MagicMock:
    """Build a mock anthropic Message-like object."""
    message = MagicMock()
    message.usage.input_tokens = input_tokens
    message.usage.output_tokens = output_tokens
    message.content = [MagicMock(text=text)]
    return message


def _connection_error() -> anthropic.APIConnectionError:
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    return anthropic.APIConnectionError(request=request)


def _mock_client(mock_cls, **create_kwargs) -> MagicMock:
    client = MagicMock()
    client.messages.create = AsyncMock(**create_kwargs)
    mock_cls.return_value = client
    return client


class TestLLMClientInit:
    def test_init_default_creates_client_with_no_kwargs(self):
        with patch(PATCH_TARGET) as mock_cls:
            LLMClient()
            mock_cls.assert_called_once_with()

    def test_init_passes_key_and_timeout(self):
        with patch(PATCH_TARGET) as mock_cls:
            LLMClient(api_key="test-key", timeout=30.0)
            mock_cls.assert_called_once_with(api_key="test-key", timeout=30.0)


class TestLLMClientGenerate:
    async def test_generate_returns_llm_response(self):
        with patch(PATCH_TARGET) as mock_cls:
            _mock_client(mock_cls, return_value=_make_api_message("hello", 100, 50))
            llm = LLMClient()
            result = await llm.generate("say hello")

        assert isinstance(result, LLMResponse)
        assert result.text == "hello"
        assert (result.input_tokens, result.output_tokens) == (100, 50)

    async def test_system_prompt_only_sent_when_given(self):
        with patch(PATCH_TARGET) as mock_cls:
            client = _mock_client(mock_cls, return_value=_make_api_message("ok"))
            llm = LLMClient()
            await llm.generate("prompt")
            await llm.generate("prompt", system="be terse", temperature=0.3)

        first, second = client.messages.create.call_args_list
        assert "system" not in first.kwargs
        assert second.kwargs["system"] == "be terse"
        assert second.kwargs["temperature"] == 0.3

    async def test_token_log_stores_model_and_counts(self):
        with patch(PATCH_TARGET) as mock_cls:
            _mock_client(mock_cls, return_value=_make_api_message("resp", 20, 8))
            llm = LLMClient()
            await llm.generate("prompt", model="claude-haiku-4-5-20251001")

        assert llm._token_log == [("claude-haiku-4-5-20251001", 20, 8)]

    async def test_retries_transient_errors(self):
        with patch(PATCH_TARGET) as mock_cls:
            client = _mock_client(
                mock_cls,
                side_effect=[_connection_error(), _make_api_message("recovered")],
            )
            llm = LLMClient(max_retries=3)
            result = await llm.generate("prompt")

        assert result.text == "recovered"
        assert client.messages.create.call_count == 2

    async def test_gives_up_after_max_retries(self):
        with patch(PATCH_TARGET) as mock_cls:
            client = _mock_client(mock_cls, side_effect=_connection_error())
            llm = LLMClient(max_retries=2)
            with pytest.raises(anthropic.APIConnectionError):
                await llm.generate("prompt")

        assert client.messages.create.call_count == 2

    async def test_non_retryable_error_propagates_immediately(self):
        with patch(PATCH_TARGET) as mock_cls:
            client = _mock_client(mock_cls, side_effect=ValueError("bad request"))
            llm = LLMClient(max_retries=3)
            with pytest.raises(ValueError):
                await llm.generate("prompt")

        assert client.messages.create.call_count == 1


class TestLLMClientGenerateJson:
    async def test_generate_json_parses_fenced_reply(self):
        with patch(PATCH_TARGET) as mock_cls:
            _mock_client(
                mock_cls, return_value=_make_api_message('```json\n{"ats_score": 77}\n```')
            )
            llm = LLMClient()
            result = await llm.generate_json("give me json")

        assert result == {"ats_score": 77}

    async def test_generate_json_raises_on_non_json_response(self):
        with patch(PATCH_TARGET) as mock_cls:
            _mock_client(mock_cls, return_value=_make_api_message("plain prose"))
            llm = LLMClient()
            with pytest.raises(ValueError):
                await llm.generate_json("give me json")


class TestLLMClientTokenSummary:
    def test_summary_totals_and_clears(self):
        with patch(PATCH_TARGET):
            llm = LLMClient()
        llm._token_log = [("m", 100, 50), ("m", 200, 80)]

        summary = llm.get_token_summary()

        assert summary["input"] == 300
        assert summary["output"] == 130
        assert len(summary["calls"]) == 2
        assert llm.get_token_summary()["calls"] == []
