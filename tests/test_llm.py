"""Tests for relevance parsing and the Ollama LLM provider."""

from __future__ import annotations

import asyncio
import json
import logging

import httpx
import pytest

from docrag.errors import ServiceError
from docrag.llm import NEUTRAL_RELEVANCE, OllamaLLMProvider, parse_relevance_score
from docrag.llm.relevance import MAX_DOCUMENT_CHARS, build_relevance_prompt
from docrag.ollama import OllamaTransport

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _llm(handler, **kwargs) -> OllamaLLMProvider:
    transport = OllamaTransport(
        base_url="http://ollama.test:11434",
        transport=httpx.MockTransport(handler),
    )
    return OllamaLLMProvider(transport=transport, **kwargs)


def _recording_handler(payloads: list[dict], reply: str = "0.8"):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/generate"
        payloads.append(json.loads(request.content))
        return httpx.Response(200, json={"response": reply, "done": True})
    return handler


# ---------------------------------------------------------------------------
# parse_relevance_score
# ---------------------------------------------------------------------------


class TestParseRelevanceScore:
    @pytest.mark.parametrize(
        ("reply", "expected"),
        [
            ("0.8", 0.8),
            (" 0.35\n", 0.35),
            ("Score: 0.75 because it matches", 0.75),
            ("1", 1.0),
            ("0", 0.0),
            (".5", 0.5),
            ("1.0 - highly relevant", 1.0),
        ],
    )
    def test_parses_first_number(self, reply, expected):
        assert parse_relevance_score(reply) == pytest.approx(expected)

    @pytest.mark.parametrize(("reply", "expected"), [("7", 1.0), ("85", 1.0), ("-0.5", 0.0), ("-3", 0.0)])
    def test_clamped_to_unit_interval(self, reply, expected):
        assert parse_relevance_score(reply) == expected

    @pytest.mark.parametrize("reply", ["", "not relevant", "N/A"])
    def test_no_number_is_neutral(self, reply):
        assert parse_relevance_score(reply) == NEUTRAL_RELEVANCE

    def test_no_number_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="docrag.llm.relevance"):
            parse_relevance_score("I cannot say")
        assert "No number in relevance reply" in caplog.text


# ---------------------------------------------------------------------------
# Prompt
# ---------------------------------------------------------------------------


class TestRelevancePrompt:
    def test_contains_query_and_document(self):
        prompt = build_relevance_prompt("what is ATP?", "ATP stores energy.")
        assert "Query: what is ATP?" in prompt
        assert "Document: ATP stores energy." in prompt
        assert prompt.rstrip().endswith("Relevance score:")

    def test_document_truncated(self):
        document = "a" * MAX_DOCUMENT_CHARS + "TAIL"
        prompt = build_relevance_prompt("q", document)
        assert "a" * MAX_DOCUMENT_CHARS in prompt
        assert "TAIL" not in prompt


# ---------------------------------------------------------------------------
# OllamaLLMProvider
# ---------------------------------------------------------------------------


class TestOllamaLLMProvider:
    def test_generate_payload_defaults(self):
        payloads: list[dict] = []
        llm = _llm(_recording_handler(payloads, reply="hello"), model="llama3.2")

        reply = asyncio.run(llm.generate("Say hello"))

        assert reply == "hello"
        assert payloads == [{
            "model": "llama3.2",
            "prompt": "Say hello",
            "stream": False,
            "options": {"temperature": 0.2, "num_predict": 256},
        }]

    def test_generate_overrides(self):
        payloads: list[dict] = []
        llm = _llm(_recording_handler(payloads))
        asyncio.run(llm.generate("p", temperature=0.0, max_tokens=5, stop=["\n"]))
        assert payloads[0]["options"] == {"temperature": 0.0, "num_predict": 5, "stop": ["\n"]}

    def test_evaluate_relevance(self):
        payloads: list[dict] = []
        llm = _llm(_recording_handler(payloads, reply=" 0.9"))

        score = asyncio.run(llm.evaluate_relevance("what is ATP?", "x" * 800))

        assert score == pytest.approx(0.9)
        options = payloads[0]["options"]
        assert options["temperature"] == 0.0
        assert options["num_predict"] == 10
        assert options["stop"] == ["\n"]
        assert "x" * MAX_DOCUMENT_CHARS in payloads[0]["prompt"]
        assert "x" * (MAX_DOCUMENT_CHARS + 1) not in payloads[0]["prompt"]

    def test_evaluate_relevance_unparseable_reply(self):
        llm = _llm(_recording_handler([], reply="maybe?"))
        assert asyncio.run(llm.evaluate_relevance("q", "doc")) == NEUTRAL_RELEVANCE

    def test_missing_response_field(self):
        llm = _llm(lambda request: httpx.Response(200, json={"done": True}))
        with pytest.raises(ServiceError):
            asyncio.run(llm.generate("p"))

    def test_error_status(self):
        llm = _llm(lambda request: httpx.Response(500))
        with pytest.raises(ServiceError):
            asyncio.run(llm.evaluate_relevance("q", "doc"))

    def test_ping(self):
        llm = _llm(lambda request: httpx.Response(200, json={"version": "0.5.1"}))
        assert asyncio.run(llm.ping()) is True
