"""LLM providers used for relevance judgments."""

from docrag.llm.base import LLMProvider
from docrag.llm.ollama_provider import OllamaLLMProvider
from docrag.llm.relevance import NEUTRAL_RELEVANCE, parse_relevance_score

__all__ = ["LLMProvider", "NEUTRAL_RELEVANCE", "OllamaLLMProvider", "parse_relevance_score"]
