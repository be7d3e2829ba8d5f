# backend/factcheckai/services/providers.py
"""
Provider clients for the fact-check gateway.

Each provider sends one request to its vendor and normalizes the reply:
 - PerplexityProvider: OpenAI-compatible chat completions (bearer auth),
   text at choices[0].message.content.
 - AnthropicProvider: Messages API (x-api-key + version header),
   text at content[0].text.

attempt_fact_check() returns a FactCheckResult, returns None when the
provider produced no usable text, or raises. SDK retries are disabled so
every call is a single attempt.
"""

import logging
from typing import Any, Dict, List, Optional

from anthropic import Anthropic
from openai import OpenAI

from factcheckai.config import Config
from factcheckai.errors import ProviderError
from factcheckai.models.schema import FactCheckContext, FactCheckResult
from factcheckai.services.normalizer import normalize

logger = logging.getLogger("providers")

JSON_INSTRUCTION = (
    "Format your response as JSON with keys: verdict, explanation, "
    "sources (array of objects with url and snippet)."
)


def _client_options(config: Config) -> Dict[str, Any]:
    options: Dict[str, Any] = {"max_retries": 0}
    if config.PROVIDER_TIMEOUT is not None:
        options["timeout"] = config.PROVIDER_TIMEOUT
    return options


def _openai_client(config: Config) -> OpenAI:
    return OpenAI(
        api_key=config.PERPLEXITY_API_KEY,
        base_url=config.PERPLEXITY_BASE_URL,
        **_client_options(config),
    )


def _anthropic_client(config: Config) -> Anthropic:
    return Anthropic(api_key=config.ANTHROPIC_API_KEY, **_client_options(config))


class FactCheckProvider:
    """Base class: one vendor, one request shape, one response envelope."""

    name = "provider"

    def __init__(self, config: Config):
        self.config = config

    def _call_model(self, content: str, context: FactCheckContext) -> str:
        raise NotImplementedError

    def attempt_fact_check(self, content: str, context: FactCheckContext) -> Optional[FactCheckResult]:
        logger.info("Calling %s (%s, %d chars)", self.name, context.subject, len(content))
        text = self._call_model(content, context)
        if not text or not text.strip():
            logger.warning("%s returned an empty response", self.name)
            return None
        return normalize(text)


class PerplexityProvider(FactCheckProvider):
    name = "perplexity"

    def build_messages(self, content: str, context: FactCheckContext) -> List[Dict[str, str]]:
        system = (
            f"You are a fact-checking AI. {context.describe()}Analyze the content, verify against "
            "reliable sources, and return a verdict (True/False/Misleading/Mixed), a detailed "
            "explanation, and cited sources. If the content relates to cultural myths, highlight "
            f"anthropological context. {JSON_INSTRUCTION}"
        )
        user = f"Fact-check this {context.subject}: {content}"
        return [{"role": "system", "content": system}, {"role": "user", "content": user}]

    def _call_model(self, content: str, context: FactCheckContext) -> str:
        with _openai_client(self.config) as client:
            resp = client.chat.completions.create(
                model=self.config.PERPLEXITY_MODEL,
                messages=self.build_messages(content, context),
                max_tokens=self.config.PROVIDER_MAX_TOKENS,
                temperature=0.2,
            )
        choices = getattr(resp, "choices", None)
        if not choices:
            raise ProviderError("Perplexity response had no choices")
        return choices[0].message.content or ""


class AnthropicProvider(FactCheckProvider):
    name = "anthropic"

    def build_messages(self, content: str, context: FactCheckContext) -> List[Dict[str, str]]:
        # no system slot here: the instruction rides in the user turn
        prompt = (
            f"{context.describe()}Fact-check this {context.subject}: {content}. Provide a verdict "
            "(True/False/Misleading/Mixed), detailed explanation, and sources. "
            f"{JSON_INSTRUCTION}"
        )
        return [{"role": "user", "content": prompt}]

    def _call_model(self, content: str, context: FactCheckContext) -> str:
        with _anthropic_client(self.config) as client:
            resp = client.messages.create(
                model=self.config.ANTHROPIC_MODEL,
                max_tokens=self.config.PROVIDER_MAX_TOKENS,
                messages=self.build_messages(content, context),
            )
        blocks = getattr(resp, "content", None)
        if not blocks:
            raise ProviderError("Anthropic response had no content blocks")
        return getattr(blocks[0], "text", "") or ""


def default_providers(config: Config) -> List[FactCheckProvider]:
    """Fallback order: Perplexity first, Anthropic second."""
    return [PerplexityProvider(config), AnthropicProvider(config)]
