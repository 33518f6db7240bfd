"""Chat-model synthesizer grounded on the catalog.

This adapter delegates the prose to an OpenAI-compatible chat
completions endpoint. The model is given the whole catalog as its only
source of facts and told to answer with a fixed refusal sentence when
the question is out of scope.

The model is trusted for prose only. Which record gets attached to the
answer is decided here by checking the reply against the record the
retriever already matched for the original query.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from ...config import LLMConfig, get_config
from ...domain.errors import ServiceUnavailableError
from ...domain.messages import MODEL_REFUSAL, NO_MATCH_REPLY
from ...domain.models import Catalog, Synthesis, SynthesisRequest
from ...ports.nlp import PlaceRetrieverPort
from ..nlp.substring_retriever import SubstringPlaceRetriever

SYSTEM_PROMPT_TEMPLATE = """You are a helpful travel assistant for India. You have access to information about these places: {catalog_json}

Your task is to:
1. Analyze the user's question
2. If the question is about any of the places in the data (timings, location, amenities, description), provide a helpful answer using ONLY the information from the data
3. If the question is completely outside the scope of the provided travel data, respond with exactly: "{refusal}"
4. Format your responses nicely and be conversational
5. If asked about timings, location, amenities, or descriptions, provide that specific information
6. If asked generally about a place, provide comprehensive information including timings, location, amenities, and description

Always be helpful and friendly, but stick to the data provided."""


def build_system_prompt(catalog: Catalog) -> str:
    """System instruction carrying the full catalog as JSON."""
    catalog_json = json.dumps(catalog.to_list(), ensure_ascii=False)
    return SYSTEM_PROMPT_TEMPLATE.format(
        catalog_json=catalog_json, refusal=MODEL_REFUSAL
    )


def extract_reply(data: Any) -> str:
    """Pull the reply text out of a chat completions response body.

    Raises:
        ValueError: If the body does not carry a non-empty text reply.
    """
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise ValueError(f"Missing choices[0].message.content: {e}") from e
    if not isinstance(content, str) or not content.strip():
        raise ValueError("Empty reply content")
    return content.strip()


@dataclass
class OpenAIChatSynthesizer:
    """Synthesis strategy backed by an external chat model.

    This adapter implements AnswerSynthesizerPort.

    Attributes:
        config: Model endpoint, credentials and limits
        retriever: Used to scan the reply for catalog place names
        client: Optional shared HTTP client; a short-lived one is used otherwise
    """

    config: LLMConfig = field(default_factory=lambda: get_config().llm)
    retriever: PlaceRetrieverPort = field(default_factory=SubstringPlaceRetriever)
    client: Optional[httpx.AsyncClient] = field(default=None, repr=False)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    def build_payload(self, query: str, catalog: Catalog) -> Dict[str, Any]:
        messages: List[Dict[str, str]] = [
            {"role": "system", "content": build_system_prompt(catalog)},
            {"role": "user", "content": query},
        ]
        return {
            "model": self.config.name,
            "messages": messages,
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
        }

    async def _post(self, payload: Dict[str, Any]) -> httpx.Response:
        url = self.config.completions_url
        if self.client is not None:
            return await self.client.post(url, json=payload, headers=self._headers())
        async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
            return await client.post(url, json=payload, headers=self._headers())

    async def complete(self, query: str, catalog: Catalog) -> str:
        """Ask the model to answer the query from the catalog.

        The wait is bounded by ``config.timeout_seconds``. Cancellation of
        the calling task propagates into the request.

        Returns:
            The model's reply text.

        Raises:
            ServiceUnavailableError: On timeout, transport error, non-2xx
                status or a malformed response body.
        """
        payload = self.build_payload(query, catalog)
        provider = self.config.base_url

        try:
            response = await asyncio.wait_for(
                self._post(payload), timeout=self.config.timeout_seconds
            )
            response.raise_for_status()
            return extract_reply(response.json())
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise ServiceUnavailableError(
                "Chat model timed out",
                provider=provider,
                is_timeout=True,
                cause=e,
            )
        except httpx.HTTPStatusError as e:
            raise ServiceUnavailableError(
                "Chat model returned an error status",
                provider=provider,
                status_code=e.response.status_code,
                cause=e,
            )
        except httpx.HTTPError as e:
            raise ServiceUnavailableError(
                "Chat model request failed",
                provider=provider,
                cause=e,
            )
        except ValueError as e:
            raise ServiceUnavailableError(
                "Chat model returned a malformed response",
                provider=provider,
                cause=e,
            )

    async def synthesize(self, request: SynthesisRequest) -> Synthesis:
        """Produce a model-written answer and decide which record to attach.

        - a refusal reply yields the standard no-match answer and no record;
        - a reply naming the retrieved place, or no catalog place at all,
          keeps the retrieved record;
        - a reply naming only other catalog places keeps the prose but
          attaches nothing.

        Raises:
            ServiceUnavailableError: If the model call fails.
        """
        reply = await self.complete(request.query, request.catalog)

        if MODEL_REFUSAL.lower() in reply.lower():
            self._logger.info(
                "Chat model refused query",
                extra={"place": request.place.name},
            )
            return Synthesis(text=NO_MATCH_REPLY, place=None, refused=True)

        mentioned = self.retriever.mentioned_places(reply, request.catalog)
        if not mentioned or request.place in mentioned:
            return Synthesis(text=reply, place=request.place)

        self._logger.warning(
            "Chat model reply names a different place than the query",
            extra={
                "retrieved": request.place.name,
                "mentioned": [p.name for p in mentioned],
            },
        )
        return Synthesis(text=reply, place=None)
