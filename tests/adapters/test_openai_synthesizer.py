"""Tests for the chat-model synthesizer using a mocked HTTP transport."""

import asyncio
import json

import httpx
import pytest
import pytest_asyncio

from travel_guide.adapters.synthesis import OpenAIChatSynthesizer
from travel_guide.adapters.synthesis.openai_adapter import (
    build_system_prompt,
    extract_reply,
)
from travel_guide.config import LLMConfig
from travel_guide.domain.errors import ServiceUnavailableError
from travel_guide.domain.messages import MODEL_REFUSAL, NO_MATCH_REPLY, SERVICE_APOLOGY
from travel_guide.domain.models import Intent, ResolutionStatus, SynthesisRequest


def completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.fixture
def llm_config():
    return LLMConfig(
        api_key="sk-test",
        base_url="https://llm.test/v1/",
        name="test-model",
        timeout_seconds=1.0,
    )


@pytest_asyncio.fixture
async def make_synthesizer(llm_config):
    """Build a synthesizer whose HTTP calls go to ``handler``."""
    clients = []

    def _make(handler, config=None):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return OpenAIChatSynthesizer(config=config or llm_config, client=client)

    yield _make

    for client in clients:
        await client.aclose()


@pytest.fixture
def taj_request(sample_catalog, taj_mahal):
    return SynthesisRequest(
        query="What are the timings of Taj Mahal?",
        place=taj_mahal,
        intent=Intent.HOURS,
        catalog=sample_catalog,
    )


class TestPrompt:
    def test_system_prompt_carries_catalog_and_refusal(self, sample_catalog):
        prompt = build_system_prompt(sample_catalog)
        for name in sample_catalog.names:
            assert name in prompt
        assert MODEL_REFUSAL in prompt
        assert "06:00" in prompt

    def test_extract_reply(self):
        assert extract_reply(completion("  Hello  ")) == "Hello"

    @pytest.mark.parametrize(
        "body",
        [{}, {"choices": []}, completion(""), completion(None), ["not", "a", "dict"]],
    )
    def test_extract_reply_rejects_malformed_bodies(self, body):
        with pytest.raises(ValueError):
            extract_reply(body)


class TestRequest:
    @pytest.mark.asyncio
    async def test_posts_chat_completion(self, make_synthesizer, taj_request):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=completion("Taj Mahal opens at 06:00."))

        synthesizer = make_synthesizer(handler)
        await synthesizer.synthesize(taj_request)

        (request,) = seen
        assert str(request.url) == "https://llm.test/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer sk-test"
        payload = json.loads(request.content)
        assert payload["model"] == "test-model"
        assert payload["max_tokens"] == 500
        system, user = payload["messages"]
        assert system["role"] == "system"
        assert "Marine Drive" in system["content"]
        assert user == {"role": "user", "content": taj_request.query}

    @pytest.mark.asyncio
    async def test_no_authorization_without_key(self, make_synthesizer, taj_request):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=completion("Taj Mahal is in Agra."))

        config = LLMConfig(api_key=None, base_url="http://local.test/v1")
        await make_synthesizer(handler, config=config).synthesize(taj_request)
        assert "Authorization" not in seen[0].headers


class TestReconciliation:
    @pytest.mark.asyncio
    async def test_reply_naming_retrieved_place_keeps_record(
        self, make_synthesizer, taj_request, taj_mahal
    ):
        handler = lambda request: httpx.Response(
            200, json=completion("The Taj Mahal is open 06:00 - 19:00.")
        )
        synthesis = await make_synthesizer(handler).synthesize(taj_request)
        assert synthesis.place == taj_mahal
        assert synthesis.text == "The Taj Mahal is open 06:00 - 19:00."
        assert not synthesis.refused

    @pytest.mark.asyncio
    async def test_reply_naming_no_place_keeps_record(
        self, make_synthesizer, taj_request, taj_mahal
    ):
        handler = lambda request: httpx.Response(
            200, json=completion("It opens at sunrise.")
        )
        synthesis = await make_synthesizer(handler).synthesize(taj_request)
        assert synthesis.place == taj_mahal

    @pytest.mark.asyncio
    async def test_reply_about_another_place_drops_record(
        self, make_synthesizer, taj_request
    ):
        handler = lambda request: httpx.Response(
            200, json=completion("The Red Fort opens at 09:30.")
        )
        synthesis = await make_synthesizer(handler).synthesize(taj_request)
        assert synthesis.place is None
        assert synthesis.text == "The Red Fort opens at 09:30."

    @pytest.mark.asyncio
    async def test_refusal_reply(self, make_synthesizer, taj_request):
        handler = lambda request: httpx.Response(
            200, json=completion(MODEL_REFUSAL.upper())
        )
        synthesis = await make_synthesizer(handler).synthesize(taj_request)
        assert synthesis.refused
        assert synthesis.text == NO_MATCH_REPLY
        assert synthesis.place is None


class TestFailures:
    @pytest.mark.asyncio
    async def test_transport_timeout(self, make_synthesizer, taj_request):
        def handler(request):
            raise httpx.ReadTimeout("read timed out", request=request)

        with pytest.raises(ServiceUnavailableError) as exc_info:
            await make_synthesizer(handler).synthesize(taj_request)
        assert exc_info.value.is_timeout

    @pytest.mark.asyncio
    async def test_bounded_wait(self, make_synthesizer, taj_request):
        async def handler(request):
            await asyncio.sleep(5)
            return httpx.Response(200, json=completion("too late"))

        config = LLMConfig(api_key="sk-test", timeout_seconds=0.05)
        with pytest.raises(ServiceUnavailableError) as exc_info:
            await make_synthesizer(handler, config=config).synthesize(taj_request)
        assert exc_info.value.is_timeout

    @pytest.mark.asyncio
    async def test_error_status(self, make_synthesizer, taj_request):
        handler = lambda request: httpx.Response(500, json={"error": "boom"})
        with pytest.raises(ServiceUnavailableError) as exc_info:
            await make_synthesizer(handler).synthesize(taj_request)
        assert exc_info.value.status_code == 500
        assert not exc_info.value.is_timeout

    @pytest.mark.asyncio
    async def test_connection_error(self, make_synthesizer, taj_request):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ServiceUnavailableError) as exc_info:
            await make_synthesizer(handler).synthesize(taj_request)
        assert exc_info.value.provider == "https://llm.test/v1/"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, text="<html>not json</html>"),
            httpx.Response(200, json={"choices": []}),
            httpx.Response(200, json=completion("   ")),
        ],
    )
    async def test_malformed_body(self, make_synthesizer, taj_request, response):
        with pytest.raises(ServiceUnavailableError):
            await make_synthesizer(lambda request: response).synthesize(taj_request)


class TestThroughResolver:
    @pytest.mark.asyncio
    async def test_failure_becomes_apology(self, make_resolver, make_synthesizer):
        handler = lambda request: httpx.Response(503)
        resolver = make_resolver(make_synthesizer(handler))

        result = await resolver.resolve("What are the timings of Taj Mahal?")

        assert result.status == ResolutionStatus.FAILED
        assert result.answer == SERVICE_APOLOGY
        assert result.place is None

    @pytest.mark.asyncio
    async def test_unmatched_query_never_calls_the_model(
        self, make_resolver, make_synthesizer
    ):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=completion("Try the pizza at Da Michele."))

        resolver = make_resolver(make_synthesizer(handler))
        result = await resolver.resolve("best pizza in Rome")

        assert result.status == ResolutionStatus.UNMATCHED
        assert result.answer == NO_MATCH_REPLY
        assert seen == []

    @pytest.mark.asyncio
    async def test_model_answer_is_attached(self, make_resolver, make_synthesizer):
        handler = lambda request: httpx.Response(
            200, json=completion("Taj Mahal: 06:00 - 19:00, every day.")
        )
        resolver = make_resolver(make_synthesizer(handler))

        result = await resolver.resolve("What are the timings of Taj Mahal?")

        assert result.status == ResolutionStatus.MATCHED
        assert result.place.name == "Taj Mahal"
        assert "06:00 - 19:00" in result.answer
