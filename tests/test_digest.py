"""Tests for prompt assembly, the digest composer and the Gemini client."""

from dataclasses import replace
from unittest.mock import Mock, patch

import pytest
import requests

from cyber_digest.errors import ConfigurationError, UpstreamServiceError
from cyber_digest.models import RankedArticleSet
from cyber_digest.output import build_payload
from cyber_digest.processors.ai import create_ai_client
from cyber_digest.processors.ai.gemini import GeminiClient
from cyber_digest.processors.digest import PROMPT_HEADER, DigestComposer, build_prompt

from tests.helpers import make_article


@pytest.fixture
def ranked():
    return RankedArticleSet.of(
        [
            make_article("The Hacker News", 1, published_at="2024-03-02T00:00:00Z", description="CVE details"),
            make_article("Dark Reading", 2, published_at="2024-03-01T00:00:00Z", description="Phishing kit"),
        ]
    )


class TestBuildPrompt:
    def test_renders_numbered_articles_after_instructions(self, ranked):
        prompt = build_prompt(ranked)

        assert prompt.startswith(PROMPT_HEADER)
        body = prompt[len(PROMPT_HEADER):]
        assert body == (
            "1. [The Hacker News] The Hacker News story 1\n"
            "CVE details\n"
            "https://example.com/the-hacker-news/1\n"
            "\n"
            "2. [Dark Reading] Dark Reading story 2\n"
            "Phishing kit\n"
            "https://example.com/dark-reading/2\n"
        )

    def test_instruction_block_asks_for_bullets_in_korean(self):
        assert "5~7개 bullet point" in PROMPT_HEADER
        assert "한국어로만" in PROMPT_HEADER

    def test_long_descriptions_are_trimmed(self):
        articles = RankedArticleSet.of([make_article("A", 1, description="x" * 50)])

        prompt = build_prompt(articles, max_description_chars=10)

        assert "x" * 10 + "…" in prompt
        assert "x" * 11 not in prompt

    def test_zero_disables_trimming(self):
        articles = RankedArticleSet.of([make_article("A", 1, description="y" * 50)])
        assert "y" * 50 in build_prompt(articles, max_description_chars=0)


class TestDigestComposer:
    def test_returns_generated_text_verbatim(self, settings, ranked):
        ai = Mock()
        ai.generate.return_value = "  - 이슈 1\n- 이슈 2\n"

        digest = DigestComposer(settings, ai=ai).compose(ranked)

        assert digest.text == "  - 이슈 1\n- 이슈 2\n"
        prompt = ai.generate.call_args[0][0]
        assert "[Dark Reading]" in prompt

    def test_prompt_is_trimmed_but_payload_keeps_full_description(self, settings):
        long = make_article("A", 1, description="z" * 2000)
        articles = RankedArticleSet.of([long])
        ai = Mock()
        ai.generate.return_value = "ok"

        digest = DigestComposer(replace(settings, max_description_chars=100), ai=ai).compose(articles)

        prompt = ai.generate.call_args[0][0]
        assert "z" * 100 + "…" in prompt
        assert "z" * 101 not in prompt
        wire = build_payload(digest, articles).to_dict()
        assert wire["articles"][0]["description"] == "z" * 2000

    def test_missing_credential_fails_before_any_call(self, settings, ranked):
        ai = Mock()
        composer = DigestComposer(replace(settings, gemini_api_key=None), ai=ai)

        with pytest.raises(ConfigurationError):
            composer.compose(ranked)

        ai.generate.assert_not_called()

    def test_service_error_propagates(self, settings, ranked):
        ai = Mock()
        ai.generate.side_effect = UpstreamServiceError("quota exceeded")

        with pytest.raises(UpstreamServiceError, match="quota exceeded"):
            DigestComposer(settings, ai=ai).compose(ranked)

        assert ai.generate.call_count == 1


def _gemini_response(payload=None, *, error=None):
    resp = Mock()
    resp.json.return_value = payload
    if error is not None:
        resp.raise_for_status.side_effect = error
    return resp


class TestGeminiClient:
    def test_posts_prompt_and_joins_parts(self):
        session = Mock()
        session.post.return_value = _gemini_response(
            {"candidates": [{"content": {"parts": [{"text": "첫째 "}, {"text": "둘째"}]}}]}
        )
        client = GeminiClient(api_key="secret", model="gemini-2.5-pro", timeout=9, session=session)

        assert client.generate("hello") == "첫째 둘째"

        args, kwargs = session.post.call_args
        assert args[0].endswith("/models/gemini-2.5-pro:generateContent")
        assert kwargs["headers"]["x-goog-api-key"] == "secret"
        assert kwargs["json"]["contents"][0]["parts"][0]["text"] == "hello"
        assert kwargs["timeout"] == 9

    def test_http_error_is_upstream_error_with_cause(self):
        session = Mock()
        session.post.return_value = _gemini_response(error=requests.HTTPError("429 Too Many Requests"))
        client = GeminiClient(api_key="k", model="m", session=session)

        with pytest.raises(UpstreamServiceError) as excinfo:
            client.generate("p")

        assert isinstance(excinfo.value.__cause__, requests.HTTPError)
        assert session.post.call_count == 1

    def test_no_candidates_is_unusable(self):
        session = Mock()
        session.post.return_value = _gemini_response({"promptFeedback": {"blockReason": "SAFETY"}})
        client = GeminiClient(api_key="k", model="m", session=session)

        with pytest.raises(UpstreamServiceError, match="SAFETY"):
            client.generate("p")

    def test_blank_text_is_unusable(self):
        session = Mock()
        session.post.return_value = _gemini_response(
            {"candidates": [{"content": {"parts": [{"text": "  "}]}, "finishReason": "MAX_TOKENS"}]}
        )
        client = GeminiClient(api_key="k", model="m", session=session)

        with pytest.raises(UpstreamServiceError, match="MAX_TOKENS"):
            client.generate("p")


class TestCreateAiClient:
    def test_builds_gemini_client_from_settings(self, settings):
        client = create_ai_client(settings)

        assert isinstance(client, GeminiClient)
        assert client.model == "gemini-test"
        assert client.timeout == settings.generation_timeout

    def test_requires_credential(self, settings):
        with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
            create_ai_client(replace(settings, gemini_api_key=None))


@patch("cyber_digest.processors.ai.gemini.requests.Session")
def test_gemini_client_closes_its_own_session(mock_session_cls):
    session = mock_session_cls.return_value.__enter__.return_value
    session.post.return_value = _gemini_response({"candidates": [{"content": {"parts": [{"text": "요약"}]}}]})
    client = GeminiClient(api_key="k", model="m")

    assert client.generate("p") == "요약"

    session.post.assert_called_once()
    mock_session_cls.return_value.__exit__.assert_called_once()
