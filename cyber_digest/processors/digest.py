from __future__ import annotations

from typing import Optional

from ..models import Article, Digest, RankedArticleSet
from ..utils.logging import get_logger
from ..utils.settings import Settings
from .ai import AIClient, create_ai_client

logger = get_logger("cyber_digest.processors.digest")

PROMPT_HEADER = (
    "한국 보안 담당자용 사이버보안 뉴스 요약:\n"
    "- 아래 기사 목록을 보고, 핵심 이슈를 5~7개 bullet point로 정리해줘.\n"
    "- 각 bullet은 (이슈 요약) + (왜 중요한지, 시사점)을 같이 적어줘.\n"
    "- 한국어로만 작성해줘.\n"
    "\n"
    "기사 목록:\n"
)


def _trim(text: str, max_chars: int) -> str:
    if max_chars <= 0 or len(text) <= max_chars:
        return text
    return text[:max_chars].rstrip() + "…"


def render_article(index: int, article: Article, *, max_description_chars: int = 0) -> str:
    description = _trim(article.description, max_description_chars)
    return f"{index}. [{article.source_name}] {article.title}\n{description}\n{article.link}"


def build_prompt(articles: RankedArticleSet, *, max_description_chars: int = 0) -> str:
    """Assemble the instruction block followed by the numbered article list."""
    article_text = "\n\n".join(
        render_article(i, a, max_description_chars=max_description_chars)
        for i, a in enumerate(articles, start=1)
    )
    return f"{PROMPT_HEADER}{article_text}\n"


class DigestComposer:
    """Turn a ranked article set into a digest via the generative-text service."""

    def __init__(self, settings: Settings, *, ai: Optional[AIClient] = None) -> None:
        self.settings = settings
        self._ai = ai

    def compose(self, articles: RankedArticleSet) -> Digest:
        # Credential check comes first so nothing leaves the process without it
        self.settings.require_gemini_api_key()
        ai = self._ai or create_ai_client(self.settings)

        prompt = build_prompt(articles, max_description_chars=self.settings.max_description_chars)
        logger.debug("Built digest prompt: %d article(s), %d chars", len(articles), len(prompt))
        text = ai.generate(prompt)
        return Digest(text=text)
