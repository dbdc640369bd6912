"""
Query optimization: rewrite a shopper's free-text request into a short product search term.

Best effort only. Without OPENAI_API_KEY, or on any LLM failure, the original
query is returned unchanged.
"""

import logging

from openai import OpenAI, OpenAIError

from searchrelay.config import Settings, get_settings

logger = logging.getLogger(__name__)

OPTIMIZER_PROMPT_TEMPLATE = """You turn shopping requests into search terms for an online marketplace.
Rewrite the request below as the single best product search term: a few keywords, no quotes, no explanation, no punctuation at the end.

Request: {query}

Search term:"""


def _get_client(settings: Settings) -> OpenAI:
    # One POST per optimization; no SDK-level retries
    return OpenAI(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        timeout=settings.optimizer_timeout_seconds,
        max_retries=0,
    )


def _clean_term(content: str) -> str:
    text = content.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'`":
        text = text[1:-1].strip()
    return text


def optimize_query(query: str, settings: Settings | None = None) -> str:
    settings = settings or get_settings()
    if not settings.openai_api_key:
        logger.info("OPENAI_API_KEY not set, searching with original query %r", query)
        return query

    try:
        client = _get_client(settings)
        resp = client.chat.completions.create(
            model=settings.model_query_optimizer,
            messages=[
                {"role": "user", "content": OPTIMIZER_PROMPT_TEMPLATE.format(query=query)},
            ],
        )
    except OpenAIError as e:
        logger.warning("Query optimization failed for %r, using original: %s", query, e)
        return query

    content = resp.choices[0].message.content if resp.choices else None
    optimized = _clean_term(content or "")
    if not optimized:
        logger.warning("Query optimization returned no content for %r, using original", query)
        return query

    logger.info("Optimized query %r -> %r", query, optimized)
    return optimized
