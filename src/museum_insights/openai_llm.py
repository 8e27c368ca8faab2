# src/museum_insights/openai_llm.py
import logging
import os
import random
import time
from typing import Optional

from openai import APIError, OpenAI, RateLimitError

from .config import DEFAULT_MODEL

logger = logging.getLogger(__name__)

_SYSTEM = (
    "You write short executive summaries of museum finance statistics for a general audience. "
    "Use only the numbers you are given; do not invent figures or museums. "
    "Plain prose, no markdown, at most two paragraphs."
)

MAX_ATTEMPTS = 4

_client: Optional[OpenAI] = None
def _get_client(api_key: Optional[str] = None) -> OpenAI:
    global _client
    if api_key:  # explicit key wins
        return OpenAI(api_key=api_key)
    if _client is None:
        key = os.getenv("OPENAI_API_KEY")
        if not key:
            raise RuntimeError("Set OPENAI_API_KEY or pass api_key to openai_llm_call().")
        _client = OpenAI(api_key=key)
    return _client

def openai_llm_call(prompt: str, model: str = DEFAULT_MODEL, api_key: Optional[str] = None) -> str:
    """
    Calls Chat Completions and returns the message text.
    Retries rate limits and API errors with exponential backoff.
    """
    client = _get_client(api_key)

    for attempt in range(MAX_ATTEMPTS):
        try:
            resp = client.chat.completions.create(
                model=model,
                temperature=0.2,
                messages=[
                    {"role": "system", "content": _SYSTEM},
                    {"role": "user", "content": prompt},
                ],
            )
            return (resp.choices[0].message.content or "").strip()
        except (RateLimitError, APIError) as e:
            if attempt == MAX_ATTEMPTS - 1:
                raise
            wait = 1.2 * (2 ** attempt) + random.random() * 0.4
            logger.warning("LLM call failed (%s); retry %d in %.1fs", type(e).__name__, attempt + 1, wait)
            time.sleep(wait)
