"""
Request gateway to the hosted model.

chat() and generate() each send one prompt and return text. Failures never
propagate: they come back as fixed fallback strings that callers store like
any other answer. No retries.
"""
import logging

import anthropic

import config
from prompts import (
    CHAT_SYSTEM_PROMPT,
    GENERATE_SYSTEM_PROMPT,
    CHAT_EMPTY_FALLBACK,
    GENERATE_EMPTY_FALLBACK,
    CONNECTION_FALLBACK,
)

logger = logging.getLogger(__name__)

client = anthropic.AsyncAnthropic(api_key=config.ANTHROPIC_API_KEY)


def _api_key_configured() -> bool:
    key = config.ANTHROPIC_API_KEY
    return bool(key) and key != "your-api-key-here"


async def _complete(system: str, text: str, temperature: float, max_tokens: int, empty_fallback: str) -> str:
    if not _api_key_configured():
        logger.warning("ANTHROPIC_API_KEY not configured")
        return CONNECTION_FALLBACK

    try:
        response = await client.messages.create(
            model=config.ASSISTANT_MODEL,
            max_tokens=max_tokens,
            temperature=temperature,
            system=system,
            messages=[{"role": "user", "content": text}]
        )
    except anthropic.APIError as e:
        logger.warning("Model request failed: %s", e)
        return CONNECTION_FALLBACK

    answer = "".join(block.text for block in response.content if block.type == "text")
    return answer if answer.strip() else empty_fallback


async def chat(message: str) -> str:
    return await _complete(CHAT_SYSTEM_PROMPT, message, 0.7, 1000, CHAT_EMPTY_FALLBACK)


async def generate(prompt: str) -> str:
    return await _complete(GENERATE_SYSTEM_PROMPT, prompt, 0.8, 1500, GENERATE_EMPTY_FALLBACK)
