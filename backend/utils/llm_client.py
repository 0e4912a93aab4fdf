import logging

import httpx

from config import settings

logger = logging.getLogger(__name__)

_client: httpx.AsyncClient | None = None


def get_client() -> httpx.AsyncClient:
    global _client
    if _client is None:
        _client = httpx.AsyncClient(
            timeout=60.0,
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
        )
    return _client


async def close_client():
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None


async def _call_llm(client: httpx.AsyncClient, base_url: str, api_key: str,
                    model: str, messages: list[dict],
                    temperature: float, max_tokens: int) -> httpx.Response:
    """Single LLM call to any OpenAI-compatible endpoint."""
    return await client.post(
        f"{base_url}/chat/completions",
        headers={
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "X-Title": "VisaCompass",
        },
        json={
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        },
    )


# OpenRouter free models to try in order when the primary is rate-limited
_FALLBACK_MODELS = [
    "google/gemma-3-27b-it:free",
    "mistralai/mistral-small-3.1-24b-instruct:free",
    "meta-llama/llama-3.3-70b-instruct:free",
]


async def _call_with_fallback(client: httpx.AsyncClient, messages: list[dict],
                              temperature: float, max_tokens: int,
                              model: str | None = None) -> httpx.Response:
    """Try the primary model, fall back to free models on 429."""
    primary_model = model or settings.default_model
    response = await _call_llm(
        client, settings.openrouter_base_url, settings.openrouter_api_key,
        primary_model, messages, temperature, max_tokens,
    )

    if response.status_code != 429:
        return response

    if not settings.fallback_api_key:
        logger.error("Primary LLM rate-limited and no fallback API key configured")
        return response

    logger.warning("Primary model %s rate-limited, trying fallbacks...", primary_model)

    fallbacks = [settings.fallback_model] + [m for m in _FALLBACK_MODELS if m != settings.fallback_model]

    for fb_model in fallbacks:
        logger.info("Trying fallback: %s", fb_model)
        response = await _call_llm(
            client, settings.fallback_base_url, settings.fallback_api_key,
            fb_model, messages, temperature, max_tokens,
        )
        if response.status_code == 200:
            logger.info("Fallback %s succeeded", fb_model)
            return response
        if response.status_code != 429:
            return response
        logger.warning("Fallback %s also rate-limited, trying next...", fb_model)

    logger.error("All fallback models exhausted")
    return response


async def chat_completion(
    prompt: str,
    system: str = "",
    model: str | None = None,
    temperature: float = 0.7,
    max_tokens: int = 1024,
) -> str:
    messages = []
    if system:
        messages.append({"role": "system", "content": system})
    messages.append({"role": "user", "content": prompt})

    client = get_client()
    response = await _call_with_fallback(client, messages, temperature, max_tokens, model)
    if response.status_code != 200:
        logger.error("LLM error %s: %s", response.status_code, response.text)
    response.raise_for_status()
    data = response.json()
    try:
        choice = data["choices"][0]
        message = choice.get("message") or {}
        content = message.get("content") or choice.get("text")
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        raise ValueError("LLM response contained no content") from e
    if not content:
        raise ValueError("LLM response contained no content")
    return content
