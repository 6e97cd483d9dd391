import logging
from collections.abc import AsyncIterator
from typing import Any

import httpx

from design_api.agents.prompts import SYSTEM_PROMPT, USER_INSTRUCTION
from design_api.config import settings
from design_api.errors import (
    ConfigurationError,
    ProviderAuthError,
    ProviderBadRequestError,
    ProviderContentMissingError,
    ProviderError,
    ProviderRateLimitError,
)
from design_api.models.request import ImagePayload
from design_api.models.response import AnalysisResult
from design_api.parsing import parse_analysis

logger = logging.getLogger(__name__)

_STATUS_ERRORS: dict[int, type[ProviderError]] = {
    401: ProviderAuthError,
    429: ProviderRateLimitError,
    400: ProviderBadRequestError,
}

# Provider error bodies can echo the whole request; keep log lines bounded
_LOG_EXCERPT = 500


async def get_provider_client() -> AsyncIterator[httpx.AsyncClient]:
    """FastAPI dependency: one HTTP client per analysis request."""
    async with httpx.AsyncClient(timeout=settings.provider_timeout) as client:
        yield client


def build_payload(image: ImagePayload) -> dict[str, Any]:
    """Chat-completion body: fixed system instruction plus a text+image user turn."""
    return {
        "model": settings.model_name,
        "stream": False,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": USER_INSTRUCTION},
                    {"type": "image_url", "image_url": {"url": image.data_url}},
                ],
            },
        ],
        "max_tokens": settings.max_tokens,
        "temperature": settings.temperature,
    }


def extract_content(data: Any) -> str:
    """Return the first choice's message text, or raise if there is none."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        content = None

    # Some OpenAI-compatible providers return content as a list of typed parts
    if isinstance(content, list):
        content = "".join(
            part.get("text", "") for part in content if isinstance(part, dict) and part.get("type") == "text"
        )

    if not content or not isinstance(content, str):
        logger.error("No content in provider response: %s", str(data)[:_LOG_EXCERPT])
        raise ProviderContentMissingError()
    return content


async def request_analysis(client: httpx.AsyncClient, image: ImagePayload) -> str:
    """Send the screenshot to the provider and return the raw completion text.

    Non-2xx responses are mapped onto the ProviderError family; no retries.
    """
    api_key = settings.perplexity_api_key
    if not api_key:
        logger.error("PERPLEXITY_API_KEY is not configured")
        raise ConfigurationError()

    logger.info(
        "Requesting analysis from %s (model=%s, image=%s, %d bytes)",
        settings.provider_url,
        settings.model_name,
        image.mime_type,
        image.size,
    )
    try:
        response = await client.post(
            settings.provider_url,
            headers={"Authorization": f"Bearer {api_key}"},
            json=build_payload(image),
        )
    except httpx.HTTPError as e:
        logger.error("Provider request failed: %r", e)
        raise ProviderError() from e

    if not response.is_success:
        logger.error("Provider API error: %d %s", response.status_code, response.text[:_LOG_EXCERPT])
        raise _STATUS_ERRORS.get(response.status_code, ProviderError)()

    try:
        data = response.json()
    except ValueError:
        logger.error("Provider returned a non-JSON body: %s", response.text[:_LOG_EXCERPT])
        raise ProviderContentMissingError() from None

    usage = data.get("usage") if isinstance(data, dict) else None
    if usage:
        logger.debug("Provider usage: %s", usage)
    return extract_content(data)


async def analyze_design(client: httpx.AsyncClient, image: ImagePayload) -> AnalysisResult:
    content = await request_analysis(client, image)
    result = parse_analysis(content)
    logger.info(
        "Extracted %d colors and a %d-word prompt",
        len(result.tokens.colors),
        len(result.prompt.split()),
    )
    return result
