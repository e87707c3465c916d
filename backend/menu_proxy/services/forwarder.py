"""
Forwarding of translated requests to the Anthropic Messages API.

One call per proxy request, made with a fresh client. SDK retries are turned
off so a failure surfaces to the caller exactly once, and the raw HTTP body is
returned so the caller receives what the API sent.
"""

import logging

import anthropic

from menu_proxy.errors import UpstreamError
from menu_proxy.models.proxy import JsonValue
from menu_proxy.services.translator import TranslatedRequest

ANTHROPIC_BASE_URL = "https://api.anthropic.com"
ANTHROPIC_VERSION = "2023-06-01"

logger = logging.getLogger(__name__)


async def forward_to_anthropic(translated: TranslatedRequest, api_key: str) -> JsonValue:
    """
    Send the request to POST /v1/messages and return the parsed response body.

    Raises:
        UpstreamError: when the API answers with a non-success status; carries
            that status and the API's own JSON error body.
    """
    client = anthropic.AsyncAnthropic(
        api_key=api_key,
        base_url=ANTHROPIC_BASE_URL,
        max_retries=0,
        default_headers={"anthropic-version": ANTHROPIC_VERSION},
    )

    extra_headers = {}
    if translated.beta:
        extra_headers["anthropic-beta"] = translated.beta

    payload = translated.body.model_dump()

    try:
        raw = await client.messages.with_raw_response.create(
            model=payload["model"],
            max_tokens=payload["max_tokens"],
            messages=payload["messages"],
            extra_headers=extra_headers or None,
        )
    except anthropic.APIStatusError as exc:
        logger.warning(f"Anthropic API returned status {exc.status_code}")
        raise UpstreamError(exc.status_code, exc.response.json())
    finally:
        await client.close()

    logger.info(f"Anthropic API returned status {raw.status_code}")
    return raw.http_response.json()
