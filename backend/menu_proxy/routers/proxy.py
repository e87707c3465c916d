"""
Anthropic proxy endpoint.

Accepts a base64 PDF or a list of base64 images, asks Claude to extract the
menu they contain, and relays the API's answer to the browser.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from menu_proxy.config import ProxySettings, get_settings
from menu_proxy.errors import ConfigurationError, PayloadValidationError, ProxyError
from menu_proxy.models.proxy import ProxyRequest
from menu_proxy.services.forwarder import forward_to_anthropic
from menu_proxy.services.prompts import get_variant_profile
from menu_proxy.services.translator import check_required_input, translate_request

router = APIRouter()

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


def _json_response(content: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


def _parse_proxy_request(payload: Any) -> ProxyRequest:
    """
    Validate a decoded JSON body.

    A body that is not an object carries no fields, so it is checked like an
    empty request. Malformed fields are reported by location only; the
    offending values may be base64 payloads.
    """
    if not isinstance(payload, dict):
        payload = {}
    try:
        return ProxyRequest.model_validate(payload)
    except ValidationError as exc:
        locations = ", ".join(
            ".".join(str(part) for part in error["loc"]) for error in exc.errors()
        )
        raise PayloadValidationError(f"Invalid request body: {locations}")


@router.options("/")
@router.options("", include_in_schema=False)
async def proxy_preflight():
    """Answer the browser's CORS pre-flight without looking at the request."""
    return PlainTextResponse("ok", headers=CORS_HEADERS)


@router.post("/")
@router.post("", include_in_schema=False)
async def proxy_messages(
    request: Request,
    settings: ProxySettings = Depends(get_settings),
):
    """
    Forward a menu PDF or menu images to the Anthropic Messages API.

    Status codes:
    - 200: the API's response body, unchanged
    - 400: neither a PDF nor any images were sent, or a field has the wrong type
    - 4xx/5xx from the API: its status and error body, unchanged
    - 500: missing API key, unreadable body, or any other failure
    """
    try:
        proxy_request = _parse_proxy_request(await request.json())

        profile = get_variant_profile(settings.variant)
        check_required_input(proxy_request, profile)

        if not settings.anthropic_api_key:
            raise ConfigurationError("ANTHROPIC_API_KEY not set")

        translated = translate_request(
            proxy_request,
            profile,
            model=settings.model,
            max_tokens=settings.max_tokens,
        )

        file_blocks = len(translated.body.messages[0].content) - 1
        logger.info(
            f"Forwarding {'pdf' if translated.is_pdf else 'image'} request: "
            f"variant={profile.variant.value}, file_blocks={file_blocks}, "
            f"custom_prompt={bool(proxy_request.prompt)}"
        )

        data = await forward_to_anthropic(translated, settings.anthropic_api_key)
        return _json_response(data)

    except ProxyError as exc:
        logger.warning(f"Proxy request rejected ({exc.status_code}): {exc.message}")
        return _json_response(exc.body, exc.status_code)
    except Exception as exc:
        logger.error(f"Proxy request failed: {exc}", exc_info=True)
        return _json_response({"error": str(exc)}, 500)
