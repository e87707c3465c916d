"""
Translation from a proxy request to a Messages API request.

Everything here is pure: no I/O and no environment access. The forwarder
takes the result and performs the actual call.
"""

from dataclasses import dataclass
from typing import List, Optional

from menu_proxy.errors import PayloadValidationError
from menu_proxy.models.proxy import (
    DEFAULT_IMAGE_MEDIA_TYPE,
    PDF_MEDIA_TYPE,
    Base64Source,
    ContentBlock,
    DocumentBlock,
    ImageBlock,
    OutboundRequest,
    ProxyRequest,
    TextBlock,
    UserMessage,
)
from menu_proxy.services.prompts import VariantProfile

# Document content blocks are gated behind this beta flag; images are not.
PDF_BETA_FLAG = "pdfs-2024-09-25"


@dataclass(frozen=True)
class TranslatedRequest:
    body: OutboundRequest
    is_pdf: bool = False

    @property
    def beta(self) -> Optional[str]:
        return PDF_BETA_FLAG if self.is_pdf else None


def check_required_input(request: ProxyRequest, profile: VariantProfile) -> None:
    """
    Raise PayloadValidationError when the request carries nothing to analyze.

    Variants that do not accept images only count the PDF.
    """
    if request.has_pdf:
        return
    if profile.accepts_images and request.has_images:
        return
    raise PayloadValidationError(profile.missing_input_message)


def select_prompt(request: ProxyRequest, profile: VariantProfile) -> str:
    return request.prompt or profile.default_prompt


def build_file_blocks(request: ProxyRequest) -> List[ContentBlock]:
    """
    Build the file content blocks for a request.

    A PDF wins over images when both are present. Image order is preserved
    and base64 data is passed through without re-encoding.
    """
    if request.has_pdf:
        return [
            DocumentBlock(
                source=Base64Source(media_type=PDF_MEDIA_TYPE, data=request.pdfBase64)
            )
        ]

    return [
        ImageBlock(
            source=Base64Source(
                media_type=image.mediaType or DEFAULT_IMAGE_MEDIA_TYPE,
                data=image.base64,
            )
        )
        for image in request.images or []
    ]


def translate_request(
    request: ProxyRequest,
    profile: VariantProfile,
    model: str,
    max_tokens: int,
) -> TranslatedRequest:
    """
    Build the outbound Messages API request for a validated proxy request.

    The prompt text block always comes first, followed by the file blocks.
    """
    content: List[ContentBlock] = [TextBlock(text=select_prompt(request, profile))]
    content.extend(build_file_blocks(request))

    body = OutboundRequest(
        model=model,
        max_tokens=max_tokens,
        messages=[UserMessage(content=content)],
    )
    return TranslatedRequest(
        body=body,
        is_pdf=request.has_pdf,
    )
