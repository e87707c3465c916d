"""
Pydantic models for the proxy request and the outbound Messages API payload.
"""

from typing import Dict, List, Literal, Optional, Union
from pydantic import BaseModel, Field


DEFAULT_IMAGE_MEDIA_TYPE = "image/jpeg"
PDF_MEDIA_TYPE = "application/pdf"

# Upstream response bodies are relayed untouched, without a fixed schema.
JsonValue = Union[str, int, float, bool, None, List["JsonValue"], Dict[str, "JsonValue"]]


class ImageInput(BaseModel):
    """One base64-encoded menu page image sent by the client."""
    base64: str
    mediaType: Optional[str] = None


class ProxyRequest(BaseModel):
    """Request body accepted by the proxy endpoint."""
    pdfBase64: Optional[str] = Field(
        None,
        description="Base64-encoded PDF file content",
    )
    images: Optional[List[ImageInput]] = Field(
        None,
        description="Base64-encoded images, in page order",
    )
    prompt: Optional[str] = Field(
        None,
        description="Overrides the default extraction prompt when non-empty",
    )

    @property
    def has_pdf(self) -> bool:
        return bool(self.pdfBase64)

    @property
    def has_images(self) -> bool:
        return bool(self.images)


class Base64Source(BaseModel):
    type: Literal["base64"] = "base64"
    media_type: str
    data: str


class TextBlock(BaseModel):
    type: Literal["text"] = "text"
    text: str


class DocumentBlock(BaseModel):
    type: Literal["document"] = "document"
    source: Base64Source


class ImageBlock(BaseModel):
    type: Literal["image"] = "image"
    source: Base64Source


ContentBlock = Union[TextBlock, DocumentBlock, ImageBlock]


class UserMessage(BaseModel):
    role: Literal["user"] = "user"
    content: List[ContentBlock]


class OutboundRequest(BaseModel):
    """Body of the single call made to the Messages API."""
    model: str
    max_tokens: int
    messages: List[UserMessage]
