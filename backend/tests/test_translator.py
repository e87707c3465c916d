"""
Unit tests for the proxy request translator.
Pure functions only: no API calls, no environment access.
"""

import pytest

from menu_proxy.errors import PayloadValidationError
from menu_proxy.models.proxy import DocumentBlock, ImageBlock, ProxyRequest, TextBlock
from menu_proxy.services.prompts import (
    MENU_PDF_PROMPT,
    MENU_PROMPT,
    HandlerVariant,
    get_variant_profile,
)
from menu_proxy.services.translator import (
    PDF_BETA_FLAG,
    build_file_blocks,
    check_required_input,
    select_prompt,
    translate_request,
)


MENU = get_variant_profile("menu")
MENU_PDF = get_variant_profile("menu-pdf")


def _translate(payload: dict, profile=MENU):
    return translate_request(
        ProxyRequest.model_validate(payload),
        profile,
        model="claude-sonnet-4-5",
        max_tokens=16384,
    )


class TestCheckRequiredInput:
    """Test the pdfBase64/images presence check."""

    @pytest.mark.parametrize("payload", [
        {},
        {"images": []},
        {"pdfBase64": ""},
        {"pdfBase64": None, "images": None},
        {"prompt": "Only a prompt"},
    ])
    def test_missing_input_raises(self, payload):
        with pytest.raises(PayloadValidationError) as exc_info:
            check_required_input(ProxyRequest.model_validate(payload), MENU)

        assert exc_info.value.status_code == 400
        assert exc_info.value.body == {"error": "pdfBase64 or images array is required"}

    def test_pdf_is_enough(self):
        check_required_input(ProxyRequest(pdfBase64="JVBERi0x"), MENU)

    def test_images_are_enough(self):
        check_required_input(ProxyRequest(images=[{"base64": "AAA"}]), MENU)

    def test_pdf_only_variant_rejects_images(self):
        """The PDF-only variant does not count images and uses its own message."""
        with pytest.raises(PayloadValidationError) as exc_info:
            check_required_input(ProxyRequest(images=[{"base64": "AAA"}]), MENU_PDF)

        assert exc_info.value.body == {"error": "pdfBase64 is required"}


class TestSelectPrompt:

    def test_custom_prompt_wins(self):
        request = ProxyRequest(pdfBase64="JVBERi0x", prompt="X")
        assert select_prompt(request, MENU) == "X"

    def test_empty_prompt_falls_back_to_default(self):
        request = ProxyRequest(pdfBase64="JVBERi0x", prompt="")
        assert select_prompt(request, MENU) == MENU_PROMPT

    def test_default_depends_on_variant(self):
        request = ProxyRequest(pdfBase64="JVBERi0x")
        assert select_prompt(request, MENU_PDF) == MENU_PDF_PROMPT


class TestBuildFileBlocks:

    def test_pdf_becomes_single_document_block(self):
        blocks = build_file_blocks(ProxyRequest(pdfBase64="JVBERi0xLjQK"))

        assert len(blocks) == 1
        assert isinstance(blocks[0], DocumentBlock)
        assert blocks[0].source.media_type == "application/pdf"
        assert blocks[0].source.data == "JVBERi0xLjQK"

    def test_pdf_takes_precedence_over_images(self):
        request = ProxyRequest(pdfBase64="JVBERi0x", images=[{"base64": "AAA"}])
        blocks = build_file_blocks(request)

        assert len(blocks) == 1
        assert isinstance(blocks[0], DocumentBlock)

    def test_images_keep_order_and_default_media_type(self):
        request = ProxyRequest(images=[
            {"base64": "AAA", "mediaType": "image/png"},
            {"base64": "BBB"},
            {"base64": "CCC", "mediaType": "image/webp"},
        ])
        blocks = build_file_blocks(request)

        assert all(isinstance(b, ImageBlock) for b in blocks)
        assert [(b.source.media_type, b.source.data) for b in blocks] == [
            ("image/png", "AAA"),
            ("image/jpeg", "BBB"),
            ("image/webp", "CCC"),
        ]

    def test_empty_media_type_defaults_to_jpeg(self):
        blocks = build_file_blocks(ProxyRequest(images=[{"base64": "AAA", "mediaType": ""}]))
        assert blocks[0].source.media_type == "image/jpeg"


class TestTranslateRequest:

    def test_pdf_request_shape(self):
        translated = _translate({"pdfBase64": "JVBERi0xLjQK"})
        body = translated.body.model_dump()

        assert body["model"] == "claude-sonnet-4-5"
        assert body["max_tokens"] == 16384
        assert len(body["messages"]) == 1
        assert body["messages"][0]["role"] == "user"

        content = body["messages"][0]["content"]
        assert content[0] == {"type": "text", "text": MENU_PROMPT}
        assert content[1:] == [{
            "type": "document",
            "source": {"type": "base64", "media_type": "application/pdf", "data": "JVBERi0xLjQK"},
        }]

        assert translated.beta == PDF_BETA_FLAG
        assert translated.is_pdf

    def test_image_request_shape(self):
        translated = _translate({
            "images": [{"base64": "AAA", "mediaType": "image/png"}, {"base64": "BBB"}],
        })
        content = translated.body.model_dump()["messages"][0]["content"]

        assert content[0]["type"] == "text"
        assert content[1:] == [
            {"type": "image", "source": {"type": "base64", "media_type": "image/png", "data": "AAA"}},
            {"type": "image", "source": {"type": "base64", "media_type": "image/jpeg", "data": "BBB"}},
        ]

        # No beta flag is needed for image content
        assert translated.beta is None
        assert not translated.is_pdf

    def test_custom_prompt_is_first_block(self):
        translated = _translate({"pdfBase64": "JVBERi0x", "prompt": "X"})
        content = translated.body.messages[0].content

        assert isinstance(content[0], TextBlock)
        assert content[0].text == "X"

    def test_beta_flag_follows_pdf_mode(self):
        pdf = _translate({"pdfBase64": "JVBERi0x", "images": [{"base64": "AAA"}]})
        images = _translate({"images": [{"base64": "AAA"}]})

        assert pdf.is_pdf and pdf.beta == PDF_BETA_FLAG
        assert not images.is_pdf and images.beta is None

    def test_model_and_max_tokens_come_from_arguments(self):
        translated = translate_request(
            ProxyRequest(pdfBase64="JVBERi0x"),
            MENU,
            model="claude-haiku-4-5",
            max_tokens=1024,
        )

        assert translated.body.model == "claude-haiku-4-5"
        assert translated.body.max_tokens == 1024


class TestVariantProfiles:

    def test_known_variants(self):
        assert MENU.variant == HandlerVariant.MENU
        assert MENU.accepts_images
        assert MENU_PDF.variant == HandlerVariant.MENU_PDF
        assert not MENU_PDF.accepts_images

    def test_unknown_variant_is_configuration_error(self):
        from menu_proxy.errors import ConfigurationError

        with pytest.raises(ConfigurationError) as exc_info:
            get_variant_profile("pizza")

        assert exc_info.value.status_code == 500
        assert "pizza" in exc_info.value.message

    def test_menu_prompt_asks_for_item_numbers(self):
        assert '"item_number"' in MENU_PROMPT
        assert "item_number" not in MENU_PDF_PROMPT

    @pytest.mark.parametrize("prompt", [MENU_PROMPT, MENU_PDF_PROMPT])
    def test_prompts_describe_restaurant_schema(self, prompt):
        for key in (
            "name", "address", "phone", "email", "description",
            "cuisine_type", "delivers", "opening_hours", "payment_methods",
            "categories", "has_variants", "variants", "display_order",
        ):
            assert f'"{key}"' in prompt
        assert "Return ONLY" in prompt


class TestProxyErrors:

    def test_status_code_defaults_per_class(self):
        from menu_proxy.errors import ConfigurationError, ProxyError

        assert ProxyError("boom").status_code == 500
        assert PayloadValidationError("missing").status_code == 400
        assert ConfigurationError("no key").status_code == 500

    def test_status_code_can_be_overridden(self):
        from menu_proxy.errors import ProxyError

        error = ProxyError("teapot", status_code=418)
        assert error.status_code == 418
        assert error.body == {"error": "teapot"}

    def test_upstream_error_relays_nested_json(self):
        from menu_proxy.errors import UpstreamError

        body = {"type": "error", "error": {"details": [1, 2.5, True, None, "x"]}}
        error = UpstreamError(503, body)

        assert error.status_code == 503
        assert error.body is body
