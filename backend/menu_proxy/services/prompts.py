"""
Handler variants and their default extraction prompts.

Two generations of the menu extraction handler exist: the original PDF-only
one and the current one that also accepts photographed menu pages. They share
one code path and differ only in the profile defined here.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict

from menu_proxy.errors import ConfigurationError


class HandlerVariant(str, Enum):
    MENU = "menu"
    MENU_PDF = "menu-pdf"


@dataclass(frozen=True)
class VariantProfile:
    """What distinguishes one handler variant from another."""
    variant: HandlerVariant
    default_prompt: str
    accepts_images: bool
    missing_input_message: str


MENU_PROMPT = """\
Analyze this restaurant menu PDF and extract all information into a structured JSON format.

CRITICAL: Return ONLY valid JSON. No markdown, no code blocks, no explanations. Start with { and end with }.

Use this EXACT structure:
{
  "restaurant": {
    "name": "Restaurant Name",
    "address": "Full Address",
    "phone": "+49 123 456789",
    "email": "email@example.com",
    "description": "Brief description",
    "cuisine_type": "Italian",
    "delivers": true,
    "opening_hours": {"monday": "11:00-22:00"},
    "payment_methods": ["Cash", "Card"]
  },
  "categories": [
    {
      "name": "Category Name",
      "display_order": 0,
      "items": [
        {
          "name": "Item Name",
          "item_number": "1",
          "price": 9.99,
          "description": "Description",
          "has_variants": false
        },
        {
          "name": "Item with number",
          "item_number": "2a",
          "price": 12.50,
          "description": "Description",
          "has_variants": false
        },
        {
          "name": "Item with variants",
          "item_number": "3",
          "description": "Description",
          "has_variants": true,
          "variants": [
            {"name": "Small", "price": 7.50, "display_order": 0},
            {"name": "Large", "price": 9.50, "display_order": 1}
          ]
        }
      ]
    }
  ]
}

Rules:
- IMPORTANT: If menu items have numbers (like "1", "2", "3a", "12b"), extract them as "item_number"
- Look for numbered lists or item identifiers anywhere on the menu
- Item numbers can be numeric ("1", "10") or alphanumeric ("1a", "2b", "3c")
- All prices as numbers (9.99 not "9,99 €")
- If item has variants, omit "price" field and set "has_variants": true
- If item has no variants, include "price" and set "has_variants": false
- Omit fields if not found (except required ones)
- Return ONLY the JSON object, nothing else"""

# Schema used before item numbers were extracted.
MENU_PDF_PROMPT = """\
Analyze this restaurant menu PDF and extract all information into a structured JSON format.

CRITICAL: Return ONLY valid JSON. No markdown, no code blocks, no explanations. Start with { and end with }.

Use this EXACT structure:
{
  "restaurant": {
    "name": "Restaurant Name",
    "address": "Full Address",
    "phone": "+49 123 456789",
    "email": "email@example.com",
    "description": "Brief description",
    "cuisine_type": "Italian",
    "delivers": true,
    "opening_hours": {"monday": "11:00-22:00"},
    "payment_methods": ["Cash", "Card"]
  },
  "categories": [
    {
      "name": "Category Name",
      "display_order": 0,
      "items": [
        {
          "name": "Item Name",
          "price": 9.99,
          "description": "Description",
          "has_variants": false
        },
        {
          "name": "Item with variants",
          "description": "Description",
          "has_variants": true,
          "variants": [
            {"name": "Small", "price": 7.50, "display_order": 0},
            {"name": "Large", "price": 9.50, "display_order": 1}
          ]
        }
      ]
    }
  ]
}

Rules:
- All prices as numbers (9.99 not "9,99 €")
- If item has variants, omit "price" field and set "has_variants": true
- If item has no variants, include "price" and set "has_variants": false
- Omit fields if not found (except required ones)
- Return ONLY the JSON object, nothing else"""


VARIANT_PROFILES: Dict[HandlerVariant, VariantProfile] = {
    HandlerVariant.MENU: VariantProfile(
        variant=HandlerVariant.MENU,
        default_prompt=MENU_PROMPT,
        accepts_images=True,
        missing_input_message="pdfBase64 or images array is required",
    ),
    HandlerVariant.MENU_PDF: VariantProfile(
        variant=HandlerVariant.MENU_PDF,
        default_prompt=MENU_PDF_PROMPT,
        accepts_images=False,
        missing_input_message="pdfBase64 is required",
    ),
}


def get_variant_profile(name: str) -> VariantProfile:
    """
    Look up the profile for a variant name such as ``"menu"``.

    Raises:
        ConfigurationError: if the name is not a known variant.
    """
    try:
        variant = HandlerVariant(name)
    except ValueError:
        known = ", ".join(v.value for v in HandlerVariant)
        raise ConfigurationError(
            f"Unknown handler variant {name!r} (expected one of: {known})"
        )
    return VARIANT_PROFILES[variant]
