"""
Self-contained token metadata.

Consumers compare the encoded URIs byte for byte, so the SVG and the JSON
come from fixed templates (key order, quote style and spacing are part of
the format).
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Tuple

from .errors import FormatError
from .validation import require_valid_color

log = logging.getLogger(__name__)

SVG_MEDIA_TYPE = "image/svg+xml"
JSON_MEDIA_TYPE = "application/json"

SVG_TEMPLATE = (
    "<svg width='100%' height='100%' xmlns='http://www.w3.org/2000/svg'>"
    "<rect width='100%' height='100%' fill='{color}' /></svg>"
)
DESCRIPTION_TEMPLATE = (
    "Proof of ownership of the original color {color} "
    "minted on the Ethereum blockchain."
)
TOKEN_JSON_TEMPLATE = '{{"name": "{name}", "description": "{description}", "image": "{image}"}}'


def encode_data_uri(media_type: str, payload: str) -> str:
    encoded = base64.b64encode(payload.encode("utf-8")).decode("ascii")
    return f"data:{media_type};base64,{encoded}"


def decode_data_uri(uri: str) -> Tuple[str, bytes]:
    """Inverse of ``encode_data_uri`` → (media type, raw payload bytes)."""
    if not uri.startswith("data:") or ";base64," not in uri:
        raise FormatError(f"not a base64 data URI: {uri[:40]!r}")
    header, _, body = uri[len("data:") :].partition(";base64,")
    try:
        return header, base64.b64decode(body, validate=True)
    except binascii.Error as exc:
        raise FormatError(f"invalid base64 payload: {exc}") from exc


def color_to_image_uri(color: str) -> str:
    require_valid_color(color)
    return encode_data_uri(SVG_MEDIA_TYPE, SVG_TEMPLATE.format(color=color))


def format_token_uri(color: str, image_uri: str) -> str:
    require_valid_color(color)
    if '"' in image_uri or "\\" in image_uri:
        raise FormatError("image URI must not contain quotes or backslashes")
    document = TOKEN_JSON_TEMPLATE.format(
        name=color,
        description=DESCRIPTION_TEMPLATE.format(color=color),
        image=image_uri,
    )
    return encode_data_uri(JSON_MEDIA_TYPE, document)


def get_token_uri_for_color(color: str) -> str:
    uri = format_token_uri(color, color_to_image_uri(color))
    log.debug("token URI for %s: %d bytes", color, len(uri))
    return uri


__all__ = [
    "color_to_image_uri",
    "decode_data_uri",
    "encode_data_uri",
    "format_token_uri",
    "get_token_uri_for_color",
]
