"""Adapter over ElementTree: response bytes in, tree of named nodes out."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

logger = logging.getLogger(__name__)


def parse(body: bytes) -> ET.Element | None:
    """Parse a response body; return the root element or None if unparseable."""
    if not body or not body.strip():
        return None
    try:
        return ET.fromstring(body)
    except ET.ParseError as exc:
        logger.warning("Discarding unparseable response body (%d bytes): %s", len(body), exc)
        return None


def tag_name(node: ET.Element) -> str:
    """Lower-cased local name of *node*, without any ``{namespace}`` prefix."""
    tag = node.tag if isinstance(node.tag, str) else ""
    if "}" in tag:
        tag = tag.rsplit("}", 1)[1]
    return tag.lower()


def text_of(node: ET.Element) -> str:
    return node.text or ""
