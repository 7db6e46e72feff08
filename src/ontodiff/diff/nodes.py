"""Helpers for reading lxml elements the way the diff engine compares them."""

from __future__ import annotations

import re

from lxml import etree

XML_NS = "http://www.w3.org/XML/1998/namespace"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"

# Attributes whose differences are only "similar", never reported.
_IGNORED_ATTRIBUTES = frozenset(
    {
        f"{{{XSI_NS}}}schemaLocation",
        f"{{{XSI_NS}}}noNamespaceSchemaLocation",
    }
)

DOCUMENT_NODE_NAME = "#document"

# XML whitespace is only space, tab, CR and LF; U+00A0 and friends are content.
XML_WHITESPACE = " \t\r\n"
_XML_WHITESPACE_RUN = re.compile(r"[ \t\r\n]+")


def normalize_whitespace(text: str | None) -> str:
    """Trim and collapse XML whitespace runs to single spaces."""
    if not text:
        return ""
    return _XML_WHITESPACE_RUN.sub(" ", text).strip(XML_WHITESPACE)


def local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def qualified_name(element: etree._Element | None) -> str:
    """Prefixed tag name as written in the source, e.g. ``owl:Class``."""
    if element is None:
        return DOCUMENT_NODE_NAME
    name = local_name(element)
    return f"{element.prefix}:{name}" if element.prefix else name


def attribute_name(element: etree._Element, key: str) -> str:
    """Prefixed form of a Clark-notation attribute key."""
    qname = etree.QName(key)
    if qname.namespace is None:
        return qname.localname
    if qname.namespace == XML_NS:
        return f"xml:{qname.localname}"
    for prefix, uri in element.nsmap.items():
        if uri == qname.namespace and prefix is not None:
            return f"{prefix}:{qname.localname}"
    return key


def element_children(element: etree._Element) -> list[etree._Element]:
    """Child elements only; comments and PIs never take part in matching."""
    return [child for child in element if isinstance(child.tag, str)]


def merged_text(element: etree._Element) -> str:
    """Normalized direct text of ``element`` (its own text plus child tails)."""
    parts = [element.text or ""]
    parts.extend(child.tail or "" for child in element)
    return normalize_whitespace(" ".join(parts))


def significant_attributes(element: etree._Element) -> dict[str, str]:
    return {
        key: value
        for key, value in element.attrib.items()
        if key not in _IGNORED_ATTRIBUTES
    }
