"""Canonical pretty-printing of XML documents."""

from __future__ import annotations

import re

from lxml import etree

from ontodiff.parser.loader import XMLLoader

_XML_WHITESPACE = " \t\r\n"
_NAMESPACE_DECL_RE = re.compile(r"\s+(xmlns(?::[\w.\-]+)?=\"[^\"]*\")")
# Comments, PIs and CDATA are matched so that only real start tags are rewritten.
_MARKUP_RE = re.compile(
    r"<!--.*?-->|<\?.*?\?>|<!\[CDATA\[.*?\]\]>|(?P<start><[^!?/][^>]*>)",
    re.DOTALL,
)


def _is_blank(text: str | None) -> bool:
    return text is not None and not text.strip(_XML_WHITESPACE)


def _split_namespace_declarations(formatted: str, indent: str) -> str:
    def rewrite(match: re.Match[str]) -> str:
        tag = match.group("start")
        if tag is None:
            return match.group(0)
        return _NAMESPACE_DECL_RE.sub(lambda m: f"\n{indent}{m.group(1)}", tag)

    return _MARKUP_RE.sub(rewrite, formatted)


def format_xml(
    content: str,
    *,
    namespaces_on_new_line: bool = False,
    indent: str = "  ",
) -> str:
    """Re-indent ``content`` and return it with an XML declaration.

    Whitespace-only text nodes are dropped before indenting, comments are
    kept, and line endings are normalized to LF. Formatting is idempotent.

    Raises ``ValueError`` for empty input and ``XMLParseError`` when the
    document is not well-formed.
    """
    if not content or not content.strip():
        raise ValueError("XML data is null or empty.")

    root = XMLLoader(keep_comments=True).parse(content)
    for node in root.iter():
        if _is_blank(node.text):
            node.text = None
        if _is_blank(node.tail):
            node.tail = None
    etree.indent(root, space=indent)

    formatted = etree.tostring(
        root.getroottree(),
        xml_declaration=True,
        encoding="UTF-8",
        pretty_print=True,
    ).decode("utf-8")

    if namespaces_on_new_line:
        formatted = _split_namespace_declarations(formatted, indent)
    return formatted.replace("\r\n", "\n")
