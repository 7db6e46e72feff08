"""lxml-based XML loader with input safety limits."""

from __future__ import annotations

from lxml import etree

# ---------------------------------------------------------------------------
# Safety limits
# ---------------------------------------------------------------------------

MAX_DOCUMENT_SIZE = 5_000_000  # 5M characters
MAX_ELEMENT_COUNT = 200_000
MAX_DEPTH = 256


class XMLParseError(Exception):
    """Raised when a document is not well-formed XML.

    ``source`` names which document failed (``"control"`` / ``"test"``)
    when the caller provided one.
    """

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        source: str | None = None,
    ) -> None:
        self.message = message
        self.line = line
        self.column = column
        self.source = source
        super().__init__(self.describe())

    def describe(self) -> str:
        where = ""
        if self.line is not None:
            where = f" at line {self.line}"
            if self.column is not None:
                where += f", column {self.column}"
        prefix = f"{self.source} document: " if self.source else ""
        return f"{prefix}{self.message}{where}"

    def with_source(self, source: str) -> XMLParseError:
        """Copy of this error attributed to ``source``."""
        return type(self)(self.message, self.line, self.column, source)


class XMLSafetyError(XMLParseError):
    """Raised when XML input violates safety constraints.

    Distinct from syntax errors: the document may be well-formed but is
    too large or too deeply nested to process.
    """


class XMLLoader:
    """Parses XML text into an lxml tree for structural comparison.

    Comments and processing instructions are dropped at parse time unless
    ``keep_comments`` is set. CDATA sections are merged into text and no
    network access is allowed.
    """

    def __init__(self, keep_comments: bool = False) -> None:
        self._parser = etree.XMLParser(
            encoding="utf-8",
            remove_comments=not keep_comments,
            remove_pis=not keep_comments,
            no_network=True,
            strip_cdata=True,
        )

    # -- safety checks -------------------------------------------------------

    @staticmethod
    def check_document_size(content: str, source: str | None = None) -> None:
        if len(content) > MAX_DOCUMENT_SIZE:
            raise XMLSafetyError(
                f"XML document exceeds maximum size "
                f"({len(content):,} chars > {MAX_DOCUMENT_SIZE:,} limit)",
                source=source,
            )

    @staticmethod
    def _check_element_count(
        root: etree._Element, limit: int = MAX_ELEMENT_COUNT, source: str | None = None
    ) -> None:
        """Reject parsed trees with more than ``limit`` elements."""
        for count, _ in enumerate(root.iter(), start=1):
            if count > limit:
                raise XMLSafetyError(
                    f"XML document exceeds maximum element count ({limit:,})",
                    source=source,
                )

    # -- public loading API --------------------------------------------------

    def parse(self, content: str, source: str | None = None) -> etree._Element:
        """Parse ``content`` and return its document element."""
        if not content.strip():
            raise XMLParseError("Document is empty", source=source)
        self.check_document_size(content, source)
        try:
            root = etree.fromstring(content.encode("utf-8"), self._parser)
        except etree.XMLSyntaxError as exc:
            line, column = exc.position
            raise XMLParseError(exc.msg, line or None, column or None, source) from exc
        self._check_element_count(root, source=source)
        return root
