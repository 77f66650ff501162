"""Raw text extraction for uploaded resumes (PDF text layer, Word paragraphs and tables)."""
import logging
import re
from io import BytesIO
from typing import Iterable, List, Tuple

import docx
from docx.oxml.ns import qn
from docx.table import Table
from docx.text.paragraph import Paragraph
from pdfminer.high_level import extract_pages
from pdfminer.layout import LAParams, LTTextContainer, LTTextLine

logger = logging.getLogger(__name__)

PDF_MIME = "application/pdf"
DOC_MIME = "application/msword"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
SUPPORTED_MIMES = (PDF_MIME, DOC_MIME, DOCX_MIME)

MAX_PAGES = 10
# Vertical jump (points) that starts a new output line
LINE_GAP_PT = 3.0

SECTION_HEADINGS = ("Education", "Experience", "Skills", "Licenses & Certifications", "Honors & Awards")
_HEADING_LINE = re.compile(r"(?m)^(%s)$" % "|".join(re.escape(h) for h in SECTION_HEADINGS))


def join_text_items(items: Iterable[Tuple[float, str]], gap: float = LINE_GAP_PT) -> str:
    """Linearize (y, text) fragments: newline on a vertical jump, else a space."""
    parts: List[str] = []
    last_y = None
    for y, s in items:
        if last_y is not None and abs(y - last_y) > gap:
            parts.append("\n")
        parts.append(s + " ")
        last_y = y
    return "".join(parts)


def _page_items(page_layout) -> List[Tuple[float, str]]:
    items: List[Tuple[float, str]] = []
    for element in page_layout:
        if isinstance(element, LTTextLine):
            lines = [element]
        elif isinstance(element, LTTextContainer):
            lines = [ln for ln in element if isinstance(ln, LTTextLine)]
        else:
            continue
        for ln in lines:
            text = ln.get_text().replace("\n", " ").rstrip()
            if text:
                items.append((ln.y0, text))
    return items


class TooManyPagesError(ValueError):
    """PDF has more pages than the converter accepts."""


def extract_pdf_text(b: bytes, max_pages: int = MAX_PAGES) -> str:
    pages: List[str] = []
    # Read one page past the limit so oversize files are rejected, never truncated
    for page_layout in extract_pages(BytesIO(b), maxpages=max_pages + 1, laparams=LAParams()):
        if len(pages) >= max_pages:
            raise TooManyPagesError(f"more than {max_pages} pages")
        pages.append(join_text_items(_page_items(page_layout)))
    logger.debug("pdf extracted pages=%d", len(pages))
    return "".join(pg + "\n\n" for pg in pages)


def separate_headings(text: str) -> str:
    """Put a blank line after bare section heading lines."""
    return _HEADING_LINE.sub(r"\1\n", text or "")


_W_P = qn("w:p")
_W_TBL = qn("w:tbl")
_W_TR = qn("w:tr")
_W_TC = qn("w:tc")


def _block_lines(container, parent) -> List[str]:
    """Paragraph and table-cell text in document order; nested tables included.

    Walks physical <w:tc> cells, so a merged cell is read once.
    """
    lines: List[str] = []
    for child in container.iterchildren():
        if child.tag == _W_P:
            lines.append(Paragraph(child, parent).text)
        elif child.tag == _W_TBL:
            table = Table(child, parent)
            for tr in child.iterchildren(_W_TR):
                for tc in tr.iterchildren(_W_TC):
                    lines.extend(_block_lines(tc, table))
    return lines


def extract_docx_text(b: bytes) -> str:
    document = docx.Document(BytesIO(b))
    lines = _block_lines(document.element.body, document)
    logger.debug("docx extracted lines=%d tables=%d", len(lines), len(document.tables))
    return separate_headings("\n".join(lines))


def extract_text(b: bytes, mime: str) -> str:
    """Dispatch on MIME type. Raises on unsupported types or unreadable documents."""
    if mime == PDF_MIME:
        return extract_pdf_text(b)
    if mime in (DOC_MIME, DOCX_MIME):
        # python-docx only reads OOXML; legacy .doc fails here and surfaces as an extraction error
        return extract_docx_text(b)
    raise ValueError(f"unsupported mime type: {mime}")
