"""PDF text extraction using PyMuPDF."""

from pathlib import Path

import fitz  # PyMuPDF


def extract_text_from_pdf(source: bytes | Path) -> str:
    """Extract all text from a PDF given its bytes or a file path."""
    if isinstance(source, bytes):
        doc = fitz.open(stream=source, filetype="pdf")
    else:
        doc = fitz.open(str(source))
    try:
        pages = [page.get_text() for page in doc]
    finally:
        doc.close()
    return "\n".join(pages).strip()
