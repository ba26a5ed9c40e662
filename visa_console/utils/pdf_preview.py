from __future__ import annotations

import fitz  # PyMuPDF


def get_page_count(pdf_bytes: bytes) -> int:
    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        return doc.page_count


def render_pdf_page_png_bytes(pdf_bytes: bytes, page_number: int = 1, zoom: float = 1.0) -> bytes:
    """Return PNG bytes for the given page (1-indexed) of an in-memory PDF."""
    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        page_index = max(0, min(page_number - 1, doc.page_count - 1))
        page = doc.load_page(page_index)
        pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False)
        return pix.tobytes("png")
