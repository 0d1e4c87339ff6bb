import io
import logging

import fitz  # PyMuPDF
from PyPDF2 import PdfReader

from errors import ExtractionError

logger = logging.getLogger(__name__)


def _read_with_pymupdf(data: bytes) -> str:
    with fitz.open(stream=data, filetype="pdf") as doc:
        return "\n".join(page.get_text("text") for page in doc)


def _read_with_pypdf2(data: bytes) -> str:
    reader = PdfReader(io.BytesIO(data))
    return "\n".join((page.extract_text() or "") for page in reader.pages)


def pdf_to_text(data: bytes, name: str = "document.pdf") -> str:
    """
    Extract text from an in-memory PDF, pages in order joined with newlines.
    PyMuPDF is tried first; PyPDF2 runs when it fails or finds no text.
    A PDF that both engines open but that holds no text yields "".
    """
    errors = []
    opened = False

    # ---------- Attempt 1: PyMuPDF ----------
    try:
        text = _read_with_pymupdf(data)
        opened = True
        if text.strip():
            logger.info(f"Extracted {len(text)} characters from {name} via PyMuPDF")
            return text
        logger.warning(f"PyMuPDF found no text in {name}, trying PyPDF2")
    except Exception as e:
        logger.warning(f"PyMuPDF extraction failed for {name}: {e}")
        errors.append(str(e))

    # ---------- Attempt 2: PyPDF2 ----------
    try:
        text = _read_with_pypdf2(data)
        opened = True
        if text.strip():
            logger.info(f"Extracted {len(text)} characters from {name} via PyPDF2 fallback")
            return text
    except Exception as e:
        logger.error(f"PyPDF2 extraction failed for {name}: {e}")
        errors.append(str(e))

    if opened:
        logger.warning(f"No text extracted from {name}")
        return ""
    raise ExtractionError(name, "; ".join(errors))
