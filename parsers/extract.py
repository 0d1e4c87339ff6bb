import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Sequence, Tuple, Union

from errors import ExtractionError, UnsupportedFileType
from parsers.pdf import pdf_to_text
from schemas import ResumeFile

logger = logging.getLogger(__name__)

PDF_MIME = "application/pdf"
TEXT_MIME = "text/plain"
ALLOWED_MIME_TYPES = (PDF_MIME, TEXT_MIME)
ALLOWED_EXTENSIONS = (".pdf", ".txt")
TEXT_ENCODINGS = ("utf-8", "cp1252")


def _kind(file: ResumeFile) -> str:
    """Return 'pdf', 'txt' or '' based on MIME type, falling back to the extension."""
    content_type = (file.content_type or "").split(";")[0].strip().lower()
    if content_type == PDF_MIME:
        return "pdf"
    if content_type == TEXT_MIME:
        return "txt"
    if not content_type and file.extension in ALLOWED_EXTENSIONS:
        return file.extension.lstrip(".")
    return ""


def is_supported(file: ResumeFile) -> bool:
    return _kind(file) != ""


def partition_supported(files: Iterable[ResumeFile]) -> Tuple[List[ResumeFile], List[str]]:
    """Split an upload selection into accepted files and rejected filenames."""
    valid, rejected = [], []
    for f in files:
        if is_supported(f):
            valid.append(f)
        else:
            rejected.append(f.name)
    if rejected:
        logger.warning(f"Unsupported file(s) ignored: {', '.join(rejected)}")
    return valid, rejected


def read_txt(data: bytes, name: str) -> str:
    """Decode a text upload, trying the common encodings in order."""
    for encoding in TEXT_ENCODINGS:
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise ExtractionError(name, "unable to decode file with supported encodings")


def extract_text(source: Union[str, ResumeFile], label: str) -> str:
    """
    Produce the plain-text content of a job description or resume.

    Args:
        source: text (returned unchanged) or an uploaded file
        label: what the file is, used in error messages ("Resume", "Job Description")

    Returns:
        The extracted text
    """
    if isinstance(source, str):
        return source

    kind = _kind(source)
    if kind == "pdf":
        return pdf_to_text(source.data, source.name)
    if kind == "txt":
        return read_txt(source.data, source.name)
    raise UnsupportedFileType(source.name, label)


def extract_all(files: Sequence[ResumeFile], label: str = "Resume") -> List[str]:
    """
    Extract every file concurrently and wait for all of them.
    The first failure aborts the whole set; output order matches input order.
    """
    if not files:
        return []
    with ThreadPoolExecutor(max_workers=min(8, len(files))) as pool:
        return list(pool.map(lambda f: extract_text(f, label), files))
