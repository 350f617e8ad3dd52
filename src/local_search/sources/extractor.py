"""Text extraction for plain text, PDF, and Word documents."""

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

# Extensions read directly as UTF-8 text
TEXT_EXTENSIONS: set[str] = {
    ".txt",
    ".md",
    ".markdown",
    ".rst",
    ".json",
    ".js",
    ".ts",
    ".py",
    ".csv",
    ".xml",
    ".html",
    ".htm",
    ".css",
    ".scss",
    ".less",
    ".yaml",
    ".yml",
    ".toml",
    ".ini",
    ".conf",
    ".cfg",
    ".log",
    ".env",
    ".rtf",
}

# Never opened for text
BINARY_EXTENSIONS: set[str] = {
    ".dmg",
    ".exe",
    ".dll",
    ".so",
    ".dylib",
    ".zip",
    ".tar",
    ".gz",
    ".rar",
    ".7z",
    ".jpg",
    ".jpeg",
    ".png",
    ".gif",
    ".bmp",
    ".ico",
    ".svg",
    ".webp",
    ".mp3",
    ".wav",
    ".ogg",
    ".m4a",
    ".flac",
    ".wma",
    ".mp4",
    ".avi",
    ".mkv",
    ".mov",
    ".wmv",
    ".ttf",
    ".otf",
    ".woff",
    ".woff2",
    ".db",
    ".sqlite",
    ".mdb",
    ".iso",
    ".bin",
    ".dat",
}

# Printable runs recovered from legacy binary documents
_PRINTABLE_RUN = re.compile(r"[A-Za-z0-9\s.,;:'\"()\-]{5,}")


def is_binary_file(path: Path) -> bool:
    """Check if a file is a binary/media type that is never read for text."""
    return path.suffix.lower() in BINARY_EXTENSIONS


def is_extractable_file(path: Path) -> bool:
    """Check if text extraction is attempted for this file type."""
    ext = path.suffix.lower()
    return ext in TEXT_EXTENSIONS or ext in {".pdf", ".docx", ".doc"}


def extract_text(path: Path) -> str | None:
    """Extract text from a file. Blocking; run off the event loop.

    Returns None for unsupported types or when nothing but whitespace was
    found. Parser errors propagate to the caller.
    """
    if is_binary_file(path) or not is_extractable_file(path):
        return None

    ext = path.suffix.lower()
    if ext == ".pdf":
        text = _extract_pdf(path)
    elif ext == ".docx":
        text = _extract_docx(path)
    elif ext == ".doc":
        text = _extract_doc(path)
    else:
        text = path.read_text(encoding="utf-8", errors="replace")

    if not text or not text.strip():
        return None
    return text


def _extract_pdf(path: Path) -> str:
    from pypdf import PdfReader

    reader = PdfReader(str(path))
    pages = [page.extract_text() or "" for page in reader.pages]
    return "\n\n".join(p for p in pages if p.strip())


def _extract_docx(path: Path) -> str:
    import docx  # python-docx

    document = docx.Document(str(path))
    return "\n\n".join(p.text for p in document.paragraphs if p.text.strip())


def _extract_doc(path: Path) -> str:
    """Legacy .doc: try as OOXML, then scrape printable runs from the bytes."""
    try:
        return _extract_docx(path)
    except Exception:
        logger.debug("%s is not OOXML, scraping printable text", path)
    raw = path.read_bytes().decode("utf-8", errors="ignore")
    return " ".join(m.strip() for m in _PRINTABLE_RUN.findall(raw) if m.strip())
