import re
from pathlib import Path
from typing import Iterable
from pdfminer.high_level import extract_text as pdf_extract
from docx import Document

from app.utils.exceptions import ProcessingError, ValidationError
from app.utils.logging_config import get_logger

logger = get_logger(__name__)

SUPPORTED_EXTENSIONS = (".pdf", ".docx", ".txt")

# C0/C1 control characters other than tab, newline and carriage return, plus U+FFFD
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f\ufffd]")
MAX_CONTROL_RATIO = 0.1


def read_txt(p: Path) -> str:
    data = p.read_bytes()
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        # cp1252/latin-1 exports; binary junk is caught by looks_binary
        return data.decode("latin-1")


def read_docx(p: Path) -> str:
    doc = Document(str(p))
    return "\n".join([para.text for para in doc.paragraphs])


def _partition_text(p: Path) -> str:
    from unstructured.partition.auto import partition
    elems = partition(filename=str(p))
    return "\n".join([e.text for e in elems if hasattr(e, "text") and e.text])


def read_pdf(p: Path) -> str:
    try:
        return pdf_extract(str(p))
    except Exception as e:
        logger.debug(f"pdfminer could not read {p.name} ({e}), trying unstructured")
        return _partition_text(p)


def looks_binary(text: str, max_ratio: float = MAX_CONTROL_RATIO) -> bool:
    """True when too much of the text is control characters to be a real document."""
    if not text:
        return False
    return len(_CONTROL_RE.findall(text)) / len(text) > max_ratio


def clean_text(x: str) -> str:
    """Collapse runs of spaces/tabs and excess blank lines, keeping line structure."""
    x = x.replace("\r\n", "\n").replace("\r", "\n").replace("\x00", "")
    x = re.sub(r"[ \t\f\v]+", " ", x)
    x = "\n".join(line.strip() for line in x.split("\n"))
    x = re.sub(r"\n{3,}", "\n\n", x)
    return x.strip()


def extract_text(path: str, filename: str = "", allowed: Iterable[str] = SUPPORTED_EXTENSIONS) -> str:
    """Plain text of an uploaded resume; the extension of `filename` picks the reader."""
    p = Path(path)
    ext = Path(filename or path).suffix.lower()
    if ext not in allowed:
        raise ValidationError(
            f"Unsupported file type '{ext or 'none'}'. Allowed: {', '.join(allowed)}",
            field="filename", value=filename,
        )

    readers = {".pdf": read_pdf, ".docx": read_docx, ".txt": read_txt}
    try:
        text = readers[ext](p)
    except Exception as e:
        raise ProcessingError(f"Could not read {ext} file: {e}", filename=filename, cause=e) from e
    if looks_binary(text or ""):
        raise ProcessingError(f"File content is not readable text ({ext})", filename=filename)
    return clean_text(text or "")
