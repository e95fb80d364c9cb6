from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path

from pypdf import PdfReader

from .models import ParsedDocument
from .segmenter import build_parsed_document

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF-"


class DocumentParseError(ValueError):
    def __init__(self, message: str, *, status_code: int = 422):
        super().__init__(message)
        self.status_code = status_code


def _extension(file_name: str) -> str:
    return file_name.rsplit(".", 1)[-1].lower() if "." in file_name else ""


def _page_lines(page_text: str) -> list[str]:
    # Fragments on one text line are joined by single spaces.
    lines = (" ".join(raw.split()) for raw in page_text.split("\n"))
    return [line for line in lines if line]


def extract_pdf_pages(content: bytes) -> list[str]:
    if not content.startswith(PDF_MAGIC):
        raise DocumentParseError("File content is not a PDF document.", status_code=400)

    try:
        reader = PdfReader(BytesIO(content))
        if reader.is_encrypted and not reader.decrypt(""):
            raise DocumentParseError("Password-protected PDF files cannot be analyzed.")
        pages = ["\n".join(_page_lines(page.extract_text() or "")) for page in reader.pages]
    except DocumentParseError:
        raise
    except Exception as exc:
        raise DocumentParseError("Unable to extract text from this PDF file.") from exc

    if not pages:
        raise DocumentParseError("The PDF file has no pages.")
    return pages


def parse_pdf_bytes(content: bytes, *, file_name: str) -> ParsedDocument:
    if _extension(file_name) != "pdf":
        raise DocumentParseError(
            f"Unsupported file type '{file_name}'. Only .pdf files are supported.",
            status_code=400,
        )

    pages = extract_pdf_pages(content)
    document = build_parsed_document("\n".join(pages), page_count=len(pages), file_name=file_name)
    logger.info(
        "pdf_parsed file=%s pages=%s words=%s",
        file_name,
        document.metadata.page_count,
        document.metadata.word_count,
    )
    return document


def parse_document(file_path: str) -> ParsedDocument:
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Input document not found: '{path}'")

    extension = path.suffix.lower()
    if extension == ".pdf":
        return parse_pdf_bytes(path.read_bytes(), file_name=path.name)
    if extension == ".txt":
        text = path.read_text(encoding="utf-8", errors="replace")
        return build_parsed_document(text, page_count=1, file_name=path.name)
    raise DocumentParseError(
        f"Unsupported file type '{extension}'. Supported types: .pdf, .txt",
        status_code=400,
    )
