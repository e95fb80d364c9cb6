from .contact import extract_contact, extract_website
from .models import SECTION_NAMES, DocumentMetadata, ExtractedContact, ParsedDocument, ResumeSections
from .parse import DocumentParseError, parse_document, parse_pdf_bytes
from .segmenter import build_parsed_document, match_section_header, segment

__all__ = [
    "SECTION_NAMES",
    "DocumentMetadata",
    "DocumentParseError",
    "ExtractedContact",
    "ParsedDocument",
    "ResumeSections",
    "build_parsed_document",
    "extract_contact",
    "extract_website",
    "match_section_header",
    "parse_document",
    "parse_pdf_bytes",
    "segment",
]
