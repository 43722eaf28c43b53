"""PDF parsing for uploaded documents.

Responsibilities:
    - Upload validation (size, PDF header)
    - Text extraction with pypdf
    - Basic metadata (title, author, subject)

The extracted text is handed to the answer agent in full, no chunking.
"""

from docuwhiz.parsing.pdf_parser import PDFContent, PDFParseError, parse_pdf

__all__ = ["PDFContent", "PDFParseError", "parse_pdf"]
