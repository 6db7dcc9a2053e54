"""Turn an uploaded resume (.txt, .pdf, .docx) into text or page images. In-memory only."""

import base64
import re
import unicodedata
from io import BytesIO
from pathlib import PurePath
from typing import List, Union

import pdfplumber
from docx import Document

from resmo.config import ACCEPTED_RESUME_EXTENSIONS, PDF_RENDER_SCALE
from resmo.errors import EmptyDocument, UnrenderableDocument, UnsupportedFileType
from resmo.schemas.candidate import ImageResume, ResumeImage, TextResume
from resmo.utils.logger import get_logger

logger = get_logger(__name__)

IngestedResume = Union[TextResume, ImageResume]

# Instruction used to backfill text for image-only resumes.
IMAGE_TRANSCRIPTION_PROMPT = (
    "Extract all text from the following resume page images. "
    "Preserve the original reading order, headings and line breaks. "
    "Return only the extracted text."
)


def _clean_docx_text(text: str) -> str:
    """Normalize unicode (NFC) and collapse runs of blank lines."""
    t = unicodedata.normalize("NFC", text)
    t = re.sub(r"[ \t]+", " ", t)
    t = re.sub(r"\n\s*\n\s*\n", "\n\n", t)
    return t.strip()


def file_extension(filename: str) -> str:
    return PurePath((filename or "").strip()).suffix.lower()


def _read_text(file_bytes: bytes) -> TextResume:
    return TextResume(text=file_bytes.decode("utf-8", errors="replace"))


def _read_docx(file_bytes: bytes) -> TextResume:
    """Paragraph and table text via python-docx; blank result is an EmptyDocument."""
    if not file_bytes:
        raise EmptyDocument("The uploaded document is empty.")
    try:
        doc = Document(BytesIO(file_bytes))
    except Exception as e:
        logger.warning("DOCX could not be opened: %s", e)
        raise EmptyDocument("No text could be extracted from the document.") from e
    parts = [p.text for p in doc.paragraphs if p.text.strip()]
    for table in doc.tables:
        for row in table.rows:
            cells = [c.text.strip() for c in row.cells if c.text.strip()]
            if cells:
                parts.append(" | ".join(cells))
    text = _clean_docx_text("\n".join(parts))
    if not text:
        raise EmptyDocument("No text could be extracted from the document.")
    return TextResume(text=text)


def _render_pdf(file_bytes: bytes, scale: float) -> ImageResume:
    """Rasterize every page to PNG at ``scale`` x 72 dpi using pdfplumber."""
    images: List[ResumeImage] = []
    try:
        with pdfplumber.open(BytesIO(file_bytes)) as pdf:
            for number, page in enumerate(pdf.pages, start=1):
                try:
                    rendered = page.to_image(resolution=int(72 * scale))
                    buf = BytesIO()
                    rendered.original.save(buf, format="PNG")
                except Exception as e:
                    logger.warning("PDF page %s could not be rendered: %s", number, e)
                    continue
                images.append(
                    ResumeImage(mime_type="image/png", data=base64.b64encode(buf.getvalue()).decode("ascii"))
                )
    except Exception as e:
        logger.warning("PDF could not be opened: %s", e)
        raise UnrenderableDocument("Could not render any pages from the PDF.") from e
    if not images:
        raise UnrenderableDocument("Could not render any pages from the PDF.")
    return ImageResume(images=images)


def ingest_resume(file_bytes: bytes, filename: str, pdf_scale: float = PDF_RENDER_SCALE) -> IngestedResume:
    """
    Convert one uploaded file into either text (.txt, .docx) or page images (.pdf).
    Never both: image results carry empty text until the caller transcribes them.
    """
    ext = file_extension(filename)
    if ext not in ACCEPTED_RESUME_EXTENSIONS:
        raise UnsupportedFileType(
            f"Unsupported file type '{ext or filename}'. Upload a .txt, .pdf or .docx file."
        )
    if ext == ".txt":
        result: IngestedResume = _read_text(file_bytes)
    elif ext == ".docx":
        result = _read_docx(file_bytes)
    else:
        result = _render_pdf(file_bytes, pdf_scale)
    logger.info("Ingested resume %s as %s", filename, result.kind)
    return result
