# app/services/export_service.py
"""
Letter export: rich-text markup -> plain text -> PDF / DOCX
"""

import re
from io import BytesIO
from typing import List, Optional
from xml.sax.saxutils import escape

from bs4 import BeautifulSoup
from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate

from app.utils.logger import logger

MEDIA_TYPES = {
    "pdf": "application/pdf",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}

BLOCK_TAGS = [
    "p", "div", "h1", "h2", "h3", "h4", "h5", "h6",
    "li", "blockquote", "pre", "section", "article", "header", "footer",
]

PDF_MARGIN = 20 * mm


def html_to_plain_text(html: Optional[str]) -> str:
    """Paragraph-preserving text of an HTML fragment"""
    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for block in soup.find_all(BLOCK_TAGS):
        block.insert_after("\n\n")

    text = soup.get_text()
    text = text.replace("\xa0", " ")
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r" *\n *", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def split_paragraphs(text: str) -> List[str]:
    return [para.strip() for para in text.split("\n\n") if para.strip()]


def export_pdf(html: str) -> bytes:
    """A4 PDF, Helvetica 12pt, 20mm margins"""
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=PDF_MARGIN,
        rightMargin=PDF_MARGIN,
        topMargin=PDF_MARGIN,
        bottomMargin=PDF_MARGIN,
        title="Letter of Recommendation",
    )
    style = ParagraphStyle(
        "LetterBody",
        fontName="Helvetica",
        fontSize=12,
        leading=17,
        spaceAfter=10,
    )

    story = [
        Paragraph(escape(para).replace("\n", "<br/>"), style)
        for para in split_paragraphs(html_to_plain_text(html))
    ]
    doc.build(story)
    logger.info(f"PDF exported ({len(story)} paragraphs)")
    return buffer.getvalue()


def export_docx(html: str) -> bytes:
    """DOCX, Times New Roman 12pt, 1.5 line spacing"""
    document = Document()
    for para in split_paragraphs(html_to_plain_text(html)):
        paragraph = document.add_paragraph()
        run = paragraph.add_run(para)
        run.font.name = "Times New Roman"
        run.font.size = Pt(12)
        paragraph.alignment = WD_ALIGN_PARAGRAPH.LEFT
        paragraph.paragraph_format.space_after = Pt(10)
        paragraph.paragraph_format.line_spacing = 1.5

    buffer = BytesIO()
    document.save(buffer)
    logger.info(f"DOCX exported ({len(document.paragraphs)} paragraphs)")
    return buffer.getvalue()


EXPORTERS = {
    "pdf": export_pdf,
    "docx": export_docx,
}


def export_filename(applicant_name: Optional[str], fmt: str) -> str:
    """'Jane Doe' -> Jane_Doe_LOR.pdf (header-safe ASCII only)"""
    stem = re.sub(r"\s+", "_", (applicant_name or "").strip())
    stem = re.sub(r"[^A-Za-z0-9_.-]", "", stem)
    if stem:
        return f"{stem}_LOR.{fmt}"
    return f"letter_of_recommendation.{fmt}"
