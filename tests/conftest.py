"""
Shared fixtures: in-memory paragraphs and python-pptx decks built on the fly.
"""
from io import BytesIO

import pytest
from pptx import Presentation
from pptx.util import Inches

from slide_text_server.core.model import Document, Paragraph, Run, Slide

BLANK_LAYOUT = 6


def make_paragraph(*pieces):
    """Build a paragraph from (text, formatting) pairs or bare strings."""
    runs = []
    for index, piece in enumerate(pieces):
        if isinstance(piece, str):
            runs.append(Run(piece, f"fmt{index}"))
        else:
            runs.append(Run(*piece))
    return Paragraph(runs)


def add_text_slide(prs, paragraphs):
    """Add a blank slide with one textbox; paragraphs are lists of (text, bold) runs."""
    slide = prs.slides.add_slide(prs.slide_layouts[BLANK_LAYOUT])
    textbox = slide.shapes.add_textbox(Inches(1), Inches(1), Inches(6), Inches(2))
    text_frame = textbox.text_frame
    for index, runs in enumerate(paragraphs):
        paragraph = text_frame.paragraphs[0] if index == 0 else text_frame.add_paragraph()
        for text, bold in runs:
            run = paragraph.add_run()
            run.text = text
            run.font.bold = bold
    return slide


def reload(prs):
    """Save a presentation to memory and open it again."""
    stream = BytesIO()
    prs.save(stream)
    stream.seek(0)
    return Presentation(stream)


@pytest.fixture
def deck():
    """Two-slide deck mirroring a typical template with placeholders to fill."""
    prs = Presentation()
    add_text_slide(prs, [
        [("hello PERSON. ", True)],
        [("hello ", True), ("person. ", False)],
        [("No need to panic. ", False)],
    ])
    add_text_slide(prs, [
        [("Dear ", False), ("PER", True), ("SON", False), (", welcome.", False)],
    ])
    return prs


@pytest.fixture
def deck_file(deck, tmp_path):
    path = tmp_path / "deck.pptx"
    deck.save(str(path))
    return path


@pytest.fixture
def document():
    """Three-slide in-memory document; the cursor is on the last slide."""
    doc = Document()
    doc.add_slide(Slide([make_paragraph("hello ", "PERSON", ". ")]))
    doc.add_slide(Slide([make_paragraph("no need ", "to panic"), make_paragraph("Dear PERSON")]))
    doc.add_slide(Slide([make_paragraph("The end")]))
    return doc
