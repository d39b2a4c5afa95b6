"""
Tests for slide_text_server.utils.pptx_utils against real python-pptx decks.
"""
import warnings

from pptx import Presentation
from pptx.enum.text import PP_ALIGN
from pptx.oxml.ns import qn
from pptx.util import Inches

from slide_text_server.core.errors import NoMatchWarning
from slide_text_server.core.model import Run
from slide_text_server.core.replace import replace_all_text, replace_text, replace_text_on_slide
from slide_text_server.utils.pptx_utils import (
    PptxDocument,
    clone_run_with_text,
    paragraph_text_summary,
    split_paragraph_segments,
)

from tests.conftest import add_text_slide, reload


def run_layout(paragraph):
    return [(run.text, run.font.bold) for run in paragraph.runs]


def child_tags(paragraph):
    return [child.tag.rsplit('}', 1)[-1] for child in paragraph._p]


class TestPptxDocument:

    def test_cursor_defaults_to_last_slide(self, deck):
        assert PptxDocument(deck).cursor == 2

    def test_explicit_cursor(self, deck):
        assert PptxDocument(deck, cursor=1).cursor == 1

    def test_empty_deck_has_no_cursor(self):
        assert PptxDocument(Presentation()).cursor is None

    def test_paragraph_runs(self, deck):
        doc = PptxDocument(deck)
        paragraphs = doc.slides[1].paragraphs()
        assert len(paragraphs) == 1
        assert [run.text for run in paragraphs[0].runs()] == ["Dear ", "PER", "SON", ", welcome."]
        assert paragraphs[0].text == "Dear PERSON, welcome."


class TestReplaceInDeck:

    def test_whole_run_replacement(self):
        prs = Presentation()
        add_text_slide(prs, [[("hello ", False), ("PERSON", True), (". ", False)]])

        replace_text_on_slide(PptxDocument(prs), "PERSON", "Alice", literal=True)

        paragraph = reload(prs).slides[0].shapes[0].text_frame.paragraphs[0]
        assert run_layout(paragraph) == [("hello ", False), ("Alice", True), (". ", False)]

    def test_chunked_word(self, deck):
        replace_text_on_slide(PptxDocument(deck), "PERSON", "Alice", slide_index=2)

        paragraph = reload(deck).slides[1].shapes[0].text_frame.paragraphs[0]
        assert run_layout(paragraph) == [("Dear ", False), ("Alice", True), (", welcome.", False)]

    def test_whole_deck_ignore_case(self, deck):
        replace_all_text(PptxDocument(deck), "PERSON", "Bob", ignore_case=True)

        prs = reload(deck)
        first = [p.text for p in prs.slides[0].shapes[0].text_frame.paragraphs]
        assert first == ["hello Bob. ", "hello Bob. ", "No need to panic. "]
        assert prs.slides[1].shapes[0].text_frame.text == "Dear Bob, welcome."
        # A match starting on a run boundary takes the following run's formatting
        assert run_layout(prs.slides[0].shapes[0].text_frame.paragraphs[1]) == [
            ("hello ", True), ("Bob", False), (". ", False)]

    def test_regex(self, deck):
        replace_text_on_slide(PptxDocument(deck), r"\bn.*?\b", "example", slide_index=1)
        paragraphs = deck.slides[0].shapes[0].text_frame.paragraphs
        assert paragraphs[2].text == "No example to panic. "

    def test_no_match_keeps_xml(self, deck):
        paragraph = deck.slides[1].shapes[0].text_frame.paragraphs[0]
        before = paragraph._p.xml
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            replace_text_on_slide(PptxDocument(deck), "ZEBRA", "horse")
        assert any(issubclass(w.category, NoMatchWarning) for w in caught)
        assert paragraph._p.xml == before

    def test_deleting_text(self, deck):
        replace_text_on_slide(PptxDocument(deck), ", welcome", "")
        paragraph = deck.slides[1].shapes[0].text_frame.paragraphs[0]
        assert run_layout(paragraph) == [("Dear ", False), ("PER", True), ("SON", False), (".", False)]


class TestSegments:

    def test_line_break_splits_paragraph(self):
        prs = Presentation()
        slide = add_text_slide(prs, [[("foo", False)]])
        paragraph = slide.shapes[0].text_frame.paragraphs[0]
        paragraph.add_line_break()
        paragraph.add_run().text = "bar"

        doc = PptxDocument(prs)
        assert [segment.text for segment in doc.slides[0].paragraphs()] == ["foo", "bar"]
        assert replace_text(doc, "foo.bar", "x", dotall=True, warn=False) == 0

        replace_text_on_slide(doc, "bar", "baz")
        assert [tag for tag in child_tags(paragraph) if tag in ("r", "br")] == ["r", "br", "r"]
        assert [run.text for run in paragraph.runs] == ["foo", "baz"]

    def test_paragraph_properties_stay_first(self):
        prs = Presentation()
        slide = add_text_slide(prs, [[]])
        paragraph = slide.shapes[0].text_frame.paragraphs[0]
        paragraph.alignment = PP_ALIGN.CENTER
        paragraph.add_run().text = "Hello PERSON"

        replace_text_on_slide(PptxDocument(prs), "PERSON", "Alice")

        assert child_tags(paragraph)[0] == "pPr"
        assert paragraph.alignment == PP_ALIGN.CENTER
        assert paragraph.text == "Hello Alice"

    def test_paragraph_without_runs_has_no_segments(self):
        prs = Presentation()
        slide = add_text_slide(prs, [[]])
        assert split_paragraph_segments(slide.shapes[0].text_frame.paragraphs[0]) == []

    def test_set_runs_without_formatting(self):
        prs = Presentation()
        slide = add_text_slide(prs, [[("old", True)]])
        paragraph = slide.shapes[0].text_frame.paragraphs[0]

        segment = split_paragraph_segments(paragraph)[0]
        segment.set_runs([Run("plain"), segment.runs()[0]])

        assert run_layout(paragraph) == [("plain", None), ("old", True)]
        # The segment keeps tracking the new elements
        segment.set_runs([Run("again")])
        assert [run.text for run in paragraph.runs] == ["again"]


class TestShapeTraversal:

    def test_table_cells(self):
        prs = Presentation()
        slide = prs.slides.add_slide(prs.slide_layouts[6])
        table = slide.shapes.add_table(1, 2, Inches(1), Inches(1), Inches(4), Inches(1)).table
        table.cell(0, 0).text = "Name: PERSON"
        table.cell(0, 1).text = "PERSON again"

        replace_text_on_slide(PptxDocument(prs), "PERSON", "Alice")

        assert table.cell(0, 0).text == "Name: Alice"
        assert table.cell(0, 1).text == "Alice again"

    def test_group_shapes(self):
        prs = Presentation()
        slide = prs.slides.add_slide(prs.slide_layouts[6])
        group = slide.shapes.add_group_shape()
        textbox = group.shapes.add_textbox(Inches(1), Inches(1), Inches(2), Inches(1))
        textbox.text_frame.text = "grouped PERSON"

        replace_text_on_slide(PptxDocument(prs), "PERSON", "Alice")

        assert textbox.text_frame.text == "grouped Alice"

    def test_placeholders(self):
        prs = Presentation()
        slide = prs.slides.add_slide(prs.slide_layouts[1])
        slide.shapes.title.text = "Hello, PERSON "

        replace_text_on_slide(PptxDocument(prs), "PERSON", "Alice", literal=True)

        assert slide.shapes.title.text == "Hello, Alice "


class TestHelpers:

    def test_clone_run_with_text(self, deck):
        source = deck.slides[1].shapes[0].text_frame.paragraphs[0].runs[1]._r
        cloned = clone_run_with_text(source, "Alice")

        assert cloned is not source
        assert cloned.find(qn('a:t')).text == "Alice"
        assert cloned.find(qn('a:rPr')).get('b') == '1'
        assert source.find(qn('a:t')).text == "PER"

    def test_paragraph_text_summary(self, deck):
        summary = paragraph_text_summary(deck.slides[0])
        assert [p["text"] for p in summary] == ["hello PERSON. ", "hello person. ", "No need to panic. "]
        assert summary[1]["runs"] == [
            {"text": "hello ", "bold": True, "italic": None, "size": None},
            {"text": "person. ", "bold": False, "italic": None, "size": None},
        ]
