"""
Tests for the rendering hosts.
"""

from io import BytesIO

from pptx import Presentation
from pptx.util import Pt

from slideai.adapters.base import replay_deck
from slideai.adapters.html_adapter import HtmlAdapter
from slideai.adapters.pptx_adapter import PptxAdapter
from slideai.layout.deck import build_presentation
from slideai.schemas.rendered import ShapeElement

from conftest import TODAY


def expected_calls(slide) -> list[str]:
    calls = ["add_slide", "set_background"]
    for element in slide.elements:
        if isinstance(element, ShapeElement):
            calls += ["insert_shape", "set_fill"]
        else:
            calls += ["insert_text_box", "set_text_style", "set_paragraph_alignment"]
    if slide.notes:
        calls.append("set_speaker_notes")
    return calls


class TestReplayDeck:
    """Adapter calls follow slide and element order."""

    def test_call_order(self, sample_payload, recording_adapter):
        deck = build_presentation(sample_payload, today=TODAY)
        result = replay_deck(deck, recording_adapter)

        expected = [name for slide in deck.slides for name in expected_calls(slide)] + ["finish"]
        assert recording_adapter.names() == expected
        assert result == "done"

    def test_geometry_and_text_are_passed_through(self, sample_payload, recording_adapter):
        deck = build_presentation(sample_payload, today=TODAY)
        replay_deck(deck, recording_adapter)

        first = deck.slides[0].elements[0]
        call = next(c for c in recording_adapter.calls if c[0] == "insert_shape")
        assert call[2:] == (first.kind, first.box.x, first.box.y, first.box.width, first.box.height)

        texts = [c[2] for c in recording_adapter.calls if c[0] == "insert_text_box"]
        assert "Q1 Review" in texts

    def test_notes_go_to_the_right_slide(self, sample_payload, recording_adapter):
        deck = build_presentation(sample_payload, today=TODAY)
        replay_deck(deck, recording_adapter)

        notes = [c for c in recording_adapter.calls if c[0] == "set_speaker_notes"]
        slides = [c[1] for c in recording_adapter.calls if c[0] == "add_slide"]
        assert notes == [("set_speaker_notes", slides[1], "Mention the APAC partner.")]


class TestPptxAdapter:
    def test_writes_a_presentation(self, sample_payload):
        deck = build_presentation(sample_payload, today=TODAY)
        data = replay_deck(deck, PptxAdapter())
        assert data[:2] == b"PK"

        prs = Presentation(BytesIO(data))
        assert prs.slide_width == Pt(720)
        assert prs.slide_height == Pt(405)
        assert len(prs.slides) == len(deck.slides)
        for rendered, slide in zip(deck.slides, prs.slides):
            assert len(slide.shapes) == len(rendered.elements)

    def test_notes_and_text(self, sample_payload):
        deck = build_presentation(sample_payload, today=TODAY)
        prs = Presentation(BytesIO(replay_deck(deck, PptxAdapter())))

        content = prs.slides[1]
        assert content.notes_slide.notes_text_frame.text == "Mention the APAC partner."
        texts = [shape.text_frame.text for shape in content.shapes if shape.has_text_frame]
        assert "Revenue" in texts

    def test_multiline_text_becomes_paragraphs(self):
        adapter = PptxAdapter()
        slide = adapter.add_slide()
        box = adapter.insert_text_box(slide, "one\ntwo", 10, 10, 100, 40)
        assert [p.text for p in box.text_frame.paragraphs] == ["one", "two"]


class TestHtmlAdapter:
    def test_one_section_per_slide(self, sample_payload):
        deck = build_presentation(sample_payload, today=TODAY)
        html = replay_deck(deck, HtmlAdapter(deck.title))
        assert html.startswith("<!DOCTYPE html>")
        assert html.count('<section class="slide"') == len(deck.slides)
        assert f"/ {len(deck.slides)}</div>" in html

    def test_text_is_escaped(self):
        deck = build_presentation(
            {"title": "<script>alert(1)</script>", "slides": [{"title": "A & B", "notes": "n < m"}]},
            today=TODAY,
        )
        html = replay_deck(deck, HtmlAdapter(deck.title))
        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
        assert "A &amp; B" in html
        assert '<aside class="notes">n &lt; m</aside>' in html

    def test_shapes_are_positioned(self):
        adapter = HtmlAdapter()
        slide = adapter.add_slide()
        shape = adapter.insert_shape(slide, "ELLIPSE", 10, 20.5, 30, 40)
        adapter.set_fill(shape, "#ff0000")
        html = adapter.finish()
        assert "left:10px;top:20.5px;width:30px;height:40px" in html
        assert "background:#ff0000" in html
