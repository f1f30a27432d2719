"""python-pptx rendering host: a ``RenderedDeck`` becomes a .pptx file."""

from __future__ import annotations

from io import BytesIO

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.shapes import MSO_SHAPE
from pptx.enum.text import MSO_ANCHOR, MSO_AUTO_SIZE, PP_ALIGN
from pptx.util import Pt

from slideai.schemas.rendered import Align, ShapeKind, TextStyle

BLANK_LAYOUT = 6

_SHAPES = {
    ShapeKind.rectangle: MSO_SHAPE.RECTANGLE,
    ShapeKind.round_rectangle: MSO_SHAPE.ROUNDED_RECTANGLE,
    ShapeKind.ellipse: MSO_SHAPE.OVAL,
    ShapeKind.right_arrow: MSO_SHAPE.RIGHT_ARROW,
    ShapeKind.down_arrow: MSO_SHAPE.DOWN_ARROW,
}

_ALIGN = {
    Align.start: PP_ALIGN.LEFT,
    Align.center: PP_ALIGN.CENTER,
    Align.end: PP_ALIGN.RIGHT,
}


def _rgb(color: str) -> RGBColor:
    return RGBColor.from_string(color.lstrip("#").upper())


class PptxAdapter:
    """Coordinates are points; the slide size matches the layout canvas."""

    def __init__(self, width: float = 720, height: float = 405):
        self.prs = Presentation()
        self.prs.slide_width = Pt(width)
        self.prs.slide_height = Pt(height)

    def add_slide(self):
        return self.prs.slides.add_slide(self.prs.slide_layouts[BLANK_LAYOUT])

    def set_background(self, slide, color: str) -> None:
        fill = slide.background.fill
        fill.solid()
        fill.fore_color.rgb = _rgb(color)

    def insert_shape(self, slide, kind: ShapeKind, x, y, width, height):
        shape = slide.shapes.add_shape(_SHAPES[kind], Pt(x), Pt(y), Pt(width), Pt(height))
        shape.line.fill.background()
        shape.shadow.inherit = False
        return shape

    def set_fill(self, shape, color: str) -> None:
        shape.fill.solid()
        shape.fill.fore_color.rgb = _rgb(color)

    def insert_text_box(self, slide, text: str, x, y, width, height):
        box = slide.shapes.add_textbox(Pt(x), Pt(y), Pt(width), Pt(height))
        tf = box.text_frame
        tf.word_wrap = True
        tf.auto_size = MSO_AUTO_SIZE.NONE
        tf.vertical_anchor = MSO_ANCHOR.MIDDLE
        tf.margin_left = tf.margin_right = Pt(2)
        tf.margin_top = tf.margin_bottom = Pt(1)

        lines = text.split("\n")
        tf.paragraphs[0].text = lines[0]
        for line in lines[1:]:
            tf.add_paragraph().text = line
        return box

    def set_text_style(self, box, style: TextStyle) -> None:
        for paragraph in box.text_frame.paragraphs:
            for run in paragraph.runs:
                font = run.font
                font.size = Pt(style.font_size)
                font.bold = style.bold
                font.italic = style.italic
                font.name = style.font_family
                font.color.rgb = _rgb(style.color)

    def set_paragraph_alignment(self, box, align: Align) -> None:
        for paragraph in box.text_frame.paragraphs:
            paragraph.alignment = _ALIGN[align]

    def set_speaker_notes(self, slide, text: str) -> None:
        slide.notes_slide.notes_text_frame.text = text

    def finish(self) -> bytes:
        buf = BytesIO()
        self.prs.save(buf)
        return buf.getvalue()
