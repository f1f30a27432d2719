"""
Self-contained HTML rendering host.

Produces a single HTML document with:
- one absolutely positioned stage per slide (canvas units map 1:1 to CSS px,
  the stage is scaled to the viewport)
- Keyboard navigation (arrows, Space, PageUp/PageDown, Home/End; ``N`` toggles notes)
- Progress dots and slide counter
- Smooth CSS transitions
"""

from __future__ import annotations

import html as html_mod

from slideai.schemas.rendered import Align, ShapeKind, TextStyle

_ARROW_CLIP = {
    ShapeKind.right_arrow: "polygon(0 30%, 60% 30%, 60% 0, 100% 50%, 60% 100%, 60% 70%, 0 70%)",
    ShapeKind.down_arrow: "polygon(30% 0, 70% 0, 70% 60%, 100% 60%, 50% 100%, 0 60%, 30% 60%)",
}

_RADIUS = {
    ShapeKind.round_rectangle: "8px",
    ShapeKind.ellipse: "50%",
}

_JUSTIFY = {
    Align.start: "flex-start",
    Align.center: "center",
    Align.end: "flex-end",
}


def _e(text: str | None) -> str:
    """HTML-escape helper."""
    return html_mod.escape(text or "")


def _px(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".") + "px"


class _Element:
    def __init__(self, x: float, y: float, width: float, height: float):
        self.geometry = (
            f"left:{_px(x)};top:{_px(y)};width:{_px(width)};height:{_px(height)}"
        )


class _Shape(_Element):
    def __init__(self, kind: ShapeKind, x, y, width, height):
        super().__init__(x, y, width, height)
        self.kind = kind
        self.fill = "transparent"

    def render(self) -> str:
        style = [self.geometry, f"background:{self.fill}"]
        if self.kind in _RADIUS:
            style.append(f"border-radius:{_RADIUS[self.kind]}")
        if self.kind in _ARROW_CLIP:
            style.append(f"clip-path:{_ARROW_CLIP[self.kind]}")
        return f'<div class="el shape" style="{";".join(style)}"></div>'


class _Text(_Element):
    def __init__(self, text: str, x, y, width, height):
        super().__init__(x, y, width, height)
        self.text = text
        self.style: TextStyle | None = None
        self.align = Align.start

    def render(self) -> str:
        style = [self.geometry, f"justify-content:{_JUSTIFY[self.align]}"]
        if self.style is not None:
            s = self.style
            style += [
                f"font-size:{_px(s.font_size)}",
                f"color:{s.color}",
                f"font-family:'{_e(s.font_family)}',sans-serif",
                f"font-weight:{700 if s.bold else 400}",
                f"font-style:{'italic' if s.italic else 'normal'}",
            ]
        text_align = {"START": "left", "CENTER": "center", "END": "right"}[self.align.value]
        lines = "<br>".join(_e(line) for line in self.text.split("\n"))
        return (
            f'<div class="el text" style="{";".join(style)}">'
            f'<span style="text-align:{text_align}">{lines}</span></div>'
        )


class _Slide:
    def __init__(self):
        self.background = "#ffffff"
        self.elements: list[_Element] = []
        self.notes = ""


class HtmlAdapter:
    def __init__(self, title: str = "Presentation", width: float = 720, height: float = 405):
        self.title = title
        self.width = width
        self.height = height
        self.slides: list[_Slide] = []

    def add_slide(self) -> _Slide:
        slide = _Slide()
        self.slides.append(slide)
        return slide

    def set_background(self, slide: _Slide, color: str) -> None:
        slide.background = color

    def insert_shape(self, slide: _Slide, kind: ShapeKind, x, y, width, height) -> _Shape:
        shape = _Shape(kind, x, y, width, height)
        slide.elements.append(shape)
        return shape

    def set_fill(self, shape: _Shape, color: str) -> None:
        shape.fill = color

    def insert_text_box(self, slide: _Slide, text: str, x, y, width, height) -> _Text:
        box = _Text(text, x, y, width, height)
        slide.elements.append(box)
        return box

    def set_text_style(self, box: _Text, style: TextStyle) -> None:
        box.style = style

    def set_paragraph_alignment(self, box: _Text, align: Align) -> None:
        box.align = align

    def set_speaker_notes(self, slide: _Slide, text: str) -> None:
        slide.notes = text

    def _render_slide(self, slide: _Slide, index: int) -> str:
        elements = "\n        ".join(e.render() for e in slide.elements)
        notes = f'\n      <aside class="notes">{_e(slide.notes)}</aside>' if slide.notes else ""
        return f"""
    <section class="slide" data-slide="{index}">
      <div class="stage" style="background:{slide.background}">
        {elements}
      </div>{notes}
    </section>"""

    def finish(self) -> str:
        """Render the collected slides into a self-contained HTML presentation."""
        total_slides = len(self.slides)
        slides_html = [self._render_slide(s, i) for i, s in enumerate(self.slides)]
        dots = "".join(
            f'<span class="dot{" active" if i == 0 else ""}" data-dot="{i}"></span>'
            for i in range(total_slides)
        )
        w, h = _px(self.width), _px(self.height)

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{_e(self.title)}</title>
<link rel="preconnect" href="https://fonts.googleapis.com">
<link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
<link href="https://fonts.googleapis.com/css2?family=Noto+Sans+JP:wght@400;700&display=swap" rel="stylesheet">
<style>
*, *::before, *::after {{ box-sizing: border-box; margin: 0; padding: 0; }}
html, body {{
  width: 100%; height: 100%; overflow: hidden;
  font-family: 'Noto Sans JP', sans-serif;
  background: #111; color: #1f2937;
}}

/* --- Slide system --- */
.deck {{ position: relative; width: 100vw; height: 100vh; overflow: hidden; }}
.slide {{
  position: absolute; inset: 0;
  display: flex; align-items: center; justify-content: center;
  opacity: 0;
  transition: opacity 0.5s cubic-bezier(.4,0,.2,1);
  pointer-events: none;
  z-index: 0;
}}
.slide.active {{ opacity: 1; pointer-events: auto; z-index: 1; }}

/* --- Stage: canvas coordinates, scaled to fit --- */
.stage {{
  position: relative; flex: none;
  width: {w}; height: {h};
  overflow: hidden;
  transform: scale(var(--scale, 1));
  box-shadow: 0 8px 32px rgba(0,0,0,0.4);
}}
.el {{ position: absolute; }}
.text {{
  display: flex; align-items: center;
  line-height: 1.35;
  overflow: hidden;
  white-space: normal; word-break: break-word;
}}
.text span {{ width: 100%; }}

/* --- Speaker notes --- */
.notes {{
  display: none;
  position: fixed; left: 0; right: 0; bottom: 0;
  max-height: 30vh; overflow: auto;
  padding: 16px 24px;
  background: rgba(15,23,42,0.92); color: #e2e8f0;
  font-size: 14px; white-space: pre-wrap;
}}
body.show-notes .slide.active .notes {{ display: block; }}

/* --- Progress dots --- */
.progress {{
  position: fixed; bottom: 16px;
  left: 50%; transform: translateX(-50%);
  display: flex; gap: 8px; z-index: 100;
}}
.dot {{
  width: 8px; height: 8px;
  border-radius: 50%;
  background: rgba(255,255,255,0.2);
  transition: background 0.3s, transform 0.3s;
  cursor: pointer;
}}
.dot.active {{ background: #3b82f6; transform: scale(1.3); }}

/* --- Slide counter --- */
.slide-counter {{
  position: fixed; top: 16px; right: 16px;
  font-size: 12px; font-weight: 600;
  color: rgba(255,255,255,0.4);
  letter-spacing: 0.08em;
  z-index: 100;
}}
</style>
</head>
<body>
<div class="deck">
  {"".join(slides_html)}
</div>

<div class="progress">{dots}</div>
<div class="slide-counter"><span id="current">{1 if total_slides else 0}</span> / {total_slides}</div>

<script>
(function() {{
  const TOTAL = {total_slides};
  const WIDTH = {self.width}, HEIGHT = {self.height};
  let current = 0;
  const slides = document.querySelectorAll('.slide');
  const dots = document.querySelectorAll('.dot');
  const counter = document.getElementById('current');

  function fit() {{
    const scale = Math.min(window.innerWidth / WIDTH, window.innerHeight / HEIGHT) * 0.94;
    document.documentElement.style.setProperty('--scale', scale);
  }}

  function goTo(n) {{
    if (n < 0 || n >= TOTAL) return;
    slides[current].classList.remove('active');
    dots[current].classList.remove('active');
    current = n;
    slides[current].classList.add('active');
    dots[current].classList.add('active');
    counter.textContent = current + 1;
  }}

  fit();
  window.addEventListener('resize', fit);
  if (TOTAL > 0) slides[0].classList.add('active');

  // Keyboard navigation
  document.addEventListener('keydown', function(e) {{
    switch (e.key) {{
      case 'ArrowRight': case 'PageDown': case ' ':
        e.preventDefault(); goTo(current + 1); break;
      case 'ArrowLeft': case 'PageUp':
        e.preventDefault(); goTo(current - 1); break;
      case 'Home': goTo(0); break;
      case 'End': goTo(TOTAL - 1); break;
    }}
    if (e.key === 'n' || e.key === 'N') {{ document.body.classList.toggle('show-notes'); }}
  }});

  // Dot click navigation
  dots.forEach(function(dot, i) {{
    dot.addEventListener('click', function() {{ goTo(i); }});
  }});
}})();
</script>
</body>
</html>"""
