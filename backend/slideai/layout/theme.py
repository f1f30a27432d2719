"""Color and font constants for slide rendering.

A ``Theme`` is passed explicitly into deck assembly; renderers never read
module-level colors.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Theme(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = "light"
    primary: str = "#1e40af"
    secondary: str = "#3b82f6"
    accent: str = "#f59e0b"
    background: str = "#f8fafc"
    title_bg: str = "#1e3a5f"
    header_bg: str = "#2563eb"
    text: str = "#1f2937"
    muted_text: str = "#64748b"
    light_text: str = "#ffffff"
    subtle_text: str = "#94a3b8"
    panel: str = "#e2e8f0"
    panel_alt: str = "#f1f5f9"
    card: str = "#ffffff"
    dark_bg: str = "#0f172a"
    font_family: str = "Noto Sans JP"
    palette: tuple[str, ...] = (
        "#2563eb",
        "#0891b2",
        "#059669",
        "#d97706",
        "#7c3aed",
        "#db2777",
    )

    def palette_color(self, i: int) -> str:
        return self.palette[i % len(self.palette)]


THEMES: dict[str, Theme] = {
    "light": Theme(),
    "dark": Theme(
        name="dark",
        primary="#93c5fd",
        secondary="#60a5fa",
        background="#111827",
        title_bg="#030712",
        header_bg="#1e3a8a",
        text="#e5e7eb",
        muted_text="#9ca3af",
        panel="#1f2937",
        panel_alt="#374151",
        card="#1f2937",
        dark_bg="#030712",
    ),
    "corporate": Theme(
        name="corporate",
        primary="#0f3d3e",
        secondary="#14746f",
        accent="#c9a227",
        background="#fafaf9",
        title_bg="#0f3d3e",
        header_bg="#14746f",
        dark_bg="#0f3d3e",
        palette=("#14746f", "#0f3d3e", "#c9a227", "#57534e", "#0e7490", "#9a3412"),
    ),
}


def get_theme(name: str | None, default: str = "light") -> Theme:
    """Look up a built-in theme; unknown names fall back to *default*."""
    if name and name.lower() in THEMES:
        return THEMES[name.lower()]
    return THEMES.get(default, THEMES["light"])
