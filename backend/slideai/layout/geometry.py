"""Canvas configuration and the content-region arithmetic shared by renderers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from slideai.schemas.rendered import Box

__all__ = ["Box", "CanvasConfig", "DEFAULT_CANVAS"]


class CanvasConfig(BaseModel):
    """Fixed page geometry, in points (16:9, 720x405 by default)."""

    model_config = ConfigDict(frozen=True)

    width: float = 720
    height: float = 405
    header_height: float = 65
    margin_x: float = 30
    content_gap: float = 12
    bottom_margin: float = 15
    accent_bar_width: float = 6

    @property
    def bounds(self) -> Box:
        return Box(x=0, y=0, width=self.width, height=self.height)

    def content_region(self) -> Box:
        """Area below the header band that content renderers may fill."""
        top = self.header_height + self.content_gap
        return Box(
            x=self.margin_x,
            y=top,
            width=self.width - 2 * self.margin_x,
            height=self.height - top - self.bottom_margin,
        )


DEFAULT_CANVAS = CanvasConfig()
