"""
Tests for text measurement and the text-fit sizing functions.
"""

import pytest

from slideai.layout.measure import (
    MESSAGE_MAX_HEIGHT,
    MESSAGE_MIN_HEIGHT,
    MIN_BULLET_FONT,
    CharWidthMeasurer,
    estimate_line_count,
    fit_bullet_block,
    fit_multi_line,
    fit_single_line,
    measure_message_block_height,
)

from conftest import LONG


class TestCharWidthMeasurer:
    """Tests for the character-count width model."""

    def test_latin_factor(self):
        assert CharWidthMeasurer().text_width("abcd", 10) == pytest.approx(28.0)

    def test_wide_characters_are_denser(self):
        measurer = CharWidthMeasurer()
        assert measurer.text_width("あ", 10) == pytest.approx(8.5)
        assert measurer.text_width("あ", 10) > measurer.text_width("a", 10)

    def test_width_is_additive(self):
        measurer = CharWidthMeasurer()
        assert measurer.text_width("ab", 12) == pytest.approx(
            measurer.text_width("a", 12) + measurer.text_width("b", 12)
        )


class TestEstimateLineCount:
    def test_empty_text(self):
        assert estimate_line_count("", 100, 12) == 0

    def test_wraps_by_width(self):
        # 4 chars * 0.7 * 10pt = 28pt on a 14pt line
        assert estimate_line_count("abcd", 14, 10) == 2

    def test_explicit_newlines(self):
        assert estimate_line_count("a\nb\nc", 500, 12) == 3


class TestFitSingleLine:
    def test_fitting_text_keeps_base(self):
        assert fit_single_line("Hi", 200, 20, 9) == 20

    def test_shrinks_proportionally(self):
        # 20 * 0.7 * 20 = 280pt wide at base, half of it available
        assert fit_single_line("a" * 20, 140, 20, 9) == 10

    def test_never_below_minimum(self):
        assert fit_single_line(LONG * 5, 50, 20, 9) == 9

    def test_monotonic_in_text_length(self):
        """Longer text never gets a larger font."""
        sizes = [fit_single_line("x" * n, 300, 24, 10) for n in range(0, 120, 3)]
        assert all(a >= b for a, b in zip(sizes, sizes[1:]))

    def test_monotonic_with_mixed_scripts(self):
        text = "プレゼンテーション資料 Quarterly Review " * 4
        sizes = [fit_single_line(text[:n], 250, 28, 12) for n in range(len(text) + 1)]
        assert all(a >= b for a, b in zip(sizes, sizes[1:]))


class TestFitMultiLine:
    def test_fitting_text_keeps_base(self):
        assert fit_multi_line("a" * 10, 200, 30, 14, 9) == 14

    def test_steps_down_until_fit(self):
        size = fit_multi_line("word " * 30, 200, 100, 16, 8)
        assert 8 <= size < 16
        assert estimate_line_count("word " * 30, 200, size) * size * 1.6 <= 100

    def test_floor_when_nothing_fits(self):
        assert fit_multi_line(LONG, 50, 10, 16, 10) == 10


class TestFitBulletBlock:
    """Tests for the tiered bullet sizing."""

    @pytest.mark.parametrize(
        "count,font,row",
        [(1, 16, 34), (3, 16, 34), (4, 14, 28), (5, 14, 28), (6, 13, 24), (7, 13, 24), (8, 12, 21)],
    )
    def test_tiers(self, count, font, row):
        metrics = fit_bullet_block(["short"] * count, 1000, 600)
        assert metrics.font_size == font
        assert metrics.row_height == row
        assert metrics.visible_count == count

    def test_scales_to_available_height(self):
        metrics = fit_bullet_block(["short"] * 5, 112, 600)
        assert metrics.row_height * metrics.visible_count <= 112 + 1e-6
        assert metrics.font_size >= MIN_BULLET_FONT
        assert metrics.visible_count == 5

    def test_truncates_at_floor(self):
        metrics = fit_bullet_block(["short"] * 10, 100, 600)
        assert metrics.font_size == MIN_BULLET_FONT
        assert metrics.visible_count < 10
        assert metrics.visible_count * metrics.row_height <= 100

    def test_long_bullet_shrinks_font(self):
        metrics = fit_bullet_block(["x" * 80, "y"], 1000, 300)
        assert MIN_BULLET_FONT <= metrics.font_size < 16

    def test_pathological_input_respects_floor(self):
        metrics = fit_bullet_block([LONG] * 50, 40, 20)
        assert metrics.font_size >= MIN_BULLET_FONT
        assert metrics.visible_count * metrics.row_height <= 40

    def test_empty_list(self):
        assert fit_bullet_block([], 200, 600).visible_count == 0


class TestMessageBlockHeight:
    def test_short_message_uses_minimum(self):
        assert measure_message_block_height("Short", 600, 18) == MESSAGE_MIN_HEIGHT

    def test_long_message_is_capped(self):
        assert measure_message_block_height(LONG, 600, 18) == MESSAGE_MAX_HEIGHT

    def test_grows_with_lines(self):
        two_lines = "a" * 60  # 60 * 0.7 * 18 = 756pt on a 600pt line
        assert measure_message_block_height(two_lines, 600, 18) == pytest.approx(2 * 18 * 1.5 + 8)
