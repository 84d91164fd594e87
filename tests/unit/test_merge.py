"""Unit tests for token merging."""

from tokensmith.merge import merge_tokens
from tokensmith.tokens import Category, DesignTokens


def _tokens(*entries: tuple[Category, str, str]) -> DesignTokens:
    tokens = DesignTokens()
    for category, key, value in entries:
        tokens.add_token(category, key, value)
    return tokens


class TestPrecedence:
    """Later sources win per key."""

    def test_last_write_wins(self):
        a = _tokens((Category.COLOR, "primary", "#000"), (Category.COLOR, "ink", "#111"))
        b = _tokens((Category.COLOR, "primary", "#fff"))

        merged = merge_tokens(a, b)

        assert merged.colors["primary"].value == "#fff"
        assert merged.colors["ink"].value == "#111"

    def test_order_matters(self):
        a = _tokens((Category.SPACING, "sm", "4px"))
        b = _tokens((Category.SPACING, "sm", "8px"))

        assert merge_tokens(a, b).spacing["sm"].value == "8px"
        assert merge_tokens(b, a).spacing["sm"].value == "4px"


class TestNoErasure:
    """A category missing from a source never erases earlier data."""

    def test_absent_category_keeps_earlier(self):
        a = _tokens((Category.RADIUS, "md", "6px"))
        b = _tokens((Category.COLOR, "primary", "#000"))

        merged = merge_tokens(a, b)

        assert merged.radius["md"].value == "6px"
        assert merged.colors["primary"].value == "#000"

    def test_empty_category_keeps_earlier(self):
        a = _tokens((Category.COLOR, "primary", "#000"))
        b = DesignTokens(colors={})

        assert merge_tokens(a, b).colors["primary"].value == "#000"

    def test_absent_everywhere_stays_absent(self):
        merged = merge_tokens(_tokens((Category.COLOR, "a", "#000")))

        assert merged.spacing is None
        assert merged.typography is None


class TestGroupedCategories:
    """Typography and animation merge per sub-map."""

    def test_typography_sub_maps(self):
        a = _tokens(
            (Category.FONT_FAMILY, "sans", "Inter"),
            (Category.FONT_SIZE, "text-sm", "14px"),
        )
        b = _tokens((Category.FONT_SIZE, "text-sm", "0.875rem"))

        merged = merge_tokens(a, b)

        assert merged.typography.font_family["sans"].value == "Inter"
        assert merged.typography.font_size["text-sm"].value == "0.875rem"

    def test_animation_sub_maps(self):
        a = _tokens((Category.DURATION, "fast", "100ms"), (Category.EASING, "out", "ease-out"))
        b = _tokens((Category.DURATION, "fast", "150ms"))

        merged = merge_tokens(a, b)

        assert merged.animation.duration["fast"].value == "150ms"
        assert merged.animation.easing["out"].value == "ease-out"


class TestInputs:
    """Tests for input handling."""

    def test_none_sources_skipped(self):
        merged = merge_tokens(None, _tokens((Category.COLOR, "a", "#000")), None)

        assert merged.colors["a"].value == "#000"

    def test_no_sources(self):
        assert merge_tokens().to_dict() == {}

    def test_inputs_not_mutated(self):
        a = _tokens((Category.COLOR, "a", "#000"), (Category.FONT_SIZE, "text-sm", "14px"))
        b = _tokens((Category.COLOR, "b", "#fff"), (Category.FONT_SIZE, "text-lg", "18px"))
        before = (a.to_dict(), b.to_dict())

        merge_tokens(a, b)

        assert (a.to_dict(), b.to_dict()) == before
