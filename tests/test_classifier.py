"""
Tests for text normalization and the translatable-text filter.
"""

import pytest

from jsx_i18n.classifier import is_translatable, sanitize_text


class TestSanitizeText:

    def test_collapses_whitespace(self):
        assert sanitize_text("Hello    World  !") == "Hello World !"

    def test_strips_newlines_and_indent(self):
        assert sanitize_text("\n      Hello\n      World\n    ") == "Hello World"

    def test_tabs(self):
        assert sanitize_text("\tA\t\tB") == "A B"


class TestIsTranslatable:

    @pytest.mark.parametrize("text", ["", " ", "-", "_", "$", "7", ":", "(", "©", "  %  "])
    def test_blacklisted(self, text):
        assert not is_translatable(text)

    @pytest.mark.parametrize("text", ["Hello", "Price: $5", "42 items", "OK", "a"])
    def test_translatable(self, text):
        assert is_translatable(text)

    def test_multi_char_numbers_pass(self):
        # Фильтр сравнивает фрагмент целиком
        assert is_translatable("10")
