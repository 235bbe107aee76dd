"""
Tests for translation key generation.
"""

import pytest

from jsx_i18n.keys import TRANSLATION_KEY_MAX_LENGTH, create_translation_key


class TestCreateTranslationKey:

    @pytest.mark.parametrize("text, expected", [
        ("Hello World", "hello-world"),
        ("Hello World!", "hello-world"),
        ("Hello , role ", "hello-role"),
        ("Don't stop", "dont-stop"),
        ("user@example", "userexample"),
        ("Save (draft)", "save-draft"),
        ("v1.2.3", "v123"),
        ("Profile picture", "profile-picture"),
    ])
    def test_slug(self, text, expected):
        assert create_translation_key(text) == expected

    def test_deterministic(self):
        assert create_translation_key("Click to edit") == create_translation_key("Click to edit")

    def test_truncated_to_max_length(self):
        key = create_translation_key("word " * 30)
        assert len(key) <= TRANSLATION_KEY_MAX_LENGTH
        assert not key.endswith("-")

    def test_custom_max_length(self):
        assert create_translation_key("Hello beautiful world", max_length=9) == "hello-bea"

    def test_no_dangling_separator_after_truncation(self):
        assert create_translation_key("Hello world", max_length=6) == "hello"

    def test_cyrillic_transliterated(self):
        assert create_translation_key("Привет, мир") == "privet-mir"

    def test_diacritics_stripped(self):
        assert create_translation_key("Café crème") == "cafe-creme"

    def test_fallback_hash_for_untransliterable_text(self):
        key = create_translation_key("你好")
        assert len(key) == 12
        assert key == create_translation_key("你好")
        assert key != create_translation_key("世界")

    def test_only_allowed_characters(self):
        key = create_translation_key("Total: 5 items — 10% off & more")
        assert key
        assert all(ch.isdigit() or ("a" <= ch <= "z") or ch == "-" for ch in key)

    def test_blank_text_gives_empty_key(self):
        assert create_translation_key("   ") == ""

    def test_greek_transliterated(self):
        assert create_translation_key("Καλημέρα κόσμε") == "kalimera-kosme"

    def test_cyrillic_letters_with_marks(self):
        assert create_translation_key("Ёлка и йогурт") == "yolka-i-jogurt"
