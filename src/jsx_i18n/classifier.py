"""
Classifier - решает, является ли фрагмент текста переводимым.

Фильтр точный: сравнивается весь фрагмент после trim, а не подстроки.
"Price: $5" переводится, "$" - нет.
"""

import re
from typing import FrozenSet

BLACKLIST_TRANSLATION_CHARS = {
    "NUMBERS": "0123456789",
    "CURRENCIES": "$€£¥₽₺₹₩₪₴",
    "PUNCTUATION": ".,!?:;'\"`",
    "MATH": "+=-*/%<>",
    "BRACKETS": "()[]{}«»",
    "SPECIAL": "@#$^&|\\~·©",
}

SEPARATORS = (" ", "", "-", "_")


def _build_blacklist() -> FrozenSet[str]:
    chars = set()
    for group in BLACKLIST_TRANSLATION_CHARS.values():
        chars.update(group)
    chars.update(SEPARATORS)
    return frozenset(chars)


# Фрагменты, которые никогда не переводятся (после trim)
TRANSLATION_BLACKLIST: FrozenSet[str] = _build_blacklist()

_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_text(text: str) -> str:
    """
    Схлопывает пробельные последовательности (включая переводы строк) в один пробел.

    Результат - каноническая форма, которая хранится в каталоге
    и из которой строится ключ.

    Examples:
        sanitize_text('Hello    World  !')      -> 'Hello World !'
        sanitize_text('\\n  Hello\\n  World  \\n') -> 'Hello World'
    """
    return _WHITESPACE_RE.sub(" ", text).strip()


def is_translatable(text: str) -> bool:
    """Проверяет, что фрагмент не входит в чёрный список целиком."""
    return text.strip() not in TRANSLATION_BLACKLIST
