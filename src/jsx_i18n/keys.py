"""
Keys - генерация ключей перевода из текста.

Ключ - короткий slug в нижнем регистре: только [a-z0-9] и дефис.
Одинаковый текст всегда даёт одинаковый ключ.
"""

import hashlib
import re
import unicodedata

TRANSLATION_KEY_MAX_LENGTH = 40
KEY_SEPARATOR = "-"

# Символы, которые удаляются целиком (а не превращаются в разделитель)
REMOVE_CHARS_RE = re.compile(r"[*+~.()'\"!:@]")

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")

# Транслитерация: лигатуры латиницы, кириллица, греческий (ключи - в нижнем регистре)
TRANSLITERATION = {
    "ß": "ss", "æ": "ae", "ø": "o", "œ": "oe", "ł": "l", "đ": "d", "þ": "th",
    "а": "a", "б": "b", "в": "v", "г": "g", "д": "d", "е": "e", "ё": "yo",
    "ж": "zh", "з": "z", "и": "i", "й": "j", "к": "k", "л": "l", "м": "m",
    "н": "n", "о": "o", "п": "p", "р": "r", "с": "s", "т": "t", "у": "u",
    "ф": "f", "х": "h", "ц": "c", "ч": "ch", "ш": "sh", "щ": "sh", "ъ": "u",
    "ы": "y", "ь": "", "э": "e", "ю": "yu", "я": "ya",
    "є": "ye", "і": "i", "ї": "yi", "ґ": "g", "ў": "u",
    "α": "a", "β": "v", "γ": "g", "δ": "d", "ε": "e", "ζ": "z", "η": "i",
    "θ": "th", "ι": "i", "κ": "k", "λ": "l", "μ": "m", "ν": "n", "ξ": "x",
    "ο": "o", "π": "p", "ρ": "r", "σ": "s", "ς": "s", "τ": "t", "υ": "y",
    "φ": "f", "χ": "ch", "ψ": "ps", "ω": "o",
}


def _replace_letters(text: str) -> str:
    return "".join(TRANSLITERATION.get(ch, ch) for ch in text)


def _transliterate(text: str) -> str:
    # й, ё - до разложения; έ, ό - после (буква с ударением раскладывается)
    decomposed = unicodedata.normalize("NFKD", _replace_letters(text))
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _replace_letters(stripped)


def create_translation_key(text: str,
                           max_length: int = TRANSLATION_KEY_MAX_LENGTH) -> str:
    """
    Создаёт ключ перевода из текста.

    Args:
        text: Исходный текст (обычно уже после sanitize_text)
        max_length: Максимальная длина ключа

    Returns:
        Slug длиной не более max_length. Если в тексте нет ни одного
        символа, который можно транслитерировать (например, иероглифы),
        возвращается 12-символьный md5-хеш текста.

    Examples:
        create_translation_key('Hello World!')   -> 'hello-world'
        create_translation_key('Hello , role ')  -> 'hello-role'
        create_translation_key("Don't stop")     -> 'dont-stop'
        create_translation_key('Привет, мир')    -> 'privet-mir'
        create_translation_key('Καλημέρα κόσμε') -> 'kalimera-kosme'
    """
    slug = REMOVE_CHARS_RE.sub("", text.lower())
    slug = _transliterate(slug)
    slug = _NON_ALNUM_RE.sub(KEY_SEPARATOR, slug).strip(KEY_SEPARATOR)
    # Обрезка может оставить висящий разделитель
    slug = slug[:max_length].rstrip(KEY_SEPARATOR)

    if not slug and text.strip():
        slug = hashlib.md5(text.encode("utf-8")).hexdigest()[:min(12, max_length)]
    return slug
