"""
jsx_i18n - автоматическое извлечение строк из React-компонентов.

Модули:
- classifier: фильтр переводимого текста и нормализация пробелов
- keys: генерация ключей перевода из текста
- catalog: каталог переводов (JSON: компонент -> ключ -> текст)
- scope: поиск компонента-владельца узла
- syntax: парсер tree-sitter, обход дерева, SourceEditor
- hooks: импорт и вызов useTranslation в компоненте
- passes: проходы извлечения (JSX-текст, атрибуты, шаблонные строки)
- transform: контекст и запуск проходов для одного файла
- config: конфигурация (YAML + CLI)
- manager: CLI-оркестратор
"""

__version__ = "0.1.0"

from .catalog import TranslationCatalog
from .classifier import is_translatable, sanitize_text
from .config import ConfigError, ExtractConfig, load_config
from .keys import create_translation_key
from .transform import TransformContext, transform_source

__all__ = [
    "ConfigError",
    "ExtractConfig",
    "TransformContext",
    "TranslationCatalog",
    "create_translation_key",
    "is_translatable",
    "load_config",
    "sanitize_text",
    "transform_source",
]
