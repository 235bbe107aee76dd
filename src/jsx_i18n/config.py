"""
Config - конфигурация извлечения строк.

Источники (по возрастанию приоритета):
1. Значения по умолчанию в ExtractConfig
2. YAML-файл (.jsx-i18n.yaml или --config)
3. Аргументы командной строки
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = ".jsx-i18n.yaml"

# JSX-атрибуты, значения которых переводятся
JSX_ATTRIBUTES_TO_TRANSLATE = ("alt", "aria-label", "title", "description")

# Шаблонные строки в этих атрибутах не трогаем (CSS-классы, URL, ключи React)
TEMPLATE_LITERAL_BLACKLIST = ("className", "href", "src", "key")

SOURCE_EXTENSIONS = (".tsx", ".jsx", ".ts", ".js")

EXCLUDE_DIRS = (
    "node_modules", ".git", "dist", "build", ".next", "coverage", "__pycache__",
)


LIST_FIELDS = frozenset({"attributes", "template_attribute_blacklist", "extensions", "exclude_dirs"})
INT_FIELDS = frozenset({"key_max_length"})


class ConfigError(ValueError):
    """Не задан обязательный параметр конфигурации."""


@dataclass
class ExtractConfig:
    """Конфигурация извлечения."""
    translation_file: str = ""              # Путь к JSON-каталогу (обязателен)
    translation_root: Optional[str] = None  # Корневой ключ в каталоге (локаль)
    import_name: str = ""                   # react-i18next | next-i18next | ... (обязателен)
    hook_name: str = "useTranslation"
    translate_function: str = "t"
    key_max_length: int = 40
    quote: str = "single"                   # single | double
    attributes: Tuple[str, ...] = JSX_ATTRIBUTES_TO_TRANSLATE
    template_attribute_blacklist: Tuple[str, ...] = TEMPLATE_LITERAL_BLACKLIST
    extensions: Tuple[str, ...] = SOURCE_EXTENSIONS
    exclude_dirs: Tuple[str, ...] = EXCLUDE_DIRS

    def validate(self) -> "ExtractConfig":
        """
        Проверяет обязательные параметры до начала обработки.

        Raises:
            ConfigError: не задан путь к каталогу или имя пакета
        """
        if not self.translation_file:
            raise ConfigError("Не указан путь к файлу переводов (translation_file)")
        if not self.import_name:
            raise ConfigError(
                "Не указан пакет для импорта (import_name), "
                "например react-i18next, i18next, next-i18next"
            )
        if self.quote not in ("single", "double"):
            raise ConfigError(f"Недопустимое значение quote: {self.quote!r}")
        if not isinstance(self.key_max_length, int) or isinstance(self.key_max_length, bool):
            raise ConfigError(f"key_max_length должен быть целым числом: {self.key_max_length!r}")
        if self.key_max_length < 1:
            raise ConfigError("key_max_length должен быть положительным")
        return self

    def update(self, values: Dict[str, Any]) -> "ExtractConfig":
        """Применяет словарь значений; None и неизвестные ключи пропускаются."""
        known = {f.name: f for f in fields(self)}
        for name, value in values.items():
            name = name.replace("-", "_")
            if name not in known:
                logger.warning("Неизвестный параметр конфигурации: %s", name)
                continue
            if value is None:
                continue
            setattr(self, name, _coerce(name, value))
        return self


def _coerce(name: str, value: Any) -> Any:
    """Приводит значение из YAML/CLI к типу поля конфигурации."""
    if name in LIST_FIELDS:
        # attributes: alt  ->  ("alt",)
        if isinstance(value, str):
            return (value,)
        if not isinstance(value, (list, tuple)):
            raise ConfigError(f"{name} должен быть списком строк, получено: {value!r}")
        return tuple(str(item) for item in value)

    if name in INT_FIELDS:
        if isinstance(value, bool):
            raise ConfigError(f"{name} должен быть целым числом, получено: {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigError(f"{name} должен быть целым числом, получено: {value!r}") from None

    if isinstance(value, (list, tuple, dict)):
        raise ConfigError(f"{name} должен быть строкой, получено: {value!r}")
    return value


def load_config(path: Optional[Union[str, Path]] = None) -> ExtractConfig:
    """
    Загружает конфигурацию из YAML-файла.

    Args:
        path: Путь к YAML. Если не указан - ищется .jsx-i18n.yaml
            в текущей директории.

    Returns:
        ExtractConfig (значения по умолчанию, если файла нет)
    """
    config = ExtractConfig()
    config_path = Path(path) if path else Path.cwd() / DEFAULT_CONFIG_NAME

    if not config_path.exists():
        if path:
            raise ConfigError(f"Файл конфигурации не найден: {config_path}")
        logger.debug("Конфиг %s не найден, используются значения по умолчанию", config_path)
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Ошибка разбора конфига {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Конфиг {config_path} должен быть YAML-словарём")

    logger.info("Конфигурация загружена из %s", config_path)
    return config.update(data)
