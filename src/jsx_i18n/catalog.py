#!/usr/bin/env python3
"""
Catalog - управление каталогом переводов.

Хранит переводы в одном JSON-файле.
Формат: {"component": {"key": "text", ...}, ...}
или, если задан корневой ключ (локаль, фича):
        {"en": {"component": {"key": "text"}}}

Поддерживает:
- Загрузка каталога (битый/отсутствующий файл = пустой каталог)
- Добавление строк (последняя запись побеждает)
- Сохранение с сортировкой ключей (стабильный diff между запусками)
- Статистика по компонентам
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)

Translations = Dict[str, Dict[str, str]]
PathLike = Union[str, Path]


def read_translations(path: PathLike, translation_root: Optional[str] = None) -> Translations:
    """
    Загружает переводы из JSON-файла.

    Args:
        path: Путь к файлу переводов
        translation_root: Необязательный корневой ключ внутри файла

    Returns:
        Dict[component, Dict[key, text]]. При любой ошибке чтения или
        разбора - пустой словарь, исключения не пробрасываются.

    Example:
        # translations.json: {"en": {"component": {"hello": "Hello"}}}
        read_translations('translations.json', 'en')
        # -> {'component': {'hello': 'Hello'}}
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.debug("Каталог %s не загружен (%s), начинаем с пустого", path, e)
        return {}

    if translation_root:
        data = data.get(translation_root) if isinstance(data, dict) else None

    if not isinstance(data, dict):
        logger.debug("Каталог %s не содержит объекта переводов, начинаем с пустого", path)
        return {}
    return data


def write_translations(path: PathLike, translations: Translations,
                       translation_root: Optional[str] = None) -> None:
    """
    Сохраняет переводы в JSON-файл, полностью перезаписывая его.

    Ключи сортируются, отступ - 2 пробела. Запись атомарная:
    сначала во временный файл рядом, затем os.replace.
    """
    data = {translation_root: translations} if translation_root else translations
    result = json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True)

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp",
                                    dir=str(target.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(result)
        os.replace(tmp_path, target)
    except BaseException:
        os.unlink(tmp_path)
        raise


def add_translation(translations: Translations, component: str, key: str, text: str) -> None:
    """Добавляет строку в каталог; существующее значение по ключу перезаписывается."""
    entries = translations.get(component)
    if not isinstance(entries, dict):
        entries = translations[component] = {}
    previous = entries.get(key)
    if previous is not None and previous != text:
        # Коллизия ключей: побеждает последняя запись
        logger.debug("Ключ %s.%s перезаписан: %r -> %r", component, key, previous, text)
    entries[key] = text


class TranslationCatalog:
    """
    Каталог переводов одного JSON-файла.

    Загружается один раз в начале запуска, изменяется в памяти
    и сохраняется один раз в конце.
    """

    def __init__(self, path: PathLike, translation_root: Optional[str] = None):
        self.path = Path(path)
        self.translation_root = translation_root
        self.translations: Translations = {}

    def load(self) -> Translations:
        """Загружает каталог с диска."""
        self.translations = read_translations(self.path, self.translation_root)
        return self.translations

    def save(self) -> None:
        """Сохраняет каталог на диск."""
        write_translations(self.path, self.translations, self.translation_root)
        logger.info("Каталог сохранён: %s", self.path)

    def upsert(self, component: str, key: str, text: str) -> None:
        add_translation(self.translations, component, key, text)

    def get_stats(self) -> Dict[str, int]:
        """
        Returns:
            Dict с количеством компонентов и общим числом строк
        """
        return {
            "components": len(self.translations),
            "entries": sum(len(entries) for entries in self.translations.values()
                           if isinstance(entries, dict)),
        }
