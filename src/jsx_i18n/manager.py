#!/usr/bin/env python3
"""
Manager - CLI-оркестратор извлечения строк.

Команды:
  extract   Находит захардкоженные строки в компонентах, заменяет их на t()
            и дописывает каталог переводов
  stats     Показывает статистику каталога

Использование:
  jsx-i18n extract src/ --translation-file locales/en.json --import-name react-i18next
  jsx-i18n extract src/App.tsx --translation-file locales.json --translation-root en \\
      --import-name next-i18next --dry-run --print
  jsx-i18n stats --translation-file locales/en.json
"""

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from .catalog import TranslationCatalog
from .config import ConfigError, ExtractConfig, load_config
from .transform import TransformContext, transform_file

logger = logging.getLogger(__name__)

console = Console()

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)


def find_source_files(paths: Iterable[str], config: ExtractConfig) -> List[Path]:
    """
    Находит файлы компонентов.

    Args:
        paths: Файлы и директории (директории обходятся рекурсивно)
        config: Расширения и исключённые директории

    Returns:
        Отсортированный список без дубликатов
    """
    extensions = {ext.lower() for ext in config.extensions}
    found = set()

    for raw in paths:
        path = Path(raw)
        if path.is_file():
            found.add(path)
            continue
        if not path.is_dir():
            logger.warning("Путь не найден: %s", path)
            continue
        for file_path in path.rglob("*"):
            if not file_path.is_file() or file_path.suffix.lower() not in extensions:
                continue
            # Пропускаем исключённые директории
            parts = file_path.relative_to(path).parts
            if any(exc in parts for exc in config.exclude_dirs):
                continue
            found.add(file_path)

    return sorted(found)


def build_config(args) -> ExtractConfig:
    """Конфиг из YAML + переопределения из командной строки."""
    config = load_config(args.config)
    config.update({
        "translation_file": args.translation_file,
        "translation_root": args.translation_root,
        "import_name": args.import_name,
    })
    if getattr(args, "key_max_length", None):
        config.key_max_length = args.key_max_length
    return config


def print_summary(summary: Dict) -> None:
    """Итоговая таблица запуска."""
    table = Table(title="Итоги извлечения", box=box.SIMPLE)
    table.add_column("Метрика")
    table.add_column("Значение", justify="right")
    table.add_row("Файлов обработано", str(summary["files"]))
    table.add_row("Файлов изменено", str(summary["changed_files"]))
    table.add_row("Компонентов затронуто", str(summary["components_touched"]))
    table.add_row("Компонентов в каталоге", str(summary["components"]))
    table.add_row("Всего строк в каталоге", str(summary["entries"]))
    table.add_row("Файл переводов", summary["translation_file"])
    console.print(table)


def export_report(summary: Dict, extractions: List, output_path: Path) -> None:
    """Экспортирует все замены запуска в JSON."""
    data = {
        "meta": summary,
        "extractions": [asdict(e) for e in extractions],
    }
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    logger.info("Отчёт: %d замен -> %s", len(extractions), output_path)


def cmd_extract(args) -> Dict:
    """Команда: извлечение строк."""
    config = build_config(args).validate()

    catalog = TranslationCatalog(config.translation_file, config.translation_root)
    catalog.load()
    context = TransformContext(config, catalog)

    files = find_source_files(args.paths, config)
    logger.info("Найдено %d файлов для обработки", len(files))

    changed: Dict[Path, str] = {}
    for file_path in files:
        try:
            original, result = transform_file(file_path, context)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Файл пропущен: %s: %s", file_path, e)
            continue

        if result != original:
            changed[file_path] = result
        if args.print:
            sys.stdout.write(result)

    # Сначала каталог, затем исходники: ключи не должны ссылаться в пустоту
    if not args.dry_run:
        catalog.save()
        for file_path, result in changed.items():
            file_path.write_bytes(result.encode("utf-8"))
            logger.info("Файл обновлён: %s", file_path)
    else:
        logger.info("Режим --dry-run: файлы и каталог не записаны")

    stats = catalog.get_stats()
    summary = {
        "files": len(files),
        "changed_files": len(changed),
        "components_touched": len(context.touched_components),
        "components": stats["components"],
        "entries": stats["entries"],
        "translation_file": str(config.translation_file),
    }
    logger.info("Компонентов затронуто: %d, всего строк: %d, файл переводов: %s",
                summary["components_touched"], summary["entries"], summary["translation_file"])
    print_summary(summary)

    if args.report:
        export_report(summary, context.extractions, Path(args.report))
    return summary


def cmd_stats(args) -> Dict:
    """Команда: статистика каталога."""
    config = build_config(args)
    if not config.translation_file:
        raise ConfigError("Не указан путь к файлу переводов (translation_file)")

    catalog = TranslationCatalog(config.translation_file, config.translation_root)
    translations = catalog.load()

    table = Table(title=f"Каталог: {config.translation_file}", box=box.SIMPLE)
    table.add_column("Компонент")
    table.add_column("Строк", justify="right")
    for component, entries in sorted(translations.items()):
        count = len(entries) if isinstance(entries, dict) else 0
        table.add_row(component, str(count))
    console.print(table)

    stats = catalog.get_stats()
    console.print(f"Компонентов: {stats['components']}, строк: {stats['entries']}")
    return stats


def _add_catalog_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--translation-file", default=None,
                        help="JSON-файл каталога переводов")
    parser.add_argument("--translation-root", default=None,
                        help="Корневой ключ в каталоге (например, локаль)")
    parser.add_argument("--config", default=None,
                        help="YAML-конфиг (по умолчанию .jsx-i18n.yaml)")


def build_parser() -> argparse.ArgumentParser:
    """Строит парсер аргументов."""
    parser = argparse.ArgumentParser(
        prog="jsx-i18n",
        description="Извлечение захардкоженных строк из React-компонентов",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры:
  jsx-i18n extract src/ --translation-file locales/en.json --import-name react-i18next
  jsx-i18n extract src/ --dry-run --print --config .jsx-i18n.yaml
  jsx-i18n stats --translation-file locales/en.json
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Подробный лог (DEBUG)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Только предупреждения")

    subparsers = parser.add_subparsers(dest="command", help="Команда")

    # === extract ===
    p_extract = subparsers.add_parser("extract", help="Извлечь строки и заменить на t()")
    p_extract.add_argument("paths", nargs="+", help="Файлы или директории")
    _add_catalog_arguments(p_extract)
    p_extract.add_argument("--import-name", default=None,
                           help="Пакет для import (react-i18next, next-i18next, ...)")
    p_extract.add_argument("--key-max-length", type=int, default=None,
                           help="Максимальная длина ключа")
    p_extract.add_argument("--dry-run", action="store_true",
                           help="Ничего не записывать на диск")
    p_extract.add_argument("--print", action="store_true",
                           help="Вывести преобразованные файлы в stdout")
    p_extract.add_argument("--report", default="",
                           help="Путь для JSON-отчёта о заменах")

    # === stats ===
    p_stats = subparsers.add_parser("stats", help="Статистика каталога")
    _add_catalog_arguments(p_stats)
    p_stats.set_defaults(import_name=None)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Точка входа CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.quiet)

    commands = {
        "extract": cmd_extract,
        "stats": cmd_stats,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        handler(args)
    except ConfigError as e:
        logger.error("%s. Обработка прервана.", e)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
