"""
Transform - преобразование одного файла.

Контекст (каталог, конфигурация, дерево текущего прохода, редактор)
передаётся в каждый проход явно; глобального состояния нет.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Set, Tuple, Union

from tree_sitter import Tree

from .catalog import TranslationCatalog
from .config import ExtractConfig
from .passes import PASSES, Binding, Candidate
from .syntax import SourceEditor, parse, quote_string

logger = logging.getLogger(__name__)


@dataclass
class Extraction:
    """Запись об одной замене (для отчёта)."""
    file: str
    line: int
    kind: str
    component: str
    key: str
    text: str


class TransformContext:
    """
    Общее изменяемое состояние запуска.

    catalog и extractions накапливаются по всем файлам;
    tree, source, editor и флаги import/хуков - на время одного прохода.
    """

    def __init__(self, config: ExtractConfig, catalog: TranslationCatalog,
                 file_path: Optional[Union[str, Path]] = None):
        self.config = config
        self.catalog = catalog
        self.file_path = file_path
        self.extractions: List[Extraction] = []
        self.touched_components: Set[str] = set()

        self.source: bytes = b""
        self.tree: Optional[Tree] = None
        self.editor: Optional[SourceEditor] = None
        self.import_added = False
        self.hooked_units: Set[Tuple[int, int]] = set()

    def begin_pass(self, source: bytes) -> None:
        self.source = source
        self.tree = parse(source, self.file_path)
        self.editor = SourceEditor(source)
        self.import_added = False
        self.hooked_units = set()

    def finish_pass(self) -> bytes:
        return self.editor.apply()

    def lookup_call(self, full_key: str, bindings: Sequence[Binding] = ()) -> str:
        """
        Текст вызова t('component.key') или t('component.key', { name, role: user.role }).
        """
        args = [quote_string(full_key, self.config.quote)]
        if bindings:
            properties = []
            for binding in bindings:
                if binding.shorthand:
                    properties.append(binding.name)
                else:
                    value = self.editor.render_node(binding.expression)
                    properties.append(f"{binding.name}: {value}")
            args.append("{ " + ", ".join(properties) + " }")
        return f"{self.config.translate_function}({', '.join(args)})"

    def record(self, candidate: Candidate, component: str, key: str, text: str) -> None:
        self.touched_components.add(component)
        self.extractions.append(Extraction(
            file=str(self.file_path or ""),
            line=candidate.line,
            kind=candidate.kind.value,
            component=component,
            key=key,
            text=text,
        ))


def transform_source(source: str, context: TransformContext) -> str:
    """
    Прогоняет все проходы над исходником.

    Returns:
        Новый текст файла (совпадает с исходным, если замен не было)
    """
    data = source.encode("utf-8")
    for index, transform in enumerate(PASSES):
        context.begin_pass(data)
        if index == 0 and context.tree.root_node.has_error:
            logger.warning("Синтаксические ошибки при разборе %s, обработка продолжается",
                           context.file_path or "<source>")
        transform(context)
        data = context.finish_pass()
    return data.decode("utf-8")


def transform_file(path: Union[str, Path], context: TransformContext) -> Tuple[str, str]:
    """
    Читает и преобразует файл (без записи на диск).

    Returns:
        (исходный текст, новый текст)
    """
    path = Path(path)
    context.file_path = path
    # read_bytes: переводы строк (\r\n) остаются как в файле
    source = path.read_bytes().decode("utf-8")
    return source, transform_source(source, context)
