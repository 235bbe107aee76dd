"""
Syntax - разбор исходников через tree-sitter и правка текста по диапазонам байт.

Дерево tree-sitter неизменяемо: проходы не мутируют его, а регистрируют
правки (замены и вставки) в SourceEditor. После прохода правки
применяются, и следующий проход разбирает уже новый текст.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

from tree_sitter import Language, Node, Parser, Tree

# Типы узлов функций, которые могут быть компонентом-владельцем
FUNCTION_NODE_TYPES = frozenset({
    "function_declaration",
    "generator_function_declaration",
    "arrow_function",
    "function_expression",
    "function",
    "generator_function",
})

_PARSERS: Dict[str, Parser] = {}


def _load_language(grammar: str) -> Language:
    import tree_sitter_typescript as ts_typescript

    if grammar == "typescript":
        return Language(ts_typescript.language_typescript())
    return Language(ts_typescript.language_tsx())


def get_parser(path: Optional[Union[str, Path]] = None) -> Parser:
    """
    Возвращает парсер для файла.

    .ts разбирается грамматикой typescript (без JSX: `<T>value` - приведение
    типа), всё остальное - грамматикой tsx.
    """
    grammar = "tsx"
    if path is not None and Path(path).suffix.lower() == ".ts":
        grammar = "typescript"

    parser = _PARSERS.get(grammar)
    if parser is None:
        parser = _PARSERS[grammar] = Parser(_load_language(grammar))
    return parser


def parse(source: bytes, path: Optional[Union[str, Path]] = None) -> Tree:
    return get_parser(path).parse(source)


# ── Обход дерева ──

def iter_nodes(root: Node) -> Iterator[Node]:
    """Обход в прямом порядке без рекурсии."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def iter_nodes_postorder(root: Node) -> Iterator[Node]:
    """Обход в обратном порядке: потомки раньше родителя."""
    stack: List[Tuple[Node, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            yield node
            continue
        stack.append((node, True))
        stack.extend((child, False) for child in reversed(node.children))


def find_nodes(root: Node, node_type: str) -> Iterator[Node]:
    return (node for node in iter_nodes(root) if node.type == node_type)


def same_node(a: Optional[Node], b: Optional[Node]) -> bool:
    if a is None or b is None:
        return False
    return (a.type, a.start_byte, a.end_byte) == (b.type, b.start_byte, b.end_byte)


def node_text(node: Node) -> str:
    return node.text.decode("utf-8")


def string_value(node: Node) -> str:
    """Содержимое строкового литерала без кавычек."""
    text = node_text(node)
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"":
        return text[1:-1]
    return text


def line_indent(source: bytes, offset: int) -> str:
    """Ведущие пробелы строки, в которой находится offset."""
    line_start = source.rfind(b"\n", 0, offset) + 1
    line = source[line_start:offset]
    stripped = line.lstrip(b" \t")
    return line[:len(line) - len(stripped)].decode("utf-8")


def quote_string(value: str, quote: str = "single") -> str:
    """Строковый литерал JS с предпочтительными кавычками."""
    mark = "'" if quote == "single" else '"'
    escaped = value.replace("\\", "\\\\").replace(mark, "\\" + mark).replace("\n", "\\n")
    return f"{mark}{escaped}{mark}"


# ── Правки исходника ──

@dataclass
class Edit:
    """Замена диапазона [start, end) на text; при start == end - вставка."""
    start: int
    end: int
    text: bytes
    seq: int

    @property
    def sort_key(self) -> Tuple[int, int, int, int]:
        # Вставки раньше замен с той же позиции, объемлющая замена раньше вложенной
        return (self.start, 0 if self.start == self.end else 1, -self.end, self.seq)


class SourceEditor:
    """
    Накопитель правок над неизменяемым исходником.

    Правки, целиком лежащие внутри другой замены, при apply() пропускаются:
    внешняя замена уже включает их через render().
    """

    def __init__(self, source: bytes):
        self.source = source
        self.edits: List[Edit] = []

    def replace(self, start: int, end: int, text: str) -> None:
        self.edits.append(Edit(start, end, text.encode("utf-8"), len(self.edits)))

    def replace_node(self, node: Node, text: str) -> None:
        self.replace(node.start_byte, node.end_byte, text)

    def insert(self, offset: int, text: str) -> None:
        self.replace(offset, offset, text)

    def render(self, start: int, end: int) -> str:
        """Текст диапазона [start, end) с учётом уже зарегистрированных правок внутри него."""
        inner = [e for e in self.edits if e.start >= start and e.end <= end]
        return self._splice(inner, start, end).decode("utf-8")

    def render_node(self, node: Node) -> str:
        return self.render(node.start_byte, node.end_byte)

    def apply(self) -> bytes:
        return self._splice(self.edits, 0, len(self.source))

    def _splice(self, edits: List[Edit], start: int, end: int) -> bytes:
        parts = []
        cursor = start
        for edit in sorted(edits, key=lambda e: e.sort_key):
            if edit.start < cursor:
                # Вложена в уже применённую замену
                continue
            parts.append(self.source[cursor:edit.start])
            parts.append(edit.text)
            cursor = edit.end
        parts.append(self.source[cursor:end])
        return b"".join(parts)
