"""
Passes - проходы извлечения строк.

Стратегия (проходы выполняются строго по порядку, каждый - над
свежим разбором результата предыдущего):
1. JSX-текст:          <p>Hello</p>              -> <p>{t('comp.hello')}</p>
2. JSX-атрибуты:       <img alt="Photo" />       -> <img alt={t('comp.photo')} />
3. Шаблонные строки:   `Hello ${name}`           -> t('comp.hello', { name })

Для каждого кандидата: компонент-владелец -> нормализация -> фильтр ->
ключ -> запись в каталог -> import и хук -> замена узла.
"""

import html
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from tree_sitter import Node

from .classifier import is_translatable, sanitize_text
from .hooks import ensure_hook, ensure_import
from .keys import create_translation_key
from .scope import OwningUnit, find_owning_unit
from .syntax import find_nodes, iter_nodes, iter_nodes_postorder, node_text, same_node, string_value

logger = logging.getLogger(__name__)

JSX_CONTAINER_TYPES = frozenset({"jsx_element", "jsx_fragment"})
JSX_TEXT_TYPES = frozenset({"jsx_text", "html_character_reference"})

PLACEHOLDER_RE = re.compile(r"\{\{.*?\}\}")
IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][\w$]*$")

_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")
_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}
_LINE_CONTINUATIONS = ("\n", "\r\n", "\r", "\u2028", "\u2029")


class CandidateKind(Enum):
    """Вид найденного текста."""
    TEXT = "text"
    ATTRIBUTE = "attribute"
    TEMPLATE = "template"


_KIND_LABELS = {
    CandidateKind.TEXT: "текст",
    CandidateKind.ATTRIBUTE: "атрибут",
    CandidateKind.TEMPLATE: "шаблонная строка",
}


@dataclass
class Binding:
    """Подстановка шаблонной строки: имя параметра и исходное выражение."""
    name: str
    expression: Node

    @property
    def shorthand(self) -> bool:
        return self.expression.type == "identifier" and node_text(self.expression) == self.name


@dataclass
class Candidate:
    """Найденный фрагмент текста, пригодный для извлечения."""
    kind: CandidateKind
    unit: OwningUnit
    text: str
    start: int
    end: int
    line: int
    bindings: List[Binding] = field(default_factory=list)


# ── Общий протокол ──

def _extract(context, candidate: Candidate) -> Optional[str]:
    """
    Записывает кандидата в каталог и готовит файл к вызову t().

    Returns:
        Полный ключ 'component.key' или None, если текст не переводится
    """
    value = sanitize_text(candidate.text)
    key_source = value
    if candidate.kind is CandidateKind.TEMPLATE:
        # Содержимое переменных не должно влиять на ключ
        key_source = sanitize_text(PLACEHOLDER_RE.sub("", value))

    if not is_translatable(key_source):
        return None

    key = create_translation_key(key_source, context.config.key_max_length)
    component = candidate.unit.namespace
    context.catalog.upsert(component, key, value)

    ensure_import(context)
    ensure_hook(context, candidate.unit)
    context.record(candidate, component, key, value)

    logger.info('Найден непереведённый %s в "%s": замена "%s" на "%s.%s"',
                _KIND_LABELS[candidate.kind], component, value, component, key)
    return f"{component}.{key}"


def _resolve_unit(node: Node) -> Optional[OwningUnit]:
    unit = find_owning_unit(node)
    if unit is None:
        logger.debug("Текст на верхнем уровне модуля (строка %d) пропущен",
                     node.start_point[0] + 1)
    return unit


# ── 1. JSX-текст ──

def _text_runs(element: Node) -> List[Tuple[Node, Node]]:
    """Группы подряд идущих jsx_text / &entity; внутри JSX-элемента."""
    runs = []
    first = last = None
    for child in element.children:
        if child.type in JSX_TEXT_TYPES:
            if first is None:
                first = child
            last = child
            continue
        if first is not None:
            runs.append((first, last))
            first = last = None
    if first is not None:
        runs.append((first, last))
    return runs


def transform_jsx_text(context) -> None:
    """
    Заменяет текст внутри JSX на вызов перевода.

    Example:
        <div>Hello World</div>  ->  <div>{t('component.hello-world')}</div>
    """
    source = context.source
    for element in iter_nodes(context.tree.root_node):
        if element.type not in JSX_CONTAINER_TYPES:
            continue

        for first, last in _text_runs(element):
            raw = source[first.start_byte:last.end_byte].decode("utf-8")
            if not raw.strip():
                continue

            unit = _resolve_unit(first)
            if unit is None:
                continue

            # Пробелы вокруг текста оставляем на месте
            leading = raw[:len(raw) - len(raw.lstrip())]
            trailing = raw[len(raw.rstrip()):]
            start = first.start_byte + len(leading.encode("utf-8"))
            end = last.end_byte - len(trailing.encode("utf-8"))

            candidate = Candidate(
                kind=CandidateKind.TEXT,
                unit=unit,
                text=html.unescape(raw),
                start=start,
                end=end,
                line=first.start_point[0] + 1,
            )
            full_key = _extract(context, candidate)
            if full_key is not None:
                context.editor.replace(start, end, "{" + context.lookup_call(full_key) + "}")


# ── 2. JSX-атрибуты ──

def _attribute_parts(attribute: Node) -> Tuple[Optional[str], Optional[Node]]:
    children = [c for c in attribute.named_children if c.type != "comment"]
    if len(children) != 2:
        return None, None
    return node_text(children[0]), children[1]


def transform_jsx_attributes(context) -> None:
    """
    Переводит строковые значения атрибутов из белого списка.

    Example:
        <img alt="Profile picture" title="Click to edit" />
        ->
        <img alt={t('component.profile-picture')} title={t('component.click-to-edit')} />
    """
    allowed = set(context.config.attributes)
    for attribute in find_nodes(context.tree.root_node, "jsx_attribute"):
        name, value = _attribute_parts(attribute)
        if name not in allowed or value is None or value.type != "string":
            continue

        unit = _resolve_unit(attribute)
        if unit is None:
            continue

        candidate = Candidate(
            kind=CandidateKind.ATTRIBUTE,
            unit=unit,
            text=html.unescape(string_value(value)),
            start=value.start_byte,
            end=value.end_byte,
            line=value.start_point[0] + 1,
        )
        full_key = _extract(context, candidate)
        if full_key is not None:
            context.editor.replace_node(value, "{" + context.lookup_call(full_key) + "}")


# ── 3. Шаблонные строки ──

def cook_template_chunk(raw: str) -> str:
    """Раскрывает escape-последовательности литеральной части шаблона."""
    def replace(match):
        seq = match.group(1)
        try:
            if seq.startswith("u{"):
                return chr(int(seq[2:-1], 16))
            if len(seq) > 1 and seq[0] in "ux":
                return chr(int(seq[1:], 16))
        except ValueError:
            return match.group(0)
        if seq in _LINE_CONTINUATIONS:
            return ""
        return _SIMPLE_ESCAPES.get(seq, seq)

    return _ESCAPE_RE.sub(replace, raw)


def split_template(node: Node, source: bytes) -> Optional[Tuple[List[str], List[Node]]]:
    """
    Разбивает шаблонную строку на литеральные части и выражения.

    Returns:
        (chunks, expressions), где len(chunks) == len(expressions) + 1,
        или None для узла неожиданной формы
    """
    chunks: List[str] = []
    expressions: List[Node] = []
    cursor = node.start_byte + 1

    for child in node.named_children:
        if child.type != "template_substitution":
            continue
        expression = next((c for c in child.named_children if c.type != "comment"), None)
        if expression is None:
            return None
        chunks.append(cook_template_chunk(source[cursor:child.start_byte].decode("utf-8")))
        expressions.append(expression)
        cursor = child.end_byte

    chunks.append(cook_template_chunk(source[cursor:node.end_byte - 1].decode("utf-8")))
    return chunks, expressions


def binding_name(expression: Node, position: int) -> str:
    """
    Имя параметра для подстановки:
        ${name}        -> name
        ${user.name}   -> name
        ${format(x)}   -> var{position}
    """
    if expression.type == "identifier":
        return node_text(expression)
    if expression.type == "member_expression":
        prop = expression.child_by_field_name("property")
        if prop is not None and IDENTIFIER_RE.match(node_text(prop)):
            return node_text(prop)
    return f"var{position}"


def _operator(node: Node) -> Optional[str]:
    operator = node.child_by_field_name("operator")
    return node_text(operator) if operator is not None else None


def _is_tagged(node: Node) -> bool:
    # styled.div`...`, gql`...`
    parent = node.parent
    if parent is None:
        return False
    if parent.type == "call_expression":
        return same_node(parent.child_by_field_name("arguments"), node)

    # styled.div<Props>`...` разбирается как (tag < Props) > `...`
    if parent.type == "binary_expression" and _operator(parent) == ">":
        left = parent.child_by_field_name("left")
        return (same_node(parent.child_by_field_name("right"), node)
                and left is not None and left.type == "binary_expression"
                and _operator(left) == "<")
    return False


def _in_blacklisted_attribute(node: Node, blacklist) -> bool:
    # <div className={`text-${color}`} />
    container = node.parent
    if container is None or container.type != "jsx_expression":
        return False
    attribute = container.parent
    if attribute is None or attribute.type != "jsx_attribute":
        return False
    name, _ = _attribute_parts(attribute)
    return name in blacklist


def transform_template_literals(context) -> None:
    """
    Переводит шаблонные строки с переменными.

    Вложенные шаблоны обрабатываются раньше внешних, поэтому внешняя
    замена уже содержит переведённые выражения.

    Example:
        `Hello ${name}, you have ${count} messages`
        ->
        t('component.hello-you-have-messages', { name, count })
    """
    blacklist = set(context.config.template_attribute_blacklist)
    for node in iter_nodes_postorder(context.tree.root_node):
        if node.type != "template_string":
            continue
        if _is_tagged(node) or _in_blacklisted_attribute(node, blacklist):
            continue

        unit = _resolve_unit(node)
        if unit is None:
            continue

        parts = split_template(node, context.source)
        if parts is None:
            logger.debug("Шаблонная строка неожиданной формы (строка %d) пропущена",
                         node.start_point[0] + 1)
            continue
        chunks, expressions = parts

        bindings = [Binding(binding_name(expr, i), expr)
                    for i, expr in enumerate(expressions, start=1)]
        text = chunks[0] + "".join(
            "{{%s}}%s" % (binding.name, chunk) for binding, chunk in zip(bindings, chunks[1:])
        )

        candidate = Candidate(
            kind=CandidateKind.TEMPLATE,
            unit=unit,
            text=text,
            start=node.start_byte,
            end=node.end_byte,
            line=node.start_point[0] + 1,
            bindings=bindings,
        )
        full_key = _extract(context, candidate)
        if full_key is not None:
            context.editor.replace_node(node, context.lookup_call(full_key, bindings))


PASSES = (
    transform_jsx_text,
    transform_jsx_attributes,
    transform_template_literals,
)
