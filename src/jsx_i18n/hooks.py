"""
Hooks - подключение функции перевода к файлу и компоненту.

1. import { useTranslation } from '<import_name>';   - один раз на файл
2. const { t } = useTranslation();                   - первой строкой компонента

Обе операции идемпотентны: повторный запуск ничего не дублирует.
"""

import logging

from tree_sitter import Node

from .scope import OwningUnit
from .syntax import iter_nodes, line_indent, node_text, quote_string, string_value

logger = logging.getLogger(__name__)

INDENT = "  "


def _import_line(context) -> str:
    config = context.config
    source = quote_string(config.import_name, config.quote)
    return f"import {{ {config.hook_name} }} from {source};"


def _hook_line(context) -> str:
    config = context.config
    return f"const {{ {config.translate_function} }} = {config.hook_name}();"


def has_import(root: Node, import_name: str) -> bool:
    """Есть ли в файле import из пакета import_name."""
    for child in root.named_children:
        if child.type != "import_statement":
            continue
        source = child.child_by_field_name("source")
        if source is not None and string_value(source) == import_name:
            return True
    return False


def _is_directive(node: Node) -> bool:
    # 'use client'; 'use strict';
    return (node.type == "expression_statement"
            and node.named_child_count == 1
            and node.named_children[0].type == "string")


def ensure_import(context) -> None:
    """
    Добавляет import хука перед первым import в файле.

    Если import'ов нет совсем - вставляет в начало файла,
    после ведущих комментариев и директив ('use client').
    """
    if context.import_added:
        return
    context.import_added = True

    root = context.tree.root_node
    if has_import(root, context.config.import_name):
        return

    line = _import_line(context)
    first_import = next(
        (c for c in root.named_children if c.type == "import_statement"), None
    )
    if first_import is not None:
        context.editor.insert(first_import.start_byte, line + "\n")
        return

    anchor = None
    for child in root.named_children:
        if child.type in ("comment", "hash_bang_line") or _is_directive(child):
            anchor = child
            continue
        break

    if anchor is not None:
        context.editor.insert(anchor.end_byte, "\n" + line)
    else:
        context.editor.insert(0, line + "\n\n")
    logger.debug("Добавлен import %s из '%s'", context.config.hook_name,
                 context.config.import_name)


def has_hook_call(function: Node, hook_name: str) -> bool:
    """Вызывается ли hook_name() где-либо внутри функции."""
    for node in iter_nodes(function):
        if node.type != "call_expression":
            continue
        callee = node.child_by_field_name("function")
        if callee is not None and callee.type == "identifier" and node_text(callee) == hook_name:
            return True
    return False


def ensure_hook(context, unit: OwningUnit) -> None:
    """
    Добавляет const { t } = useTranslation(); первой инструкцией компонента.

    Example:
        // Input:
        const MyComponent = () => <div>Hello</div>

        // Output:
        const MyComponent = () => {
          const { t } = useTranslation();
          return <div>Hello</div>;
        }
    """
    if unit.key in context.hooked_units:
        return
    context.hooked_units.add(unit.key)

    if has_hook_call(unit.node, context.config.hook_name):
        return

    body = unit.node.child_by_field_name("body")
    if body is None:
        logger.debug("У функции %s нет тела, хук не добавлен", unit.name)
        return

    source = context.source
    editor = context.editor
    hook = _hook_line(context)
    base = line_indent(source, unit.node.start_byte)

    if body.type == "statement_block":
        statements = body.named_children
        if statements and source.count(b"\n", body.start_byte, statements[0].start_byte):
            indent = line_indent(source, statements[0].start_byte)
            editor.insert(body.start_byte + 1, "\n" + indent + hook)
        else:
            # Пустое тело или первая инструкция на одной строке с '{':
            # пробелы после '{' заменяются переводом строки с отступом
            outer = line_indent(source, body.start_byte)
            indent = outer + INDENT
            if statements:
                gap_end = statements[0].start_byte
                tail = "\n" + indent
            else:
                gap_end = body.end_byte - 1
                tail = "\n" + outer
            editor.replace(body.start_byte + 1, gap_end, "\n" + indent + hook + tail)
    else:
        # Стрелочная функция с неявным return: оборачиваем в блок
        inner = base + INDENT
        editor.insert(body.start_byte, "{\n" + inner + hook + "\n" + inner + "return ")
        editor.insert(body.end_byte, ";\n" + base + "}")

    logger.debug("Добавлен хук %s в %s", context.config.hook_name, unit.name)
