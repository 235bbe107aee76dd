"""
Tests for import and hook injection.
"""

from jsx_i18n.hooks import ensure_hook, ensure_import, has_hook_call, has_import
from jsx_i18n.scope import OwningUnit
from jsx_i18n.syntax import find_nodes, parse

HOOK = "const { t } = useTranslation();"
IMPORT = "import { useTranslation } from 'react-i18next';"


def _import(context, source: str) -> str:
    context.begin_pass(source.encode("utf-8"))
    ensure_import(context)
    return context.finish_pass().decode("utf-8")


def _hook(context, source: str, node_type: str) -> str:
    context.begin_pass(source.encode("utf-8"))
    node = next(find_nodes(context.tree.root_node, node_type))
    ensure_hook(context, OwningUnit(node=node, name="A"))
    return context.finish_pass().decode("utf-8")


class TestImport:

    def test_has_import(self):
        tree = parse(b"import { useTranslation } from \"react-i18next\";\n")
        assert has_import(tree.root_node, "react-i18next")
        assert not has_import(tree.root_node, "next-i18next")

    def test_inserted_before_first_import(self, context):
        result = _import(context, "import React from 'react';\n")
        assert result == IMPORT + "\nimport React from 'react';\n"

    def test_not_duplicated(self, context):
        source = IMPORT + "\n"
        assert _import(context, source) == source

    def test_once_per_pass(self, context):
        context.begin_pass(b"import React from 'react';\n")
        ensure_import(context)
        ensure_import(context)
        assert context.finish_pass().decode("utf-8").count(IMPORT) == 1

    def test_no_imports(self, context):
        assert _import(context, "const a = 1;\n") == IMPORT + "\n\nconst a = 1;\n"

    def test_after_directive(self, context):
        result = _import(context, "'use client';\n\nconst a = 1;\n")
        assert result == "'use client';\n" + IMPORT + "\n\nconst a = 1;\n"

    def test_double_quote_style(self, context):
        context.config.quote = "double"
        result = _import(context, "import React from 'react';\n")
        assert result.startswith('import { useTranslation } from "react-i18next";\n')


class TestHook:

    def test_block_body(self, context):
        result = _hook(context, "function A() {\n  return null;\n}\n", "function_declaration")
        assert result == "function A() {\n  " + HOOK + "\n  return null;\n}\n"

    def test_empty_block_body(self, context):
        result = _hook(context, "function A() {}\n", "function_declaration")
        assert result == "function A() {\n  " + HOOK + "\n}\n"

    def test_expression_body_wrapped(self, context):
        result = _hook(context, "const A = () => <p />;\n", "arrow_function")
        assert result == "const A = () => {\n  " + HOOK + "\n  return <p />;\n};\n"

    def test_indented_component(self, context):
        source = "  const A = () => <p />;\n"
        result = _hook(context, source, "arrow_function")
        assert "{\n    " + HOOK + "\n    return <p />;\n  }" in result

    def test_existing_hook_kept(self, context):
        source = "function A() {\n  const { t } = useTranslation();\n  return null;\n}\n"
        assert _hook(context, source, "function_declaration") == source

    def test_has_hook_call(self):
        tree = parse(b"function A() { const x = useTranslation(); }")
        function = next(find_nodes(tree.root_node, "function_declaration"))
        assert has_hook_call(function, "useTranslation")
        assert not has_hook_call(function, "useOther")

    def test_statement_on_brace_line(self, context):
        result = _hook(context, "function A() { return null; }\n", "function_declaration")
        assert result == "function A() {\n  " + HOOK + "\n  return null; }\n"

    def test_comment_on_brace_line(self, context):
        source = "function A() { // note\n  return null;\n}\n"
        result = _hook(context, source, "function_declaration")
        assert result == "function A() {\n  " + HOOK + "\n  // note\n  return null;\n}\n"

    def test_empty_body_with_spaces(self, context):
        result = _hook(context, "function A() {   }\n", "function_declaration")
        assert result == "function A() {\n  " + HOOK + "\n}\n"

    def test_statement_on_brace_line_with_jsx(self, run):
        result = run("function A() { return <p>Hello</p>; }\n")
        assert "function A() {\n  " + HOOK + "\n  return <p>{t('a.hello')}</p>; }" in result
