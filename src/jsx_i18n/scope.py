"""
Scope - определяет компонент, которому принадлежит узел.

Ключи перевода группируются по имени ближайшей объемлющей функции:
    function MyComponent() {}            -> 'MyComponent'
    const MyComponent = () => {}         -> 'MyComponent'
    items.map(item => <li>Item</li>)     -> 'UnknownFunction'
"""

from dataclasses import dataclass
from typing import Optional

from tree_sitter import Node

from .syntax import FUNCTION_NODE_TYPES, node_text

UNKNOWN_FUNCTION = "UnknownFunction"

_DECLARATION_TYPES = frozenset({"function_declaration", "generator_function_declaration"})


@dataclass
class OwningUnit:
    """Функция-владелец найденного текста."""
    node: Node
    name: str

    @property
    def key(self) -> tuple:
        return (self.node.start_byte, self.node.end_byte)

    @property
    def namespace(self) -> str:
        """Имя компонента в каталоге: первая буква в нижнем регистре."""
        return lower_first(self.name)


def lower_first(name: str) -> str:
    return name[:1].lower() + name[1:]


def get_function_name(node: Node) -> str:
    """
    Имя функции: собственное имя объявления или имя переменной,
    которой присвоено функциональное выражение.
    """
    if node.type in _DECLARATION_TYPES:
        name = node.child_by_field_name("name")
        return node_text(name) if name is not None else UNKNOWN_FUNCTION

    parent = node.parent
    if parent is not None and parent.type == "variable_declarator":
        name = parent.child_by_field_name("name")
        if name is not None and name.type == "identifier":
            return node_text(name)

    # function Named() {} внутри выражения
    name = node.child_by_field_name("name")
    if name is not None:
        return node_text(name)
    return UNKNOWN_FUNCTION


def find_owning_unit(node: Node) -> Optional[OwningUnit]:
    """
    Поднимается по родителям до ближайшей функции.

    Returns:
        OwningUnit или None, если узел лежит на верхнем уровне модуля
    """
    current = node.parent
    while current is not None:
        if current.type in FUNCTION_NODE_TYPES:
            return OwningUnit(node=current, name=get_function_name(current))
        current = current.parent
    return None
