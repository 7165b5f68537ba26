"""JSON-friendly dumps of statement and expression trees."""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from typing import Any, Dict

from .expressions import Expression, ParsedExpression
from .statements import Block, Statement

__all__ = ["node_to_dict", "program_to_list"]


def _convert(value: Any, *, include_trees: bool) -> Any:
    if isinstance(value, ParsedExpression):
        data: Dict[str, Any] = {"source": value.source}
        if value.error is not None:
            data["error"] = value.error
        elif include_trees and value.tree is not None:
            data["tree"] = node_to_dict(value.tree, include_trees=True)
        return data
    if isinstance(value, (Statement, Expression)):
        return node_to_dict(value, include_trees=include_trees)
    if isinstance(value, (list, tuple)):
        return [_convert(item, include_trees=include_trees) for item in value]
    return value


def node_to_dict(node: Any, *, include_trees: bool = False) -> Dict[str, Any]:
    """Dump ``node`` as a dict with a leading ``type`` key.

    Expressions are shown by their source text; ``include_trees`` adds the
    parsed expression tree under ``tree``.
    """
    if not is_dataclass(node):
        raise TypeError(f"cannot serialize {type(node).__name__}")
    data: Dict[str, Any] = {"type": type(node).__name__}
    for item in fields(node):
        data[item.name] = _convert(getattr(node, item.name), include_trees=include_trees)
    return data


def program_to_list(program: Block, *, include_trees: bool = False) -> list:
    return [node_to_dict(statement, include_trees=include_trees) for statement in program]
