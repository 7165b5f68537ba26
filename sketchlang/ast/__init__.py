"""Abstract syntax tree for sketchlang programs."""

from .expressions import (
    BinaryOp,
    CallExpr,
    Expression,
    IndexExpr,
    ListExpr,
    LiteralExpr,
    LogicalOp,
    ParsedExpression,
    UnaryOp,
    VarExpr,
)
from .statements import (
    Assignment,
    Block,
    Call,
    CanvasSize,
    FunctionDeclaration,
    IfStatement,
    LoopFor,
    LoopWhile,
    ReturnStatement,
    Statement,
    Unknown,
)
from .serialize import node_to_dict, program_to_list

__all__ = [
    "Expression",
    "LiteralExpr",
    "VarExpr",
    "ListExpr",
    "UnaryOp",
    "BinaryOp",
    "LogicalOp",
    "CallExpr",
    "IndexExpr",
    "ParsedExpression",
    "Statement",
    "Block",
    "CanvasSize",
    "FunctionDeclaration",
    "Assignment",
    "LoopFor",
    "LoopWhile",
    "IfStatement",
    "Call",
    "ReturnStatement",
    "Unknown",
    "node_to_dict",
    "program_to_list",
]
