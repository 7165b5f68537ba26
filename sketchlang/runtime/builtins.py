"""Built-in functions available to every program."""

from __future__ import annotations

import math
import random
from typing import Callable, Dict, List, Optional, Sequence

from sketchlang.errors import SketchRuntimeError

from .state import RuntimeState, format_rgb
from .values import UNDEFINED, Value, is_number, type_name

__all__ = [
    "BUILTIN_FUNCTIONS",
    "get_builtin",
]

Builtin = Callable[[RuntimeState, Sequence[Value]], Value]


def _numeric_args(name: str, args: Sequence[Value], count: int) -> List[float]:
    if len(args) < count:
        raise SketchRuntimeError(f"{name}() expects {count} arguments, got {len(args)}")
    values = []
    for value in args[:count]:
        if not is_number(value):
            raise SketchRuntimeError(
                f"{name}() expects numeric arguments, got {type_name(value)}"
            )
        values.append(int(value) if isinstance(value, bool) else value)
    return values


# Drawing and colour
def _print(state: RuntimeState, args: Sequence[Value]) -> Value:
    state.output(list(args))
    return UNDEFINED


def _circle(state: RuntimeState, args: Sequence[Value]) -> Value:
    state.draw("circle", _numeric_args("circle", args, 3))
    return UNDEFINED


def _rectangle(state: RuntimeState, args: Sequence[Value]) -> Value:
    state.draw("rectangle", _numeric_args("rectangle", args, 4))
    return UNDEFINED


def _color(state: RuntimeState, args: Sequence[Value]) -> Value:
    red, green, blue = _numeric_args("color", args, 3)
    state.colors.push(format_rgb(red, green, blue))
    return UNDEFINED


def _pop_color(state: RuntimeState, args: Sequence[Value]) -> Value:
    state.colors.pop()
    return UNDEFINED


# Input
def _key_down(state: RuntimeState, args: Sequence[Value]) -> Value:
    if not args:
        return False
    return args[0] in state.keys


# Math
def _unary_math(name: str, func: Callable[[float], Value]) -> Builtin:
    def _call(state: RuntimeState, args: Sequence[Value]) -> Value:
        (value,) = _numeric_args(name, args, 1)
        return func(value)

    _call.__name__ = f"_{name}"
    return _call


def _random(state: RuntimeState, args: Sequence[Value]) -> Value:
    return random.random()


BUILTIN_FUNCTIONS: Dict[str, Builtin] = {
    "print": _print,
    "circle": _circle,
    "rectangle": _rectangle,
    "color": _color,
    "popColor": _pop_color,
    "keyDown": _key_down,
    "sin": _unary_math("sin", math.sin),
    "cos": _unary_math("cos", math.cos),
    "floor": _unary_math("floor", math.floor),
    "abs": _unary_math("abs", abs),
    "random": _random,
}


def get_builtin(name: str) -> Optional[Builtin]:
    """Return the built-in registered under ``name``, if any."""
    return BUILTIN_FUNCTIONS.get(name)
