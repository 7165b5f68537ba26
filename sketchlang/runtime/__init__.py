"""Runtime: values, scopes, evaluator, executor and the frame driver."""

from .builtins import BUILTIN_FUNCTIONS, get_builtin
from .driver import FrameListener, RuntimeDriver, run_source
from .evaluator import Evaluator
from .executor import Executor
from .scheduling import FrameScheduler, ManualScheduler, RealtimeScheduler
from .scope import Scope
from .state import ColorStack, DrawCommand, RuntimeState
from .values import UNDEFINED, Value, format_value, to_number, truthy

__all__ = [
    "BUILTIN_FUNCTIONS",
    "get_builtin",
    "RuntimeDriver",
    "FrameListener",
    "run_source",
    "Evaluator",
    "Executor",
    "FrameScheduler",
    "ManualScheduler",
    "RealtimeScheduler",
    "Scope",
    "ColorStack",
    "DrawCommand",
    "RuntimeState",
    "UNDEFINED",
    "Value",
    "format_value",
    "to_number",
    "truthy",
]
