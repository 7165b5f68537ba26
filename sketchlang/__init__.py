"""
sketchlang: a small indentation-delimited language for animated drawings.

A program declares a canvas size, some global state and a ``run()``
function. The runtime executes the top-level statements once, then calls
``run()`` once per frame, collecting the ``circle(...)`` and
``rectangle(...)`` calls it makes into a list of drawing commands that a
rendering surface paints.

The code is organised into several modules:

* ``lexer`` – splits source text into logical line records, joining the
  physical lines of multi-line ``[...]`` literals.
* ``parser`` – rebuilds block structure from indentation and parses each
  expression with a hand written precedence-climbing parser.
* ``ast`` – frozen dataclasses for statements and expressions.
* ``runtime`` – scopes, the expression evaluator, the statement executor
  and the frame driver.
* ``render`` – turns drawing commands into SVG.
* ``cli`` – the ``sketchlang`` command line tool.
"""

import re
from pathlib import Path
from importlib import metadata as _metadata


def _local_version() -> str | None:
    root = Path(__file__).resolve().parents[1]
    pyproject = root / "pyproject.toml"
    if not pyproject.exists():
        return None
    try:
        text = pyproject.read_text(encoding="utf-8")
    except OSError:  # pragma: no cover - IO errors should not break imports
        return None
    match = re.search(r"^version\s*=\s*\"([^\"]+)\"", text, flags=re.MULTILINE)
    if match:
        return match.group(1)
    return None


try:  # pragma: no cover - metadata fallback for editable installs
    __version__ = _metadata.version("sketchlang")
except _metadata.PackageNotFoundError:  # pragma: no cover - source tree
    __version__ = _local_version() or "0.1.0"

from .config import RuntimeConfig  # noqa: E402
from .errors import SketchError  # noqa: E402
from .lexer import LineRecord, lex  # noqa: E402
from .parser import parse, parse_source  # noqa: E402
from .runtime import RuntimeDriver, run_source  # noqa: E402

__all__ = [
    "__version__",
    "RuntimeConfig",
    "SketchError",
    "LineRecord",
    "lex",
    "parse",
    "parse_source",
    "RuntimeDriver",
    "run_source",
]
