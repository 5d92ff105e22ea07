"""Structural rendering of kappa values, used by the `print` builtin.

Objects are expanded recursively; an object that does not fit on one line
within the configured width is broken onto indented lines, one field each.
"""

import json
from typing import Optional

from kappa.config import get_print_width
from kappa.types.values import Boolean, Builtin, Function, Number, Object, String, Value


def render(value: Value, width: Optional[int] = None) -> str:
    if width is None:
        width = get_print_width()
    return _render(value, 0, width)


def _render(value: Value, indent: int, width: int) -> str:
    match value:
        case Number(value=n):
            return str(n)
        case String(value=s):
            return json.dumps(s, ensure_ascii=False)
        case Boolean(value=b):
            return "true" if b else "false"
        case Function(arg=arg):
            return f"[Function: {arg}]"
        case Builtin(name=name):
            return f"[Builtin: {name}]"
        case Object(fields=fields):
            return _render_object(fields, indent, width)
    return repr(value)


def _render_object(fields, indent: int, width: int) -> str:
    if not fields:
        return "{}"
    # Children are rendered once, at the indentation of the broken layout. A
    # child too wide there would make the flat line too wide as well.
    items = [f"{k}: {_render(v, indent + 2, width)}" for k, v in fields.items()]
    if not any("\n" in item for item in items):
        flat = "{ " + ", ".join(items) + " }"
        if indent + len(flat) <= width:
            return flat
    pad = " " * (indent + 2)
    return "{\n" + ",\n".join(pad + item for item in items) + "\n" + " " * indent + "}"
