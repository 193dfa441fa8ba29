from __future__ import annotations

import json
import re

_IDENT_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
INDENT = "  "
INLINE_LIMIT = 60


def js_string(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def js_key(name: str) -> str:
    return name if _IDENT_RE.match(name) else js_string(name)


def js_object(entries: list[str]) -> str:
    if not entries:
        return "{}"
    return "{ " + ", ".join(entries) + " }"


def js_call(callee: str, head: list[str], children: list[str], depth: int, *, array: bool = False) -> str:
    """Call expression; short child lists stay inline, longer ones get a line each.

    ``children`` must already be rendered at ``depth + 1``. With ``array`` the
    children are passed as a single array argument (Vue vnode style).
    """
    if not children:
        return f"{callee}({', '.join(head)})"
    if all("\n" not in c for c in children) and sum(len(c) for c in children) <= INLINE_LIMIT:
        if array:
            return f"{callee}({', '.join(head)}, [{', '.join(children)}])"
        return f"{callee}({', '.join(head + children)})"
    pad = INDENT * (depth + 1)
    inner = ",\n".join(pad + c for c in children)
    close = INDENT * depth
    if array:
        return f"{callee}({', '.join(head)}, [\n{inner}\n{close}])"
    return f"{callee}({', '.join(head)},\n{inner}\n{close})"
