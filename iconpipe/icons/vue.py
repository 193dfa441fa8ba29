from __future__ import annotations

import re

from .js import INDENT, js_call, js_key, js_object, js_string
from .models import IconAsset
from .modules import Import, ModuleSource
from .svg import SvgNode, parse_svg

# Each pattern rewrites one attribute on every <svg ...> tag. Attributes that
# are absent are left absent.
_WIDTH_RE = re.compile(r'<svg([^>]*)\s+width="[^"]*"([^>]*)>')
_HEIGHT_RE = re.compile(r'<svg([^>]*)\s+height="[^"]*"([^>]*)>')


def force_em_size(markup: str) -> str:
    markup = _WIDTH_RE.sub(r'<svg\1 width="1em"\2>', markup)
    return _HEIGHT_RE.sub(r'<svg\1 height="1em"\2>', markup)


def _style_object(style: str) -> str:
    entries: list[str] = []
    for decl in style.split(";"):
        prop, sep, value = decl.partition(":")
        if sep and prop.strip():
            entries.append(f"{js_key(prop.strip())}: {js_string(value.strip())}")
    return js_object(entries)


def _props(node: SvgNode) -> str:
    if not node.attrs:
        return "null"
    entries = [
        f"{js_key(name)}: {_style_object(value) if name == 'style' else js_string(value)}"
        for name, value in node.attrs
    ]
    return js_object(entries)


class _RenderGen:
    def __init__(self) -> None:
        self.uses_element_vnode = False
        self.uses_text_vnode = False

    def children(self, node: SvgNode, depth: int) -> tuple[list[str], bool]:
        """Rendered children plus whether they go in an array."""
        if node.children and all(isinstance(c, str) for c in node.children):
            return [js_string(" ".join(node.children))], False
        out: list[str] = []
        for c in node.children:
            if isinstance(c, SvgNode):
                out.append(self.element(c, depth))
            else:
                self.uses_text_vnode = True
                out.append(f"_createTextVNode({js_string(c)})")
        return out, True

    def element(self, node: SvgNode, depth: int, *, block: bool = False) -> str:
        callee = "_createElementBlock" if block else "_createElementVNode"
        if not block:
            self.uses_element_vnode = True
        kids, as_array = self.children(node, depth + 1)
        head = [js_string(node.tag), _props(node)]
        if kids and not as_array:
            return f"{callee}({', '.join(head + kids)})"
        return js_call(callee, head, kids, depth, array=True)


def vue_module(icon: IconAsset) -> ModuleSource:
    root = parse_svg(force_em_size(icon.raw_svg_markup), source=icon.file_name)
    gen = _RenderGen()
    block = gen.element(root, 1, block=True)

    helpers = ["openBlock", "createElementBlock"]
    if gen.uses_element_vnode:
        helpers.append("createElementVNode")
    if gen.uses_text_vnode:
        helpers.append("createTextVNode")

    render = "\n".join(
        [
            "function render(_ctx, _cache) {",
            f"{INDENT}return (_openBlock(), {block})",
            "}",
        ]
    )
    return ModuleSource(
        imports=(Import("vue", names=tuple((h, f"_{h}") for h in helpers)),),
        body="",
        default_export=render,
    )
