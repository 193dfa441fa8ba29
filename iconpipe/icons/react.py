from __future__ import annotations

import re

from .js import js_call, js_key, js_object, js_string
from .models import IconAsset
from .modules import Import, ModuleSource
from .schema import REACT_SCHEMA
from .svg import SvgNode, parse_svg

ICON_SIZE = "1em"
PURE = "/*#__PURE__*/"

_PROP_RENAMES = {"class": "className", "for": "htmlFor"}
_NAME_SPLIT_RE = re.compile(r"[-:]")


def react_prop_name(name: str) -> str:
    """``stroke-width`` -> ``strokeWidth``, ``xlink:href`` -> ``xlinkHref``."""
    if name in _PROP_RENAMES:
        return _PROP_RENAMES[name]
    if name.startswith(("aria-", "data-")):
        return name
    head, *rest = _NAME_SPLIT_RE.split(name)
    return head + "".join(p[:1].upper() + p[1:] for p in rest)


def _style_key(prop: str) -> str:
    if prop.startswith("--"):
        return prop
    vendor = prop.startswith("-")
    key = react_prop_name(prop.lstrip("-"))
    # React spells vendor prefixes Webkit/Moz/O but keeps "ms" lowercase.
    if vendor and not key.startswith("ms"):
        key = key[:1].upper() + key[1:]
    return key


def _style_object(style: str) -> str:
    entries: list[str] = []
    for decl in style.split(";"):
        prop, sep, value = decl.partition(":")
        if not sep or not prop.strip():
            continue
        entries.append(f"{js_key(_style_key(prop.strip()))}: {js_string(value.strip())}")
    return js_object(entries)


def _props(node: SvgNode) -> list[str]:
    out: list[str] = []
    for name, value in node.attrs:
        rendered = _style_object(value) if name == "style" else js_string(value)
        out.append(f"{js_key(react_prop_name(name))}: {rendered}")
    return out


def _create(tag: str, props: list[str], children: list[str], depth: int) -> str:
    head = [js_string(tag), js_object(props) if props else "null"]
    return PURE + js_call("React.createElement", head, children, depth)


def _element(node: SvgNode, depth: int) -> str:
    return _create(node.tag, _props(node), _children(node.children, depth + 1), depth)


def _children(children: list[SvgNode | str], depth: int) -> list[str]:
    return [_element(c, depth) if isinstance(c, SvgNode) else js_string(c) for c in children]


def _title_expr(existing: SvgNode | None, depth: int) -> str:
    title = REACT_SCHEMA.prop("title").name
    title_id = REACT_SCHEMA.prop("title_id").name
    id_prop = f"id: {title_id}"
    from_prop = _create("title", [id_prop], [title], depth)
    if existing is None:
        return f"{title} ? {from_prop} : null"
    kept = [p for p in _props(existing) if not p.startswith("id: ")]
    original = _create("title", [*kept, id_prop], _children(existing.children, depth + 1), depth)
    return f"{title} === undefined ? {original} : {title} ? {from_prop} : null"


def react_module(icon: IconAsset) -> ModuleSource:
    """forwardRef component rendering the icon's SVG.

    Accepts the schema's title props, forwards ``ref`` to the root ``<svg>``
    and spreads remaining props last so callers can override any attribute.
    """
    root = parse_svg(icon.raw_svg_markup, source=icon.file_name)
    root.set("width", ICON_SIZE)
    root.set("height", ICON_SIZE)

    title = REACT_SCHEMA.prop("title").name
    title_id = REACT_SCHEMA.prop("title_id").name

    children: list[str] = []
    title_done = False
    for child in root.children:
        if isinstance(child, SvgNode) and child.tag == "title" and not title_done:
            children.append(_title_expr(child, 1))
            title_done = True
        elif isinstance(child, SvgNode):
            children.append(_element(child, 1))
        else:
            children.append(js_string(child))
    if not title_done:
        children.insert(0, _title_expr(None, 1))

    props = _props(root) + ["ref: ref", f'"aria-labelledby": {title_id}', "...props"]
    fn_name = f"Svg{icon.component_name}"
    body = "\n".join(
        [
            f"const {fn_name} = ({{ {title}, {title_id}, ...props }}, ref) => {_create('svg', props, children, 0)};",
            f"const ForwardRef = forwardRef({fn_name});",
        ]
    )
    return ModuleSource(
        imports=(
            Import("react", namespace="React"),
            Import("react", names=(("forwardRef", "forwardRef"),)),
        ),
        body=body,
        default_export="ForwardRef",
    )
