from __future__ import annotations

import re
from dataclasses import dataclass, field
from xml.etree import ElementTree

SVG_NS = "http://www.w3.org/2000/svg"

# Prefixes emitted for well-known namespaces regardless of how the file spells them.
_KNOWN_PREFIXES = {
    SVG_NS: "",
    "http://www.w3.org/1999/xlink": "xlink",
    "http://www.w3.org/XML/1998/namespace": "xml",
}

_QNAME_RE = re.compile(r"^\{([^}]*)\}(.*)$")
_WS_RE = re.compile(r"\s+")


class SvgParseError(ValueError):
    pass


@dataclass
class SvgNode:
    tag: str
    attrs: list[tuple[str, str]] = field(default_factory=list)
    children: list[SvgNode | str] = field(default_factory=list)

    def set(self, name: str, value: str) -> None:
        """Replace ``name`` in place, or append it when absent."""
        for i, (key, _) in enumerate(self.attrs):
            if key == name:
                self.attrs[i] = (name, value)
                return
        self.attrs.append((name, value))


def _local_name(qname: str, prefixes: dict[str, str]) -> str:
    m = _QNAME_RE.match(qname)
    if not m:
        return qname
    uri, local = m.groups()
    prefix = prefixes.get(uri, "")
    return f"{prefix}:{local}" if prefix else local


def _text(value: str | None) -> str:
    if not value or not value.strip():
        return ""
    return _WS_RE.sub(" ", value).strip()


def _convert(elem: ElementTree.Element, prefixes: dict[str, str]) -> SvgNode:
    node = SvgNode(
        tag=_local_name(elem.tag, prefixes),
        attrs=[(_local_name(k, prefixes), v) for k, v in elem.attrib.items()],
    )
    head = _text(elem.text)
    if head:
        node.children.append(head)
    for child in elem:
        # Comments and processing instructions have a callable tag.
        if isinstance(child.tag, str):
            node.children.append(_convert(child, prefixes))
        tail = _text(child.tail)
        if tail:
            node.children.append(tail)
    return node


def parse_svg(markup: str, *, source: str = "<svg>") -> SvgNode:
    """Parse SVG markup into an ``SvgNode`` tree rooted at ``<svg>``.

    Namespace declarations are hoisted onto the root as ``xmlns`` /
    ``xmlns:prefix`` attributes.
    """
    parser = ElementTree.XMLPullParser(events=("start-ns", "end"))
    declared: list[tuple[str, str]] = []
    root: ElementTree.Element | None = None
    try:
        parser.feed(markup)
        parser.close()
        for event, payload in parser.read_events():
            if event == "start-ns":
                declared.append(payload)
            else:
                root = payload
    except ElementTree.ParseError as e:
        raise SvgParseError(f"{source}: invalid SVG markup: {e}") from e

    if root is None:
        raise SvgParseError(f"{source}: no root element")

    prefixes = dict(_KNOWN_PREFIXES)
    for prefix, uri in declared:
        prefixes.setdefault(uri, prefix)

    node = _convert(root, prefixes)
    if node.tag != "svg":
        raise SvgParseError(f"{source}: root element is <{node.tag}>, expected <svg>")

    xmlns: list[tuple[str, str]] = []
    for prefix, uri in declared:
        name = f"xmlns:{prefix}" if prefix else "xmlns"
        if all(name != k for k, _ in xmlns):
            xmlns.append((name, uri))
    node.attrs = xmlns + node.attrs
    return node
