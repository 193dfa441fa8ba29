"""Module-format independent description of a generated JS file.

Both output formats are rendered from the same ``ModuleSource``, so the ESM
and CommonJS builds of an icon always export the same value.
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import ModuleFormat


@dataclass(frozen=True)
class Import:
    module: str
    names: tuple[tuple[str, str], ...] = ()  # (imported, local)
    namespace: str | None = None

    def esm(self) -> str:
        if self.namespace:
            return f'import * as {self.namespace} from "{self.module}";'
        specs = ", ".join(name if name == local else f"{name} as {local}" for name, local in self.names)
        return f'import {{ {specs} }} from "{self.module}";'

    def cjs(self) -> str:
        if self.namespace:
            return f'const {self.namespace} = require("{self.module}");'
        specs = ", ".join(name if name == local else f"{name}: {local}" for name, local in self.names)
        return f'const {{ {specs} }} = require("{self.module}");'


@dataclass(frozen=True)
class ModuleSource:
    imports: tuple[Import, ...]
    body: str
    default_export: str

    def _export_terminator(self) -> str:
        return "" if self.default_export.rstrip().endswith("}") else ";"

    def render(self, module_format: ModuleFormat) -> str:
        if module_format == ModuleFormat.esm:
            head = [imp.esm() for imp in self.imports]
            tail = f"export default {self.default_export}{self._export_terminator()}"
        else:
            head = ['"use strict";', *(imp.cjs() for imp in self.imports)]
            tail = f"module.exports = {self.default_export};"
        parts = ["\n".join(head)]
        if self.body:
            parts.append(self.body)
        parts.append(tail)
        return "\n\n".join(parts) + "\n"


def index_source(component_names: list[str], module_format: ModuleFormat) -> str:
    """Barrel file re-exporting every component's default export."""
    if module_format == ModuleFormat.esm:
        lines = [f"export {{ default as {name} }} from './{name}';" for name in component_names]
    else:
        lines = ['"use strict";'] + [f"module.exports.{name} = require('./{name}');" for name in component_names]
    return "\n".join(lines) + "\n"
