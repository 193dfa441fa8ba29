"""Per-framework component contracts.

The declaration files are rendered from these schemas, and the React
generator reads the same schema to decide which props it destructures.
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import Framework


@dataclass(frozen=True)
class PropSpec:
    role: str
    name: str
    ts_type: str
    optional: bool = True

    def declaration(self) -> str:
        return f"{self.name}{'?' if self.optional else ''}: {self.ts_type}"


@dataclass(frozen=True)
class ComponentSchema:
    framework: Framework
    type_import: str
    base_props: str
    component_type: str  # "{props}" is replaced by the full props type
    extra_props: tuple[PropSpec, ...] = ()

    def prop(self, role: str) -> PropSpec:
        for p in self.extra_props:
            if p.role == role:
                return p
        raise KeyError(f"{self.framework.value} schema has no '{role}' prop")

    def props_type(self) -> str:
        parts = [self.base_props]
        if self.extra_props:
            parts.append("{ " + ", ".join(p.declaration() for p in self.extra_props) + " }")
        return " & ".join(parts)

    def declaration(self, component_name: str) -> str:
        component_type = self.component_type.replace("{props}", self.props_type())
        return "\n".join(
            [
                self.type_import,
                f"declare const {component_name}: {component_type};",
                f"export default {component_name};",
            ]
        ) + "\n"


REACT_SCHEMA = ComponentSchema(
    framework=Framework.react,
    type_import="import * as React from 'react';",
    base_props="React.PropsWithoutRef<React.SVGProps<SVGSVGElement>>",
    component_type="React.ForwardRefExoticComponent<{props} & React.RefAttributes<SVGSVGElement>>",
    extra_props=(
        PropSpec(role="title", name="title", ts_type="string"),
        PropSpec(role="title_id", name="titleId", ts_type="string"),
    ),
)

VUE_SCHEMA = ComponentSchema(
    framework=Framework.vue,
    type_import="import type { FunctionalComponent, HTMLAttributes, VNodeProps } from 'vue';",
    base_props="HTMLAttributes & VNodeProps",
    component_type="FunctionalComponent<{props}>",
)

SCHEMAS: dict[Framework, ComponentSchema] = {
    Framework.react: REACT_SCHEMA,
    Framework.vue: VUE_SCHEMA,
}
