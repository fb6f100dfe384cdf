"""
Auxiliary emitters
Test skeletons and story files per element. Same definition lookup as the
component emitters; unknown types and unsupported targets are skipped.
"""

from core import get_logger, safe_json_dumps
from document.models import Element
from registry import ComponentRegistry, PropKind, Target

from .base import EmitOptions, EmitResult, FileDescriptor, FileKind, SourceLanguage, indent
from .names import NameAllocator

logger = get_logger(__name__)

STORY_CONTROLS: dict[PropKind, str] = {
    PropKind.STRING: "text",
    PropKind.NUMBER: "number",
    PropKind.BOOLEAN: "boolean",
    PropKind.COLOR: "color",
    PropKind.IMAGE: "text",
    PropKind.SELECT: "select",
    PropKind.ARRAY: "object",
    PropKind.OBJECT: "object",
}

TESTABLE_TARGETS = (Target.REACT, Target.VUE)


class _AuxiliaryEmitter:
    kind: FileKind

    def __init__(self, registry: ComponentRegistry, target: Target | str,
                 options: EmitOptions | None = None):
        self.registry = registry
        self.target = Target(target)
        self.options = options or EmitOptions()

    @property
    def language(self) -> SourceLanguage:
        return SourceLanguage.TYPESCRIPT if self.options.typed else SourceLanguage.JAVASCRIPT

    def _skip(self, element: Element, reason: str) -> EmitResult:
        logger.debug("auxiliary_skipped", kind=self.kind.value, id=element.id, reason=reason)
        return EmitResult(None, [f"No {self.kind.value} file for {element.type} ({element.id}): {reason}"])

    def _file(self, path: str, content: str, element: Element) -> FileDescriptor:
        return FileDescriptor(
            path=path,
            name=path.rsplit("/", 1)[-1],
            content=content.rstrip() + "\n",
            file_kind=self.kind,
            source_language=self.language,
            element_id=element.id,
        )


class TestEmitter(_AuxiliaryEmitter):
    """Vitest skeletons for React and Vue components."""

    __test__ = False  # not a pytest test class
    kind = FileKind.TEST

    def emit_element(self, element: Element, names: NameAllocator | None = None) -> EmitResult:
        definition = self.registry.get(element.type)
        if definition is None:
            return self._skip(element, "unknown component type")
        if self.target not in TESTABLE_TARGETS:
            return EmitResult(None)

        names = names or NameAllocator.from_elements([element])
        name = names.name_for(element)
        props = safe_json_dumps(element.props, indent=2, sort_keys=True)

        if self.target == Target.REACT:
            extension = "tsx" if self.options.typed else "jsx"
            content = (
                "import React from 'react'\n"
                "import { render, screen } from '@testing-library/react'\n"
                "import { expect, test } from 'vitest'\n"
                f"import {name} from '../{name}'\n"
                "\n"
                f"test('renders {name} component', () => {{\n"
                f"  render(<{name} />)\n"
                f"  expect(screen.getByRole('{definition.role}')).toBeInTheDocument()\n"
                "})\n"
                "\n"
                "test('accepts custom props', () => {\n"
                f"  const props = {indent(props, 2).lstrip()}\n"
                f"  render(<{name} {{...props}} />)\n"
                "})"
            )
        else:
            extension = "ts" if self.options.typed else "js"
            content = (
                "import { mount } from '@vue/test-utils'\n"
                "import { expect, test } from 'vitest'\n"
                f"import {name} from '../{name}.vue'\n"
                "\n"
                f"test('renders {name} component', () => {{\n"
                f"  const wrapper = mount({name})\n"
                "  expect(wrapper.exists()).toBe(true)\n"
                "})\n"
                "\n"
                "test('accepts custom props', () => {\n"
                f"  const props = {indent(props, 2).lstrip()}\n"
                f"  const wrapper = mount({name}, {{ props }})\n"
                "  expect(wrapper.html()).toBeTruthy()\n"
                "})"
            )

        return EmitResult(self._file(f"components/__tests__/{name}.test.{extension}", content, element))


class StoryEmitter(_AuxiliaryEmitter):
    """Storybook CSF3 stories for React and Vue components."""

    kind = FileKind.STORY

    def arg_types(self, element: Element) -> list[str]:
        definition = self.registry.get(element.type)
        lines = []
        for key, schema in definition.prop_schema.items():
            control = STORY_CONTROLS[schema.kind]
            if schema.kind == PropKind.SELECT and schema.options:
                options = safe_json_dumps([o.value for o in schema.options])
                lines.append(f"{key}: {{ control: '{control}', options: {options} }}")
            else:
                lines.append(f"{key}: {{ control: '{control}' }}")
        return lines

    def emit_element(self, element: Element, names: NameAllocator | None = None) -> EmitResult:
        if self.registry.get(element.type) is None:
            return self._skip(element, "unknown component type")
        if self.target not in TESTABLE_TARGETS:
            return EmitResult(None)

        names = names or NameAllocator.from_elements([element])
        name = names.name_for(element)
        framework = "react" if self.target == Target.REACT else "vue3"
        source = f"./{name}" if self.target == Target.REACT else f"./{name}.vue"
        arg_types = ",\n".join(self.arg_types(element))
        args = safe_json_dumps(element.props, indent=2, sort_keys=True)
        typed = self.options.typed

        header = (
            f"import type {{ Meta, StoryObj }} from '@storybook/{framework}'\n" if typed else ""
        )
        meta_annotation = f": Meta<typeof {name}>" if typed else ""
        story_annotation = ": Story" if typed else ""
        content = (
            header
            + f"import {name} from '{source}'\n"
            "\n"
            f"const meta{meta_annotation} = {{\n"
            f"  title: 'Components/{name}',\n"
            f"  component: {name},\n"
            "  parameters: {\n"
            "    layout: 'centered',\n"
            "  },\n"
            "  argTypes: {\n"
            f"{indent(arg_types, 4)}\n"
            "  },\n"
            "}\n"
            "\n"
            "export default meta\n"
            + ("type Story = StoryObj<typeof meta>\n" if typed else "")
            + "\n"
            f"export const Default{story_annotation} = {{\n"
            f"  args: {indent(args, 2).lstrip()},\n"
            "}\n"
            "\n"
            f"export const Interactive{story_annotation} = {{\n"
            "  args: {\n"
            "    ...Default.args,\n"
            "  },\n"
            "}"
        )
        extension = "ts" if typed else "js"
        if self.target == Target.REACT:
            extension += "x"
        return EmitResult(self._file(f"components/{name}.stories.{extension}", content, element))
