"""Test and story file emitter tests."""

import pytest

from emitter import EmitOptions, FileKind, StoryEmitter, TestEmitter
from registry import Target


@pytest.fixture
def button(store):
    return store.get(store.add({"type": "button", "props": {"text": "Click me"}}))


class TestTestEmitter:
    def test_react_skeleton(self, registry, button):
        file = TestEmitter(registry, Target.REACT).emit_element(button).file

        assert file.path == "components/__tests__/Button.test.tsx"
        assert file.file_kind == FileKind.TEST
        assert "import Button from '../Button'" in file.content
        assert "expect(screen.getByRole('button')).toBeInTheDocument()" in file.content
        assert '"text": "Click me"' in file.content

    def test_vue_skeleton_untyped(self, registry, button):
        file = TestEmitter(registry, Target.VUE, EmitOptions(typed=False)).emit_element(button).file

        assert file.path == "components/__tests__/Button.test.js"
        assert "import { mount } from '@vue/test-utils'" in file.content
        assert "import Button from '../Button.vue'" in file.content

    @pytest.mark.parametrize("target", [Target.ANGULAR, Target.HTML])
    def test_unsupported_targets_are_skipped_silently(self, registry, button, target):
        result = TestEmitter(registry, target).emit_element(button)
        assert result.file is None
        assert result.warnings == []

    def test_unknown_type_is_skipped_with_warning(self, registry, store):
        element = store.get(store.add({"type": "carousel"}))
        result = TestEmitter(registry, Target.REACT).emit_element(element)
        assert result.file is None
        assert "carousel" in result.warnings[0]


class TestStoryEmitter:
    def test_react_story(self, registry, button):
        file = StoryEmitter(registry, Target.REACT).emit_element(button).file

        assert file.path == "components/Button.stories.tsx"
        assert file.file_kind == FileKind.STORY
        assert "import type { Meta, StoryObj } from '@storybook/react'" in file.content
        assert "const meta: Meta<typeof Button> = {" in file.content
        assert "title: 'Components/Button'," in file.content
        assert "text: { control: 'text' }" in file.content
        assert "disabled: { control: 'boolean' }" in file.content
        assert 'variant: { control: \'select\', options: ["primary","secondary","outline","link"] }' in file.content
        assert "export const Default: Story = {" in file.content
        assert "...Default.args," in file.content

    def test_vue_story_untyped(self, registry, button):
        file = StoryEmitter(registry, Target.VUE, EmitOptions(typed=False)).emit_element(button).file

        assert file.path == "components/Button.stories.js"
        assert "import Button from './Button.vue'" in file.content
        assert "Meta" not in file.content
        assert "export const Default = {" in file.content

    def test_unsupported_target(self, registry, button):
        assert StoryEmitter(registry, Target.HTML).emit_element(button).file is None
