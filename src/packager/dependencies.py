"""
Dependency tables
Fixed lookups from export options to npm packages, scripts and build steps.
"""

from enum import Enum

from pydantic import BaseModel

from emitter import StylingChoice
from registry import Target

from .options import ExportOptions


class DependencyKind(str, Enum):
    DEPENDENCY = "dependency"
    DEV_DEPENDENCY = "devDependency"


class Dependency(BaseModel):
    """One npm package of the generated project."""
    name: str
    version: str
    kind: DependencyKind
    description: str = ""
    required: bool = True


FRAMEWORK_DEPENDENCIES: dict[Target, dict[str, str]] = {
    Target.REACT: {"react": "^18.2.0", "react-dom": "^18.2.0"},
    Target.VUE: {"vue": "^3.3.0"},
    Target.ANGULAR: {
        "@angular/core": "^16.0.0",
        "@angular/common": "^16.0.0",
        "@angular/platform-browser": "^16.0.0",
    },
    Target.HTML: {},
}

STYLING_DEPENDENCIES: dict[StylingChoice, dict[str, str]] = {
    StylingChoice.TAILWIND: {"tailwindcss": "^3.3.0", "autoprefixer": "^10.4.14", "postcss": "^8.4.24"},
    StylingChoice.STYLED_COMPONENTS: {"styled-components": "^6.0.0"},
    StylingChoice.EMOTION: {"@emotion/react": "^11.11.0", "@emotion/styled": "^11.11.0"},
    StylingChoice.CSS_MODULES: {},
    StylingChoice.VANILLA_CSS: {},
}

BUILD_TOOLING: dict[Target, dict[str, str]] = {
    Target.REACT: {"vite": "^4.4.0", "@vitejs/plugin-react": "^4.0.0"},
    Target.VUE: {"vite": "^4.4.0", "@vitejs/plugin-vue": "^4.2.0"},
    Target.ANGULAR: {"@angular/cli": "^16.0.0", "@angular/compiler-cli": "^16.0.0"},
    Target.HTML: {"vite": "^4.4.0"},
}

TYPED_TOOLING: dict[Target, dict[str, str]] = {
    Target.REACT: {"typescript": "^5.0.0", "@types/react": "^18.2.0", "@types/react-dom": "^18.2.0"},
    Target.VUE: {"typescript": "^5.0.0", "vue-tsc": "^1.8.0"},
    Target.ANGULAR: {"typescript": "^5.0.0"},
    Target.HTML: {},
}

TEST_TOOLING: dict[Target, dict[str, str]] = {
    Target.REACT: {
        "vitest": "^0.34.0",
        "@testing-library/react": "^13.4.0",
        "@testing-library/jest-dom": "^5.17.0",
    },
    Target.VUE: {"vitest": "^0.34.0", "@vue/test-utils": "^2.4.0"},
    Target.ANGULAR: {},
    Target.HTML: {},
}

STORY_TOOLING: dict[Target, dict[str, str]] = {
    Target.REACT: {"@storybook/react": "^7.0.0", "@storybook/addon-essentials": "^7.0.0"},
    Target.VUE: {"@storybook/vue3": "^7.0.0", "@storybook/addon-essentials": "^7.0.0"},
    Target.ANGULAR: {},
    Target.HTML: {},
}


def uses_vite(target: Target) -> bool:
    return "vite" in BUILD_TOOLING[target]


def framework_dependencies(options: ExportOptions) -> dict[str, str]:
    """Runtime dependencies: framework table plus styling table."""
    return {**FRAMEWORK_DEPENDENCIES[options.target], **STYLING_DEPENDENCIES[options.styling]}


def dev_dependencies(options: ExportOptions) -> dict[str, str]:
    """Build, typing, test and story tooling implied by the options."""
    deps = dict(BUILD_TOOLING[options.target])
    if options.typed_output:
        deps.update(TYPED_TOOLING[options.target])
    if options.include_tests:
        deps.update(TEST_TOOLING[options.target])
    if options.include_story_files:
        deps.update(STORY_TOOLING[options.target])
    return deps


def resolve_dependencies(options: ExportOptions) -> list[Dependency]:
    runtime = [
        Dependency(name=name, version=version, kind=DependencyKind.DEPENDENCY,
                   description=f"{options.target.value} runtime dependency")
        for name, version in framework_dependencies(options).items()
    ]
    tooling = [
        Dependency(name=name, version=version, kind=DependencyKind.DEV_DEPENDENCY,
                   description="Development dependency", required=False)
        for name, version in dev_dependencies(options).items()
    ]
    return runtime + tooling


def scripts(options: ExportOptions) -> dict[str, str]:
    if uses_vite(options.target):
        result = {"dev": "vite", "build": "vite build", "preview": "vite preview"}
    else:
        result = {"dev": "ng serve", "build": "ng build"}

    if options.include_tests and TEST_TOOLING[options.target]:
        result["test"] = "vitest"
        result["test:ui"] = "vitest --ui"
    if options.include_story_files and STORY_TOOLING[options.target]:
        result["storybook"] = "storybook dev -p 6006"
        result["build-storybook"] = "storybook build"
    if options.typed_output and TYPED_TOOLING[options.target]:
        result["type-check"] = "vue-tsc --noEmit" if options.target == Target.VUE else "tsc --noEmit"
    return result


def build_instructions(options: ExportOptions) -> list[str]:
    available = scripts(options)
    steps = ["npm install", "npm run dev"]
    if "test" in available:
        steps.append("npm run test")
    if "storybook" in available:
        steps.append("npm run storybook")
    steps.append("npm run build")
    return steps
