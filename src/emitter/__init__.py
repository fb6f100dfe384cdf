"""
Code emitters
Per-target translators from element trees to source files.
"""

from registry import ComponentRegistry, Target

from .base import (
    ElementFailure,
    EmitOptions,
    EmitResult,
    Emitter,
    FileDescriptor,
    FileKind,
    SourceLanguage,
    StylingChoice,
)
from .templating import TemplateRenderer, jsx_expression, stringify
from .names import NameAllocator, camel_to_kebab, to_kebab_case, to_pascal_case
from .react import ReactEmitter, TS_TYPES
from .vue import VueEmitter, VUE_TYPES
from .angular import AngularEmitter
from .html import HtmlEmitter
from .auxiliary import StoryEmitter, TestEmitter

EMITTERS: dict[Target, type[Emitter]] = {
    Target.REACT: ReactEmitter,
    Target.VUE: VueEmitter,
    Target.ANGULAR: AngularEmitter,
    Target.HTML: HtmlEmitter,
}


def get_emitter(target: Target | str, registry: ComponentRegistry,
                options: EmitOptions | None = None) -> Emitter:
    """
    Create the emitter for a target.

    Raises:
        ValueError: If the target is not supported
    """
    return EMITTERS[Target(target)](registry, options)


__all__ = [
    "ElementFailure",
    "EmitOptions",
    "EmitResult",
    "Emitter",
    "FileDescriptor",
    "FileKind",
    "SourceLanguage",
    "StylingChoice",
    "TemplateRenderer",
    "jsx_expression",
    "stringify",
    "NameAllocator",
    "camel_to_kebab",
    "to_kebab_case",
    "to_pascal_case",
    "ReactEmitter",
    "VueEmitter",
    "AngularEmitter",
    "HtmlEmitter",
    "StoryEmitter",
    "TestEmitter",
    "TS_TYPES",
    "VUE_TYPES",
    "EMITTERS",
    "get_emitter",
]
