"""Export configuration."""

from enum import Enum

from pydantic import Field

from core import FrozenModel
from emitter import EmitOptions, StylingChoice
from registry import Target


class PackageScope(str, Enum):
    """How emitted code is laid out."""
    SINGLE_FILE = "single-file"
    PER_COMPONENT = "per-component"
    FULL_PROJECT = "full-project"


class ExportOptions(FrozenModel):
    """
    Export switches. Each option has one independent effect and any
    combination is valid.
    """

    target: Target = Target.REACT
    styling: StylingChoice = StylingChoice.TAILWIND
    typed_output: bool = Field(default=True, description="Emit TypeScript where the target supports it")
    include_tests: bool = False
    include_story_files: bool = False
    optimize_bundle: bool = False
    package_scope: PackageScope = PackageScope.PER_COMPONENT
    project_name: str = Field(default="page-builder-export", pattern=r"^[a-z0-9][a-z0-9._-]*$")

    def emit_options(self) -> EmitOptions:
        return EmitOptions(typed=self.typed_output, styling=self.styling)
