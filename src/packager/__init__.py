"""
Export packager
Assembles emitted files, scaffolding, dependencies and metrics.
"""

from .options import ExportOptions, PackageScope
from .dependencies import (
    Dependency,
    DependencyKind,
    build_instructions,
    dev_dependencies,
    framework_dependencies,
    resolve_dependencies,
    scripts,
)
from .project_files import project_files
from .packager import (
    ExportError,
    ExportMetrics,
    ExportPackager,
    ExportResult,
    compute_metrics,
    performance_score,
)

__all__ = [
    "ExportOptions",
    "PackageScope",
    "Dependency",
    "DependencyKind",
    "build_instructions",
    "dev_dependencies",
    "framework_dependencies",
    "resolve_dependencies",
    "scripts",
    "project_files",
    "ExportError",
    "ExportMetrics",
    "ExportPackager",
    "ExportResult",
    "compute_metrics",
    "performance_score",
]
