"""
Export Packager
Turns element trees into a deliverable: component files, optional tests and
stories, project scaffolding, dependency list, build steps and metrics.
"""

import math
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from pydantic import BaseModel, Field

from core import LRUCache, LogContext, Settings, get_logger, get_settings, hash_object
from core.id import new_export_id
from document.models import Element
from emitter import (
    Emitter,
    EmitResult,
    FileDescriptor,
    NameAllocator,
    StoryEmitter,
    StylingChoice,
    TestEmitter,
    get_emitter,
)
from registry import ComponentRegistry, Target

from .dependencies import Dependency, build_instructions, resolve_dependencies
from .options import ExportOptions, PackageScope
from .project_files import project_files

if TYPE_CHECKING:
    from document.store import DocumentStore

logger = get_logger(__name__)


class ExportError(BaseModel):
    """A failure attributed to one element (or to the whole run)."""
    element_id: str | None = None
    element_type: str | None = None
    message: str


class ExportMetrics(BaseModel):
    component_count: int = 0
    file_count: int = 0
    total_lines: int = 0
    bundle_size: int = Field(default=0, description="Total content size in bytes")
    bundle_size_label: str = "0KB"
    performance_score: int = Field(default=100, ge=0, le=100)


class ExportResult(BaseModel):
    """Everything one export run produced."""

    export_id: str
    success: bool
    target: Target
    files: list[FileDescriptor] = Field(default_factory=list)
    dependencies: list[Dependency] = Field(default_factory=list)
    build_instructions: list[str] = Field(default_factory=list)
    metrics: ExportMetrics = Field(default_factory=ExportMetrics)
    warnings: list[str] = Field(default_factory=list)
    errors: list[ExportError] = Field(default_factory=list)
    duration_ms: float = 0.0

    def file(self, path: str) -> FileDescriptor | None:
        return next((f for f in self.files if f.path == path), None)

    @property
    def paths(self) -> list[str]:
        return [f.path for f in self.files]


@dataclass
class _Batch:
    """Files, warnings and errors produced for one root tree."""

    files: list[FileDescriptor] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[ExportError] = field(default_factory=list)

    def take(self, result: EmitResult) -> None:
        self.warnings.extend(result.warnings)
        if result.file is None:
            return
        if result.file.placeholder:
            logger.debug("placeholder_skipped", path=result.file.path)
            return
        self.files.append(result.file)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 3)


def performance_score(component_count: int, options: ExportOptions) -> int:
    """Heuristic 0..100 score: large trees cost points, lean options earn some."""
    score = 100
    if component_count > 20:
        score -= 10
    if component_count > 50:
        score -= 20
    if options.optimize_bundle:
        score += 5
    if options.typed_output:
        score += 5
    if options.styling == StylingChoice.TAILWIND:
        score += 5
    return max(0, min(100, score))


def compute_metrics(roots: list[Element], files: list[FileDescriptor],
                    options: ExportOptions) -> ExportMetrics:
    component_count = sum(root.count() for root in roots)
    bundle_size = sum(len(f.content.encode("utf-8")) for f in files)
    return ExportMetrics(
        component_count=component_count,
        file_count=len(files),
        total_lines=sum(f.line_count for f in files),
        bundle_size=bundle_size,
        bundle_size_label=f"{math.floor(bundle_size / 1024 + 0.5)}KB",
        performance_score=performance_score(component_count, options),
    )


class ExportPackager:
    """
    Export element trees to a target framework.

    Export never raises: per-element failures become ``ExportError`` entries
    and an unexpected failure of the whole run yields a single synthetic
    error with no files.
    """

    def __init__(
        self,
        registry: ComponentRegistry,
        settings: Settings | None = None,
        cache: LRUCache[ExportResult] | None = None,
    ):
        self.registry = registry
        self.settings = settings or get_settings()
        if cache is None and self.settings.enable_cache:
            cache = LRUCache[ExportResult](
                max_size=self.settings.cache_size,
                ttl_seconds=self.settings.cache_ttl,
            )
        self.cache = cache

    def default_options(self) -> ExportOptions:
        return ExportOptions(
            target=Target(self.settings.default_target),
            project_name=self.settings.project_name,
        )

    def export_document(self, store: "DocumentStore",
                        options: ExportOptions | None = None) -> ExportResult:
        """Export the current tree of a document store."""
        return self.export_project(store.tree(), options)

    def export_project(self, elements: Iterable[Element],
                       options: ExportOptions | None = None) -> ExportResult:
        """
        Export root element trees.

        Args:
            elements: Root elements, each carrying its full subtree
            options: Export switches (settings defaults when omitted)

        Returns:
            ExportResult; ``success`` is False whenever any error was recorded
        """
        options = options or self.default_options()
        export_id = new_export_id()
        started = time.perf_counter()

        with LogContext(export_id=export_id, target=options.target.value):
            try:
                roots = list(elements)
                key = self._cache_key(roots, options)
                if key is not None and self.cache is not None:
                    cached = self.cache.get(key)
                    if cached is not None:
                        logger.info("export_cache_hit", files=len(cached.files))
                        return cached.model_copy(deep=True, update={
                            "export_id": export_id,
                            "duration_ms": _elapsed_ms(started),
                        })

                result = self._export(export_id, roots, options)
                result.duration_ms = _elapsed_ms(started)
                if key is not None and self.cache is not None:
                    self.cache.set(key, result.model_copy(deep=True))

                logger.info(
                    "export_completed",
                    success=result.success,
                    files=result.metrics.file_count,
                    warnings=len(result.warnings),
                    errors=len(result.errors),
                    duration_ms=result.duration_ms,
                )
                return result
            except Exception as e:
                logger.error("export_failed", error=str(e), exc_info=True)
                return ExportResult(
                    export_id=export_id,
                    success=False,
                    target=options.target,
                    errors=[ExportError(message=f"Export failed: {e}")],
                )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _export(self, export_id: str, roots: list[Element], options: ExportOptions) -> ExportResult:
        emit_options = options.emit_options()
        emitter = get_emitter(options.target, self.registry, emit_options)
        auxiliary = []
        if options.include_tests:
            auxiliary.append(TestEmitter(self.registry, options.target, emit_options))
        if options.include_story_files:
            auxiliary.append(StoryEmitter(self.registry, options.target, emit_options))
        names = NameAllocator.from_elements(roots)

        batches: list[_Batch] = []
        if options.package_scope == PackageScope.SINGLE_FILE:
            page = _Batch()
            result = emitter.emit_page(roots, names)
            page.take(result)
            page.errors.extend(self._element_error(f.element, f.error) for f in result.failures)
            batches.append(page)
            batches.extend(self._run(roots, lambda root: self._emit_auxiliary(root, auxiliary, names)))
        else:
            batches.extend(
                self._run(roots, lambda root: self._emit_tree(root, emitter, auxiliary, names))
            )

        files: dict[str, FileDescriptor] = {}
        warnings: list[str] = []
        errors: list[ExportError] = []
        for batch in batches:
            for descriptor in batch.files:
                files.setdefault(descriptor.path, descriptor)
            warnings.extend(w for w in batch.warnings if w not in warnings)
            errors.extend(batch.errors)

        dependencies: list[Dependency] = []
        instructions: list[str] = []
        if options.package_scope == PackageScope.FULL_PROJECT:
            component_names = [names.name_for(node) for root in roots for node in root.walk()
                               if self.registry.has(node.type)]
            for descriptor in project_files(options, list(dict.fromkeys(component_names))):
                files.setdefault(descriptor.path, descriptor)
            dependencies = resolve_dependencies(options)
            instructions = build_instructions(options)

        emitted = list(files.values())
        return ExportResult(
            export_id=export_id,
            success=not errors,
            target=options.target,
            files=emitted,
            dependencies=dependencies,
            build_instructions=instructions,
            metrics=compute_metrics(roots, emitted, options),
            warnings=warnings,
            errors=errors,
        )

    def _run(self, roots: list[Element], work) -> list[_Batch]:
        """Run ``work`` per root tree, in a thread pool when configured; order is kept."""
        workers = min(self.settings.export_workers, len(roots))
        if workers <= 1:
            return [work(root) for root in roots]
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="export") as pool:
            return list(pool.map(work, roots))

    def _emit_tree(self, root: Element, emitter: Emitter, auxiliary: list,
                   names: NameAllocator) -> _Batch:
        batch = _Batch()
        for node in root.walk():
            try:
                batch.take(emitter.emit_element(node, names))
                for aux in auxiliary:
                    batch.take(aux.emit_element(node, names))
            except Exception as e:
                batch.errors.append(self._element_error(node, e))
        return batch

    def _emit_auxiliary(self, root: Element, auxiliary: list, names: NameAllocator) -> _Batch:
        batch = _Batch()
        for node in root.walk():
            try:
                for aux in auxiliary:
                    batch.take(aux.emit_element(node, names))
            except Exception as e:
                batch.errors.append(self._element_error(node, e))
        return batch

    @staticmethod
    def _element_error(node: Element, error: Exception) -> ExportError:
        logger.warning("element_export_failed", id=node.id, type=node.type, error=str(error))
        return ExportError(
            element_id=node.id,
            element_type=node.type,
            message=f"Failed to generate component {node.name}: {error}",
        )

    def _cache_key(self, roots: list[Element], options: ExportOptions) -> str | None:
        if self.cache is None:
            return None
        types = sorted({node.type for root in roots for node in root.walk()})
        definitions = [
            self.registry.get(t).model_dump(mode="json") if self.registry.has(t) else None
            for t in types
        ]
        payload = {
            "elements": [root.model_dump(mode="json") for root in roots],
            "definitions": definitions,
            "options": options.model_dump(mode="json"),
        }
        try:
            return hash_object(payload)
        except TypeError:
            logger.debug("export_uncacheable")
            return None
