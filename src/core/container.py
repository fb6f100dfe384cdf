"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from document import DocumentStore
from packager import ExportPackager
from placement import PlacementEngine
from registry import ComponentRegistry, default_registry

from .config import Settings, get_settings
from .logging_config import configure_from_settings


class BuilderModule(Module):
    """Page builder services."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings

    @singleton
    @provider
    def provide_registry(self) -> ComponentRegistry:
        """Provide registry preloaded with the built-in catalog."""
        return default_registry()

    @singleton
    @provider
    def provide_store(self, registry: ComponentRegistry, settings: Settings) -> DocumentStore:
        return DocumentStore(registry, settings)

    @singleton
    @provider
    def provide_engine(self, store: DocumentStore, settings: Settings) -> PlacementEngine:
        """Provide placement engine bound to the shared store."""
        return PlacementEngine(store, settings)

    @singleton
    @provider
    def provide_packager(self, registry: ComponentRegistry, settings: Settings) -> ExportPackager:
        return ExportPackager(registry, settings)


def create_container(settings: Settings | None = None, configure_logs: bool = False) -> Injector:
    """Create configured injector."""
    module = BuilderModule(settings)
    if configure_logs:
        configure_from_settings(module.settings)
    return Injector([module])
