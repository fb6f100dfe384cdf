"""Pytest configuration and fixtures."""

from datetime import datetime, timezone

import pytest

from core import Settings
from core.id import sequential_factory
from document import DocumentStore
from packager import ExportPackager
from placement import PlacementEngine
from registry import default_registry


FIXED_NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings (explicit values, independent of the environment)."""
    return Settings(
        grid_size=20,
        snap_enabled=True,
        duplicate_offset=20,
        max_history=None,
        log_level="DEBUG",
        enable_cache=False,
        export_workers=1,
        default_target="react",
    )


@pytest.fixture
def registry():
    """Registry with the built-in catalog."""
    return default_registry()


@pytest.fixture
def clock():
    """Fixed clock for deterministic metadata."""
    return lambda: FIXED_NOW


# ============================================================================
# Document Fixtures
# ============================================================================

@pytest.fixture
def store(registry, settings, clock):
    """Empty store with sequential ids (el_1, el_2, ...)."""
    return DocumentStore(registry, settings, id_factory=sequential_factory(), clock=clock)


@pytest.fixture
def engine(store, settings):
    """Placement engine bound to the store."""
    return PlacementEngine(store, settings)


@pytest.fixture
def packager(registry, settings):
    """Export packager without result caching."""
    return ExportPackager(registry, settings)


@pytest.fixture
def sample_tree(store):
    """Section with a heading and a button; returns the section id."""
    return store.add({
        "type": "section",
        "name": "Hero",
        "children": [
            {"type": "heading", "props": {"text": "Welcome"}},
            {"type": "button", "props": {"text": "Click me"}, "position": {"x": 40, "y": 40}},
        ],
    })
