"""
Pytest configuration and shared fixtures for interpolation coordinator tests.
"""

import itertools
from typing import Generator
from unittest.mock import Mock

import pytest

from contour_interpolation.core.annotation_store import AnnotationStore, InMemoryAnnotationStore
from contour_interpolation.core.event_bus import EventBus
from contour_interpolation.core.interpolation_engine import InterpolationEngine
from contour_interpolation.core.slice_locator import SliceLocator, Viewport, ViewportSliceLocator
from contour_interpolation.core.tool_registry import ToolRegistry
from contour_interpolation.models.interpolation import SliceContext
from contour_interpolation.services.interpolation_manager import InterpolationManager
from tests.fixtures.factories import AXIAL_NORMAL, CONTOUR_TOOL, FRAME_OF_REFERENCE, GROUP_SELECTOR, GapFillingEngine


@pytest.fixture
def uid_minter():
  """Deterministic uid minting: uid-1, uid-2, ..."""
  counter = itertools.count(1)
  return lambda: f"uid-{next(counter)}"

@pytest.fixture
def slice_context() -> SliceContext:
  return SliceContext(
    viewport_id="axial",
    group_selector=GROUP_SELECTOR,
    number_of_slices=20,
    current_slice_index=0,
  )

# ---------------- mocked collaborators ----------------

@pytest.fixture
def mock_store() -> Mock:
  store = Mock(spec=AnnotationStore)
  store.get_annotations.return_value = []
  return store

@pytest.fixture
def mock_locator(slice_context: SliceContext) -> Mock:
  locator = Mock(spec=SliceLocator)
  locator.resolve.return_value = slice_context
  return locator

@pytest.fixture
def mock_engine() -> Mock:
  return Mock(spec=InterpolationEngine)

@pytest.fixture
def manager(mock_store: Mock, mock_locator: Mock, mock_engine: Mock, uid_minter) -> InterpolationManager:
  """InterpolationManager with mocked collaborators and the contour tool registered."""
  return InterpolationManager(
    mock_store,
    mock_locator,
    mock_engine,
    tool_registry=ToolRegistry([CONTOUR_TOOL]),
    mint_uid=uid_minter,
  )

# ---------------- wired reference collaborators ----------------

@pytest.fixture
def event_bus() -> EventBus:
  return EventBus()

@pytest.fixture
def store(event_bus: EventBus) -> InMemoryAnnotationStore:
  return InMemoryAnnotationStore(event_bus=event_bus)

@pytest.fixture
def locator() -> ViewportSliceLocator:
  locator = ViewportSliceLocator()
  locator.register_viewport(
    Viewport(
      viewport_id="axial",
      frame_of_reference_uid=FRAME_OF_REFERENCE,
      view_plane_normal=AXIAL_NORMAL,
      number_of_slices=20,
    ))
  return locator

@pytest.fixture
def engine(store: InMemoryAnnotationStore) -> GapFillingEngine:
  return GapFillingEngine(store)

@pytest.fixture
def wired_manager(store, locator, engine, event_bus, uid_minter) -> Generator[InterpolationManager, None, None]:
  """Manager subscribed to the event bus over the in-memory store."""
  manager = InterpolationManager(store, locator, engine, mint_uid=uid_minter)
  manager.add_tool(CONTOUR_TOOL)
  manager.subscribe(event_bus)
  try:
    yield manager
  finally:
    manager.unsubscribe(event_bus)