"""
Core interpolation coordinator components.
"""

from .annotation_store import AnnotationStore, InMemoryAnnotationStore
from .event_bus import EventBus
from .group_resolver import compatible_annotations, new_interpolation_uid, resolve_interpolation_uid
from .interpolation_engine import InterpolationEngine, StoreBackedInterpolationEngine
from .slice_locator import SliceLocator, Viewport, ViewportSliceLocator
from .tool_registry import ToolRegistry

__all__ = [
  "AnnotationStore",
  "InMemoryAnnotationStore",
  "EventBus",
  "compatible_annotations",
  "new_interpolation_uid",
  "resolve_interpolation_uid",
  "InterpolationEngine",
  "StoreBackedInterpolationEngine",
  "SliceLocator",
  "Viewport",
  "ViewportSliceLocator",
  "ToolRegistry",
]
