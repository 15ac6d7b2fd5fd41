"""
Interpolation group coordinator for contour annotations on slice stacks.

Usage:
    from contour_interpolation import (
        EventBus, InMemoryAnnotationStore, ViewportSliceLocator, InterpolationManager,
    )

    bus = EventBus()
    store = InMemoryAnnotationStore(event_bus=bus)
    manager = InterpolationManager(store, ViewportSliceLocator(), engine)
    manager.add_tool("PlanarFreehandContourSegmentationTool")
    manager.subscribe(bus)

    # Completion, modification and removal events now keep groups in sync
    bus.dispatch(Events.ANNOTATION_COMPLETED, AnnotationCompletedEvent(annotation=annotation))

    # Confirm generated contours of segment 1
    manager.accept_auto_generated(selector_key, AcceptInterpolationSelector(segment_index=1))
"""

from .config import InterpolationConfig, load_config
from .core import (
    AnnotationStore,
    EventBus,
    InMemoryAnnotationStore,
    InterpolationEngine,
    SliceLocator,
    StoreBackedInterpolationEngine,
    ToolRegistry,
    Viewport,
    ViewportSliceLocator,
    resolve_interpolation_uid,
)
from .dto import (
    AcceptInterpolationSelector,
    AnnotationCompletedEvent,
    AnnotationModifiedEvent,
    AnnotationRemovedEvent,
)
from .enums import ChangeTypes, Events
from .logging_setup import setup_logging
from .models import (
    Annotation,
    AnnotationData,
    AnnotationMetadata,
    InterpolationContextData,
    Segmentation,
    SliceContext,
)
from .services import InterpolationManager

__version__ = "0.1.0"

__all__ = [
    "InterpolationConfig",
    "load_config",
    "AnnotationStore",
    "EventBus",
    "InMemoryAnnotationStore",
    "InterpolationEngine",
    "SliceLocator",
    "StoreBackedInterpolationEngine",
    "ToolRegistry",
    "Viewport",
    "ViewportSliceLocator",
    "resolve_interpolation_uid",
    "AcceptInterpolationSelector",
    "AnnotationCompletedEvent",
    "AnnotationModifiedEvent",
    "AnnotationRemovedEvent",
    "ChangeTypes",
    "Events",
    "setup_logging",
    "Annotation",
    "AnnotationData",
    "AnnotationMetadata",
    "InterpolationContextData",
    "Segmentation",
    "SliceContext",
    "InterpolationManager",
]
