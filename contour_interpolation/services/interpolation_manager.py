from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Hashable, Optional
import logging

from ..config import InterpolationConfig
from ..core.annotation_store import AnnotationStore
from ..core.group_resolver import new_interpolation_uid, resolve_interpolation_uid
from ..core.interpolation_engine import InterpolationEngine
from ..core.slice_locator import SliceLocator
from ..core.tool_registry import ToolRegistry
from ..dto import (
    AcceptInterpolationSelector,
    AnnotationCompletedEvent,
    AnnotationModifiedEvent,
    AnnotationRemovedEvent,
)
from ..enums import CHANGE_TYPES_FOR_INTERPOLATION, ChangeTypes, Events
from ..logging_setup import generate_event_id, reset_event_id, set_event_id
from ..models.annotation import Annotation
from ..models.interpolation import InterpolationContextData


class InterpolationManager:
    """Keeps interpolation groups consistent with annotation lifecycle events.

    Handlers run synchronously to completion and never raise for routing
    decisions; errors from the store or engine propagate to the dispatcher.
    """

    def __init__(
        self,
        store: AnnotationStore,
        locator: SliceLocator,
        engine: InterpolationEngine,
        tool_registry: Optional[ToolRegistry] = None,
        mint_uid: Optional[Callable[[], str]] = None,
    ):
        self.store = store
        self.locator = locator
        self.engine = engine
        self.tools = tool_registry if tool_registry is not None else ToolRegistry()
        self._mint_uid = mint_uid or new_interpolation_uid
        self._log = logging.getLogger("interpolation.service.InterpolationManager")

    @classmethod
    def from_config(
        cls,
        config: InterpolationConfig,
        store: AnnotationStore,
        locator: SliceLocator,
        engine: InterpolationEngine,
        **kwargs: Any,
    ) -> "InterpolationManager":
        return cls(store, locator, engine, tool_registry=ToolRegistry(config.tool_names), **kwargs)

    # ---------------------------
    # Registry and wiring
    # ---------------------------

    def add_tool(self, tool_name: str) -> None:
        self.tools.add_tool(tool_name)

    def subscribe(self, event_bus) -> None:
        event_bus.add_event_listener(Events.ANNOTATION_COMPLETED, self.on_annotation_completed)
        event_bus.add_event_listener(Events.ANNOTATION_MODIFIED, self.on_annotation_modified)
        event_bus.add_event_listener(Events.ANNOTATION_REMOVED, self.on_annotation_removed)

    def unsubscribe(self, event_bus) -> None:
        event_bus.remove_event_listener(Events.ANNOTATION_COMPLETED, self.on_annotation_completed)
        event_bus.remove_event_listener(Events.ANNOTATION_MODIFIED, self.on_annotation_modified)
        event_bus.remove_event_listener(Events.ANNOTATION_REMOVED, self.on_annotation_removed)

    @contextmanager
    def _event_scope(self):
        token = set_event_id(generate_event_id())
        try:
            yield
        finally:
            reset_event_id(token)

    def _participates(self, annotation: Optional[Annotation]) -> bool:
        if annotation is None or annotation.metadata is None:
            return False
        return self.tools.contains(annotation.metadata.tool_name)

    def _context_data(self, annotation: Annotation, reason: str, **kwargs: Any) -> Optional[InterpolationContextData]:
        context = self.locator.resolve(annotation)
        if context is None:
            self._log.warning("%s: unable to find viewport for annotation=%s", reason, annotation.annotation_uid)
            return None
        return InterpolationContextData(
            annotation=annotation,
            context=context,
            interpolation_uid=annotation.interpolation_uid,
            **kwargs,
        )

    # ---------------------------
    # Lifecycle handlers
    # ---------------------------

    def on_annotation_completed(self, event: AnnotationCompletedEvent) -> None:
        annotation = event.annotation
        if not self._participates(annotation):
            return
        with self._event_scope():
            context_data = self._context_data(annotation, "completed")
            if context_data is None:
                return
            # Completion means a user authored this instance
            annotation.auto_generated = False

            if annotation.interpolation_uid:
                self._log.debug(
                    "re-completed annotation=%s in group %s",
                    annotation.annotation_uid,
                    annotation.interpolation_uid,
                )
                self.engine.delete_generated(context_data)
                self.engine.synthesize(context_data)
                return

            candidates = self.store.get_annotations(annotation.metadata.tool_name, context_data.group_selector) or []
            annotation.interpolation_uid = resolve_interpolation_uid(annotation, candidates, self._mint_uid)
            context_data.interpolation_uid = annotation.interpolation_uid
            self._log.info(
                "annotation=%s assigned to group %s (segment %s, slice %s)",
                annotation.annotation_uid,
                annotation.interpolation_uid,
                annotation.segment_index,
                annotation.metadata.slice_index,
            )
            self.engine.synthesize(context_data)

    def on_annotation_modified(self, event: AnnotationModifiedEvent) -> None:
        annotation = event.annotation
        change_type = event.change_type or ChangeTypes.HandlesUpdated
        if not self._participates(annotation) or change_type not in CHANGE_TYPES_FOR_INTERPOLATION:
            return
        with self._event_scope():
            context_data = self._context_data(
                annotation,
                "modified",
                is_interpolation_update=change_type == ChangeTypes.InterpolationUpdated,
            )
            if context_data is None:
                return
            annotation.auto_generated = False
            self.engine.synthesize(context_data)

    def on_annotation_removed(self, event: AnnotationRemovedEvent) -> None:
        annotation = event.annotation
        # Removing a generated contour is cleanup, nothing depends on it
        if not self._participates(annotation) or annotation.auto_generated:
            return
        with self._event_scope():
            context_data = self._context_data(annotation, "removed")
            if context_data is None:
                return
            annotation.auto_generated = False
            self.engine.delete_generated(context_data)

    # ---------------------------
    # Accept
    # ---------------------------

    def accept_auto_generated(
        self,
        group_selector: Hashable,
        selector: Optional[AcceptInterpolationSelector] = None,
    ) -> None:
        """Mark generated annotations matching selector as user confirmed.

        Grouping is untouched; only the provenance flag changes.
        """
        selector = selector or AcceptInterpolationSelector()
        accepted = 0
        tool_names = self.tools.names() if selector.tool_names is None else selector.tool_names
        for tool_name in tool_names:
            for annotation in self.store.get_annotations(tool_name, group_selector) or ():
                if not annotation.auto_generated or not selector.matches(annotation):
                    continue
                annotation.auto_generated = False
                accepted += 1
        self._log.debug("accepted %d generated annotations", accepted)
