"""
Annotation storage seam.

The coordinator only needs `get_annotations`; the in-memory store is the
reference implementation used by the engine base class and the tests.
"""

from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Dict, Hashable, List, Optional, Tuple
import logging
import threading

from ..enums import Events
from ..dto import AnnotationRemovedEvent
from ..models.annotation import Annotation


class AnnotationStore(ABC):
  """Holds annotations keyed by tool name and group selector."""

  @abstractmethod
  def get_annotations(self, tool_name: str, group_selector: Hashable) -> List[Annotation]:
    """Return the annotations of tool_name visible in group_selector (possibly empty)."""

  @abstractmethod
  def remove_annotation(self, annotation_uid: str) -> bool:
    """Remove an annotation by uid. Returns True if it existed."""


class InMemoryAnnotationStore(AnnotationStore):
  """Dict-backed store preserving insertion order.

    When an event bus is attached, removals dispatch ANNOTATION_REMOVED so the
    interpolation manager can cascade.
    """

  def __init__(self, event_bus=None):
    self._by_key: Dict[Tuple[Hashable, str], "OrderedDict[str, Annotation]"] = {}
    self._index: Dict[str, Tuple[Hashable, str]] = {}
    self._event_bus = event_bus
    self._lock = threading.RLock()
    self._log = logging.getLogger("interpolation.core.InMemoryAnnotationStore")

  def add_annotation(self, annotation: Annotation, group_selector: Hashable) -> None:
    if annotation.metadata is None:
      raise ValueError(f"Annotation {annotation.annotation_uid} has no metadata")
    key = (group_selector, annotation.metadata.tool_name)
    with self._lock:
      if annotation.annotation_uid in self._index:
        raise ValueError(f"Annotation already stored: {annotation.annotation_uid}")
      self._by_key.setdefault(key, OrderedDict())[annotation.annotation_uid] = annotation
      self._index[annotation.annotation_uid] = key
    self._log.debug("add_annotation uid=%s tool=%s", annotation.annotation_uid, key[1])

  def get_annotations(self, tool_name: str, group_selector: Hashable) -> List[Annotation]:
    with self._lock:
      bucket = self._by_key.get((group_selector, tool_name))
      return list(bucket.values()) if bucket else []

  def get_annotation(self, annotation_uid: str) -> Optional[Annotation]:
    with self._lock:
      key = self._index.get(annotation_uid)
      if key is None:
        return None
      return self._by_key[key].get(annotation_uid)

  def remove_annotation(self, annotation_uid: str) -> bool:
    with self._lock:
      key = self._index.pop(annotation_uid, None)
      if key is None:
        return False
      annotation = self._by_key[key].pop(annotation_uid)
      if not self._by_key[key]:
        del self._by_key[key]
    self._log.debug("remove_annotation uid=%s tool=%s", annotation_uid, key[1])
    if self._event_bus is not None:
      self._event_bus.dispatch(Events.ANNOTATION_REMOVED, AnnotationRemovedEvent(annotation=annotation))
    return True

  def __len__(self) -> int:
    with self._lock:
      return len(self._index)
