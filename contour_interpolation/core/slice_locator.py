"""
Resolution of an annotation to the viewport (and slice stack) showing it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Hashable, List, Optional
import logging
import threading

import numpy as np

from ..models.annotation import Annotation, Vector3
from ..models.interpolation import SliceContext

# Normals closer than this to (anti)parallel count as the same slicing plane
PARALLEL_TOLERANCE = 1e-3


class SliceLocator(ABC):

  @abstractmethod
  def resolve(self, annotation: Annotation) -> Optional[SliceContext]:
    """Return the slice context of annotation, or None when no viewport shows it."""


@dataclass
class Viewport:
  """A stack viewport as seen by the locator."""

  viewport_id: str
  frame_of_reference_uid: str
  view_plane_normal: Vector3
  number_of_slices: int
  current_slice_index: int = 0
  group_selector: Optional[Hashable] = None

  @property
  def selector(self) -> Hashable:
    return self.group_selector if self.group_selector is not None else self.frame_of_reference_uid


def is_parallel(a: Vector3, b: Vector3, tolerance: float = PARALLEL_TOLERANCE) -> bool:
  va = np.asarray(a, dtype=float)
  vb = np.asarray(b, dtype=float)
  na, nb = np.linalg.norm(va), np.linalg.norm(vb)
  if na == 0 or nb == 0:
    return False
  return abs(abs(float(np.dot(va, vb)) / (na * nb)) - 1.0) < tolerance


class ViewportSliceLocator(SliceLocator):
  """Finds the first registered viewport on the annotation's frame of reference and plane."""

  def __init__(self):
    self._viewports: Dict[str, Viewport] = {}
    self._lock = threading.RLock()
    self._log = logging.getLogger("interpolation.core.ViewportSliceLocator")

  def register_viewport(self, viewport: Viewport) -> None:
    with self._lock:
      self._viewports[viewport.viewport_id] = viewport
    self._log.debug("register_viewport id=%s for=%s", viewport.viewport_id, viewport.frame_of_reference_uid)

  def unregister_viewport(self, viewport_id: str) -> bool:
    with self._lock:
      return self._viewports.pop(viewport_id, None) is not None

  def viewports(self) -> List[Viewport]:
    with self._lock:
      return list(self._viewports.values())

  def resolve(self, annotation: Annotation) -> Optional[SliceContext]:
    metadata = annotation.metadata
    if metadata is None:
      return None
    for viewport in self.viewports():
      if viewport.frame_of_reference_uid != metadata.frame_of_reference_uid:
        continue
      if not is_parallel(viewport.view_plane_normal, metadata.view_plane_normal):
        continue
      return SliceContext(
        viewport_id=viewport.viewport_id,
        group_selector=viewport.selector,
        number_of_slices=viewport.number_of_slices,
        current_slice_index=viewport.current_slice_index,
      )
    return None
