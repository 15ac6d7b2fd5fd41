"""
Interpolation group assignment.

Decides which interpolation uid a newly completed, ungrouped annotation joins.
Segment index and slicing plane are the primary signal; spatial proximity is
only used to choose between several existing groups.

A uid held by a user drawn contour on the target's own slice is never
reused, even when it is the only candidate: contours sharing a uid on one
slice would break the one-keyframe-per-slice rule of a group. Drawing a second
contour on an image therefore starts a separate group, matching the contour
tools' rule that contours sharing an interpolation uid with another contour on
the same slice are excluded from the choice.
"""

from typing import Callable, Iterable, List, Optional
import logging
import uuid

import numpy as np

from ..models.annotation import Annotation

_log = logging.getLogger("interpolation.core.GroupResolver")


def new_interpolation_uid() -> str:
  return str(uuid.uuid4())


def _same_vector(a, b) -> bool:
  return tuple(float(x) for x in a) == tuple(float(x) for x in b)


def compatible_annotations(annotation: Annotation, candidates: Iterable[Annotation]) -> List[Annotation]:
  """Candidates on the same segment index and the same orientation class."""
  metadata = annotation.metadata
  result: List[Annotation] = []
  for candidate in candidates:
    if candidate is annotation or candidate.metadata is None:
      continue
    if candidate.segment_index != annotation.segment_index:
      continue
    if not _same_vector(candidate.metadata.view_plane_normal, metadata.view_plane_normal):
      continue
    if not _same_vector(candidate.metadata.view_up, metadata.view_up):
      continue
    result.append(candidate)
  return result


def in_plane_distance(annotation: Annotation, other: Annotation) -> float:
  """Distance between centers with the view-plane normal component removed.

    Returns inf when either contour is empty.
    """
  a, b = annotation.center_point, other.center_point
  if a is None or b is None:
    return float("inf")
  delta = b - a
  normal = np.asarray(annotation.metadata.view_plane_normal, dtype=float)
  norm = np.linalg.norm(normal)
  if norm > 0:
    normal = normal / norm
    delta = delta - np.dot(delta, normal) * normal
  return float(np.linalg.norm(delta))


def resolve_interpolation_uid(annotation: Annotation,
                              candidates: Iterable[Annotation],
                              mint_uid: Optional[Callable[[], str]] = None) -> str:
  """Choose the interpolation uid for an ungrouped annotation.

    Rules:
    1. Only candidates with the same segment index, view plane normal and
       view up are considered.
    2. Of those, only candidates that already carry an interpolation uid.
    3. A uid already used by a user drawn contour on the same slice is
       excluded; a second contour on one slice starts its own group.
    4. No uid left: mint one. One uid: reuse it. Several: take the uid of the
       candidate whose center is nearest in the slice plane, first
       encountered winning on equal distance.

    The annotation is not modified.
    """
  mint_uid = mint_uid or new_interpolation_uid
  slice_index = annotation.metadata.slice_index

  grouped = [c for c in compatible_annotations(annotation, candidates) if c.interpolation_uid]
  taken = {
    c.interpolation_uid for c in grouped
    if not c.auto_generated and c.metadata.slice_index == slice_index
  }
  grouped = [c for c in grouped if c.interpolation_uid not in taken]

  uids = list(dict.fromkeys(c.interpolation_uid for c in grouped))
  if not uids:
    uid = mint_uid()
    _log.debug("no group for annotation=%s, minted %s", annotation.annotation_uid, uid)
    return uid
  if len(uids) == 1:
    return uids[0]

  nearest = min(grouped, key=lambda c: in_plane_distance(annotation, c))
  _log.debug(
    "annotation=%s matches %d groups, nearest is %s",
    annotation.annotation_uid,
    len(uids),
    nearest.interpolation_uid,
  )
  return nearest.interpolation_uid
