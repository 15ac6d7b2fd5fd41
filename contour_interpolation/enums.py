"""
Enumerations shared by the interpolation coordinator.
"""

from enum import Enum


class ChangeTypes(str, Enum):
  """Reason attached to an annotation modification event."""

  Interaction = "Interaction"
  HandlesUpdated = "HandlesUpdated"
  StatsUpdated = "StatsUpdated"
  InitialSetup = "InitialSetup"
  Completed = "Completed"
  # Explicit request to re-derive the group rather than adjust it
  InterpolationUpdated = "InterpolationUpdated"
  History = "History"
  MetadataReferenceModified = "MetadataReferenceModified"
  LabelChange = "LabelChange"


# Only these change types trigger interpolation recomputation
CHANGE_TYPES_FOR_INTERPOLATION = (
  ChangeTypes.HandlesUpdated,
  ChangeTypes.InterpolationUpdated,
)


class Events(str, Enum):
  """Annotation lifecycle event names dispatched on the event bus."""

  ANNOTATION_COMPLETED = "annotation_completed"
  ANNOTATION_MODIFIED = "annotation_modified"
  ANNOTATION_REMOVED = "annotation_removed"
