"""
Process-scoped configuration for the interpolation coordinator.
"""
from __future__ import annotations

import os
from typing import List, Optional

from pydantic import BaseModel, field_validator

DEFAULT_LOG_LEVEL = "INFO"


class InterpolationConfig(BaseModel):
  """Settings resolved once at startup and injected into the manager."""

  tool_names: List[str] = []
  log_level: str = DEFAULT_LOG_LEVEL
  log_json: bool = False
  log_file: Optional[str] = None

  @field_validator("tool_names", mode="before")
  def _split_tool_names(cls, v):
    if v is None:
      return []
    if isinstance(v, str):
      v = v.split(",")
    names: List[str] = []
    for name in v:
      name = name.strip() if isinstance(name, str) else name
      if name and name not in names:
        names.append(name)
    return names

  @field_validator("log_level", mode="before")
  def _normalize_level(cls, v):
    return (v or DEFAULT_LOG_LEVEL).strip().upper()


def load_config(**overrides) -> InterpolationConfig:
  """Build the configuration from the environment.

    Environment variables:
    - INTERPOLATION_TOOL_NAMES: comma separated tool names taking part in interpolation
    - INTERPOLATION_LOG_LEVEL, INTERPOLATION_LOG_JSON, INTERPOLATION_LOG_FILE: see logging_setup
    """
  values = {
    "tool_names": os.getenv("INTERPOLATION_TOOL_NAMES", ""),
    "log_level": os.getenv("INTERPOLATION_LOG_LEVEL", DEFAULT_LOG_LEVEL),
    "log_json": os.getenv("INTERPOLATION_LOG_JSON", "0").strip() in ("1", "true", "TRUE"),
    "log_file": os.getenv("INTERPOLATION_LOG_FILE") or None,
  }
  values.update(overrides)
  return InterpolationConfig(**values)
