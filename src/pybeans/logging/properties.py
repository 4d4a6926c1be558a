# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Configuration properties for container logging."""

from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pybeans.core.config import config_properties

_LEVEL_NAMES = frozenset(logging.getLevelNamesMapping())


@config_properties(prefix="pybeans.logging")
class LoggingProperties(BaseModel):
    """Settings bound from the ``pybeans.logging`` section.

    ``level`` maps ``root`` and dotted logger names to level names::

        pybeans:
          logging:
            format: json
            bean-events: false
            level:
              root: INFO
              pybeans.container: DEBUG

    ``bean-events`` switches off the per-bean lifecycle events the factory
    emits (registration, creation, post-processor substitution) while
    keeping overrides, rollbacks and the refresh summary.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    format: Literal["console", "json"] = "console"
    level: dict[str, str] = Field(default_factory=lambda: {"root": "INFO"})
    bean_events: bool = Field(default=True, alias="bean-events")

    @field_validator("format", mode="before")
    @classmethod
    def _normalize_format(cls, value: Any) -> str:
        return str(value).lower()

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_levels(cls, value: Any) -> dict[str, str]:
        if not isinstance(value, dict):
            raise ValueError("level must be a mapping of logger names to level names")
        levels = {str(name): str(level).upper() for name, level in value.items()}
        unknown = sorted(level for level in levels.values() if level not in _LEVEL_NAMES)
        if unknown:
            raise ValueError(f"unknown log level(s): {', '.join(unknown)}")
        return levels

    @property
    def root_level(self) -> str:
        return self.level.get("root", "INFO")

    @property
    def module_levels(self) -> dict[str, str]:
        return {name: level for name, level in self.level.items() if name != "root"}
