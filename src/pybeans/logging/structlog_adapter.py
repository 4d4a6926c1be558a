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
"""StructlogAdapter — LoggingPort implementation using structlog."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from pybeans.core.config import Config
from pybeans.logging.properties import LoggingProperties

# Per-bean lifecycle events emitted by the factory and the pipeline.
BEAN_EVENTS = frozenset(
    {
        "bean_definition_registered",
        "bean_created",
        "bean_replaced",
        "post_processor_added",
    }
)


def drop_bean_events(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor that discards per-bean lifecycle events."""
    if event_dict.get("event") in BEAN_EVENTS:
        raise structlog.DropEvent
    return event_dict


class StructlogAdapter:
    """Routes container logging through structlog and the stdlib root logger.

    Settings come from :class:`LoggingProperties`; invalid values fail in
    ``configure`` with the same ValueError as any other bound section.
    """

    def __init__(self) -> None:
        self._properties = LoggingProperties()

    @property
    def properties(self) -> LoggingProperties:
        return self._properties

    def configure(self, config: Config) -> None:
        self._properties = config.bind(LoggingProperties)

        structlog.configure(
            processors=self._processors(),
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=self._properties.root_level,
            force=True,
        )
        for name, level in self._properties.module_levels.items():
            logging.getLogger(name).setLevel(level)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def _processors(self) -> list[structlog.types.Processor]:
        processors: list[structlog.types.Processor] = [structlog.contextvars.merge_contextvars]
        if not self._properties.bean_events:
            processors.append(drop_bean_events)
        processors += [
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
        ]
        if self._properties.format == "json":
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer())
        return processors
