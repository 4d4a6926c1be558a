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
"""ApplicationContext — loads bean definitions into a factory and brings it up."""

from __future__ import annotations

import threading
import time
from typing import Any, TypeVar

import structlog

from pybeans.beans.definition import BeanDefinition
from pybeans.container.exceptions import ContextAlreadyRefreshedError
from pybeans.container.factory import BeanFactory
from pybeans.container.post_processor import is_post_processor
from pybeans.context.properties import ContextProperties
from pybeans.core.config import Config
from pybeans.io.reader import BeanDefinitionReader
from pybeans.logging.port import LoggingPort

T = TypeVar("T")

logger = structlog.get_logger("pybeans.context")


class ApplicationContext:
    """Thin orchestrator around a BeanFactory.

    The context starts uninitialized. ``refresh()`` moves it to refreshed,
    exactly once:

    1. Configure logging, if a LoggingPort was supplied
    2. Load ``(name, definition)`` pairs from the reader
    3. Register them into the factory
    4. Register every definition whose class implements a post-processor
       hook as a post-processor (``pybeans.context.detect-post-processors``)
    5. Eagerly create all singletons (``pybeans.context.eager-init``)

    Errors from any step propagate unchanged; ResourceParseError from the
    reader included. A failed refresh leaves the context uninitialized and
    may be retried: the definitions read by the first successful load are
    kept and registered again as no-ops, so beans that were already created
    survive and detected post-processors are not added twice.
    """

    def __init__(
        self,
        reader: BeanDefinitionReader | None = None,
        resource: Any = None,
        *,
        config: Config | None = None,
        factory: BeanFactory | None = None,
        logging: LoggingPort | None = None,
    ) -> None:
        self._reader = reader
        self._resource = resource
        self._config = config or Config({})
        self._factory = factory or BeanFactory.from_config(self._config)
        self._logging = logging
        self._refreshed = False
        self._loaded: list[tuple[str, BeanDefinition]] | None = None
        self._detected_processors: set[str] = set()
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def refresh(self) -> None:
        """Load, register and (optionally) eagerly instantiate all beans.

        Raises ContextAlreadyRefreshedError if called on a refreshed context.
        """
        with self._lock:
            if self._refreshed:
                raise ContextAlreadyRefreshedError()

            start = time.perf_counter()
            if self._logging is not None:
                self._logging.configure(self._config)
            props = self._config.bind(ContextProperties)

            if self._loaded is None:
                self._loaded = self._load_bean_definitions()
            for name, definition in self._loaded:
                self._factory.register_bean_definition(name, definition)

            if props.detect_post_processors:
                self._register_post_processors()

            if props.eager_init:
                self._factory.pre_instantiate_singletons()

            self._refreshed = True
            logger.info(
                "context_refreshed",
                beans=self._factory.bean_definition_count,
                post_processors=len(self._factory.post_processors),
                eager=props.eager_init,
                elapsed_ms=round((time.perf_counter() - start) * 1000, 2),
            )

    @property
    def is_refreshed(self) -> bool:
        return self._refreshed

    # ------------------------------------------------------------------
    # Bean registration
    # ------------------------------------------------------------------

    def register_bean_definition(self, name: str, definition: BeanDefinition) -> None:
        """Register a definition directly with the underlying factory."""
        self._factory.register_bean_definition(name, definition)

    def add_bean_post_processor(self, processor: Any) -> None:
        self._factory.add_bean_post_processor(processor)

    # ------------------------------------------------------------------
    # Bean access
    # ------------------------------------------------------------------

    def get_bean(self, name: str) -> Any:
        return self._factory.get_bean(name)

    def get_beans_of_type(self, bean_type: type[T]) -> list[T]:
        return self._factory.get_beans_of_type(bean_type)

    def contains_bean(self, name: str) -> bool:
        return self._factory.contains_bean_definition(name)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def factory(self) -> BeanFactory:
        """Escape hatch: direct access to the underlying BeanFactory."""
        return self._factory

    @property
    def config(self) -> Config:
        return self._config

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _load_bean_definitions(self) -> list[tuple[str, BeanDefinition]]:
        if self._reader is None:
            return []
        return self._reader.load_bean_definitions(self._resource)

    def _register_post_processors(self) -> None:
        """Create post-processor beans and append them to the pipeline in registration order."""
        for name in self._factory.bean_definition_names:
            definition = self._factory.get_bean_definition(name)
            if not is_post_processor(definition.bean_type):
                continue
            if name in self._detected_processors:
                continue
            self._factory.add_bean_post_processor(self._factory.get_bean(name))
            self._detected_processors.add(name)
