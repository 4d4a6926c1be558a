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
"""BeanFactory — the registry of bean definitions and the singleton lifecycle engine."""

from __future__ import annotations

import difflib
import inspect
import threading
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, TypeVar

import structlog

from pybeans.beans.definition import BeanDefinition
from pybeans.container.exceptions import (
    BeanCreationError,
    BeanDefinitionOverrideError,
    BeanDefinitionStoreError,
    BeansException,
    InstantiationError,
    PropertyInjectionError,
    UndefinedBeanError,
)
from pybeans.container.injection import AttributePropertyInjector, PropertyInjector
from pybeans.container.post_processor import PostProcessorPipeline
from pybeans.container.properties import ContainerProperties

if TYPE_CHECKING:
    from pybeans.core.config import Config

T = TypeVar("T")

logger = structlog.get_logger("pybeans.container.factory")


class BeanFactory:
    """Singleton bean factory.

    Keeps bean definitions by name together with their registration order,
    creates each bean on first request, injects its properties through a
    pluggable PropertyInjector, runs it through the post-processor pipeline,
    and caches the result on the definition.

    Circular references are resolved by caching the raw instance on its
    definition before injection: a bean that refers back to one still being
    created receives that partially built object. Creation is serialized by a
    single re-entrant lock, so each definition is constructed at most once
    even when several threads request it together, and only the thread
    resolving a cycle can observe a partially built bean.
    """

    def __init__(
        self,
        injector: PropertyInjector | None = None,
        post_processors: Iterable[Any] | None = None,
        *,
        allow_definition_overriding: bool = True,
    ) -> None:
        self._definitions: dict[str, BeanDefinition] = {}
        self._registration_order: list[str] = []
        self._registry_lock = threading.RLock()
        self._creation_lock = threading.RLock()
        self._injector: PropertyInjector = injector or AttributePropertyInjector()
        self._pipeline = PostProcessorPipeline(post_processors)
        self._allow_definition_overriding = allow_definition_overriding
        # Definitions created under the current outermost get_bean call;
        # touched only by the thread holding the creation lock.
        self._in_creation: list[BeanDefinition] = []

    @classmethod
    def from_config(cls, config: Config, injector: PropertyInjector | None = None) -> BeanFactory:
        """Build a factory configured from the ``pybeans.container`` section."""
        props = config.bind(ContainerProperties)
        return cls(injector, allow_definition_overriding=props.allow_definition_overriding)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_bean_definition(self, name: str, definition: BeanDefinition) -> None:
        """Register *definition* under *name*.

        A name is recorded in the registration order only once. Registering a
        different definition under an existing name replaces it in place when
        overriding is allowed, and raises BeanDefinitionOverrideError
        otherwise. Registering the same definition object again is a no-op.
        """
        if not name:
            raise BeanDefinitionStoreError(name, "bean name must not be empty")
        with self._registry_lock:
            existing = self._definitions.get(name)
            if existing is definition:
                return
            if definition.is_registered and definition.name != name:
                raise BeanDefinitionStoreError(
                    name,
                    f"definition is already registered as '{definition.name}'",
                )
            if existing is not None:
                if not self._allow_definition_overriding:
                    raise BeanDefinitionOverrideError(name)
                logger.warning(
                    "bean_definition_overridden",
                    bean=name,
                    old_type=existing.bean_type.__qualname__,
                    new_type=definition.bean_type.__qualname__,
                )
            else:
                self._registration_order.append(name)
            definition.mark_registered(name)
            self._definitions[name] = definition
        logger.debug("bean_definition_registered", bean=name, type=definition.bean_type.__qualname__)

    register = register_bean_definition

    def add_bean_post_processor(self, processor: Any) -> None:
        """Append a post-processor; it applies to every bean created afterwards."""
        self._pipeline.add(processor)
        logger.debug("post_processor_added", processor=type(processor).__qualname__)

    add_post_processor = add_bean_post_processor

    # ------------------------------------------------------------------
    # Definition access
    # ------------------------------------------------------------------

    def get_bean_definition(self, name: str) -> BeanDefinition:
        """Return the definition registered under *name*."""
        definition = self._definitions.get(name)
        if definition is None:
            raise UndefinedBeanError(name, suggestions=self._similar_names(name))
        return definition

    def contains_bean_definition(self, name: str) -> bool:
        return name in self._definitions

    @property
    def bean_definition_names(self) -> tuple[str, ...]:
        """Registered names, in registration order."""
        with self._registry_lock:
            return tuple(self._registration_order)

    @property
    def bean_definition_count(self) -> int:
        return len(self._definitions)

    @property
    def post_processors(self) -> tuple[Any, ...]:
        return tuple(self._pipeline)

    @property
    def injector(self) -> PropertyInjector:
        return self._injector

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    # ------------------------------------------------------------------
    # Bean access
    # ------------------------------------------------------------------

    def get_bean(self, name: str) -> Any:
        """Return the singleton bean named *name*, creating it on first use.

        Every bean created while serving one outermost request, cycle
        partners included, is committed together when that request succeeds
        and rolled back together when it fails.
        """
        definition = self.get_bean_definition(name)
        if definition.is_initialized:
            return definition.instance

        with self._creation_lock:
            if definition.instance is not None:
                # Either finished by another thread while we waited, or an
                # early reference requested from inside this thread's cycle.
                return definition.instance
            outermost = not self._in_creation
            try:
                bean = self._create_bean(name, definition)
            except BaseException:
                if outermost:
                    self._rollback()
                raise
            if outermost:
                self._commit()
            return bean

    def get_beans_of_type(self, bean_type: type[T]) -> list[T]:
        """Return every bean whose declared class is a subclass of *bean_type*.

        Beans are returned in registration order and created if needed. The
        first creation failure aborts the whole call. *bean_type* must be a
        class usable with ``issubclass``; anything else raises TypeError
        before any bean is created.
        """
        if not isinstance(bean_type, type):
            raise TypeError(f"get_beans_of_type() expects a class, got {bean_type!r}")
        matching = [
            name
            for name in self.bean_definition_names
            if self._is_assignable(self._definitions[name].bean_type, bean_type)
        ]
        return [self.get_bean(name) for name in matching]

    def pre_instantiate_singletons(self) -> None:
        """Eagerly create every registered bean in registration order (fail-fast)."""
        names = self.bean_definition_names
        logger.debug("pre_instantiating_singletons", count=len(names))
        for name in names:
            self.get_bean(name)

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def _create_bean(self, name: str, definition: BeanDefinition) -> Any:
        bean = self._instantiate(name, definition)
        definition.instance = bean
        self._in_creation.append(definition)
        try:
            bean = self._populate(name, definition, bean)
            bean = self._initialize(name, bean)
        except BaseException:
            definition.instance = None
            raise
        definition.instance = bean
        logger.debug("bean_created", bean=name, type=type(bean).__qualname__)
        return bean

    def _commit(self) -> None:
        for definition in self._in_creation:
            if definition.instance is not None:
                definition.is_initialized = True
        self._in_creation.clear()

    def _rollback(self) -> None:
        if len(self._in_creation) > 1:
            logger.debug(
                "bean_creation_rolled_back",
                beans=[definition.name for definition in self._in_creation],
            )
        for definition in self._in_creation:
            definition.instance = None
        self._in_creation.clear()

    @staticmethod
    def _is_assignable(declared: type, bean_type: type) -> bool:
        try:
            return issubclass(declared, bean_type)
        except TypeError as exc:
            raise TypeError(f"cannot look up beans by type {bean_type.__qualname__}: {exc}") from exc

    @staticmethod
    def _instantiate(name: str, definition: BeanDefinition) -> Any:
        bean_type = definition.bean_type
        if inspect.isabstract(bean_type):
            raise InstantiationError(name, bean_type, "class is abstract")
        try:
            return bean_type()
        except Exception as exc:
            raise InstantiationError(name, bean_type, str(exc) or type(exc).__name__) from exc

    def _populate(self, name: str, definition: BeanDefinition, bean: Any) -> Any:
        try:
            injected = self._injector.inject(bean, definition, self)
        except BeansException:
            raise
        except Exception as exc:
            raise PropertyInjectionError(name, None, str(exc) or type(exc).__name__) from exc
        return bean if injected is None else injected

    def _initialize(self, name: str, bean: Any) -> Any:
        try:
            return self._pipeline.apply(bean, name)
        except BeansException:
            raise
        except Exception as exc:
            raise BeanCreationError(
                name,
                f"post-processing failed: {exc}",
                code="BEAN_POST_PROCESSING",
            ) from exc

    def _similar_names(self, name: str) -> list[str]:
        """Return registered names similar to *name* using fuzzy matching."""
        if not name:
            return []
        return difflib.get_close_matches(name, list(self._definitions), n=5, cutoff=0.6)
