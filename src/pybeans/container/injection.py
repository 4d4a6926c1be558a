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
"""Property injection strategies — populate a new bean from its definition."""

from __future__ import annotations

import typing
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pybeans.beans.definition import BeanDefinition, BeanReference
from pybeans.container.exceptions import BeansException, PropertyInjectionError

if TYPE_CHECKING:
    from pybeans.container.factory import BeanFactory

_NUMERIC_PROMOTIONS: dict[type, tuple[type, ...]] = {
    float: (int, float),
    complex: (int, float, complex),
}


def _matches(value: Any, expected: type) -> bool:
    if isinstance(value, bool) and expected in (int, float, complex):
        return False
    return isinstance(value, _NUMERIC_PROMOTIONS.get(expected, expected))


@runtime_checkable
class PropertyInjector(Protocol):
    """Strategy that applies a definition's property values to a bean.

    Called once per bean creation, after the raw instance has been cached
    and before post-processors run. Must raise PropertyInjectionError when a
    property cannot be applied.
    """

    def inject(self, bean: Any, definition: BeanDefinition, factory: BeanFactory) -> Any: ...


class AttributePropertyInjector:
    """Default injector: assigns each property value with ``setattr``.

    ``BeanReference`` values (alone or inside a list/tuple) are resolved
    through the factory. The target attribute must be declared on the class,
    either as an annotation or as a class attribute, or already exist on the
    instance. When the class annotates it with a plain class, the value must
    be an instance of that class, with the numeric promotions type checkers
    apply: an ``int`` is accepted for ``float`` and ``complex``. A ``bool`` is
    not accepted for a numeric attribute.
    """

    def inject(self, bean: Any, definition: BeanDefinition, factory: BeanFactory) -> Any:
        hints = self._class_hints(type(bean))
        for pv in definition.property_values:
            if not self._is_declared(bean, pv.name, hints):
                raise PropertyInjectionError(
                    definition.name,
                    pv.name,
                    f"{type(bean).__qualname__} declares no attribute '{pv.name}'",
                )
            value = self._resolve(pv.value, definition.name, pv.name, factory)
            expected = hints.get(pv.name)
            if isinstance(expected, type) and not _matches(value, expected):
                raise PropertyInjectionError(
                    definition.name,
                    pv.name,
                    f"expected {expected.__qualname__}, got {type(value).__qualname__}",
                )
            setattr(bean, pv.name, value)
        return bean

    def _resolve(self, value: Any, bean_name: str, property_name: str, factory: BeanFactory) -> Any:
        if isinstance(value, BeanReference):
            try:
                return factory.get_bean(value.name)
            except BeansException as exc:
                raise PropertyInjectionError(
                    bean_name,
                    property_name,
                    f"cannot resolve reference to bean '{value.name}'",
                ) from exc
        if isinstance(value, (list, tuple)):
            resolved = [self._resolve(item, bean_name, property_name, factory) for item in value]
            return type(value)(resolved)
        return value

    @staticmethod
    def _class_hints(cls: type) -> dict[str, Any]:
        try:
            return typing.get_type_hints(cls)
        except Exception:
            return {}

    @staticmethod
    def _is_declared(bean: Any, name: str, hints: dict[str, Any]) -> bool:
        return name in hints or hasattr(type(bean), name) or hasattr(bean, name)
