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
"""Bean definitions — the declarative recipe the factory builds beans from."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class BeanReference:
    """Property value pointing at another bean by name.

    Resolved by the property injector through ``BeanFactory.get_bean``.
    """

    name: str


@dataclass(frozen=True)
class PropertyValue:
    """A single ``name -> value`` pair configured on a bean definition."""

    name: str
    value: Any


class PropertyValues:
    """Ordered collection of property values, unique by property name.

    Adding a value for a name that is already present replaces it without
    moving it.
    """

    def __init__(self, values: Iterable[PropertyValue] | dict[str, Any] | None = None) -> None:
        self._values: dict[str, PropertyValue] = {}
        if isinstance(values, dict):
            for name, value in values.items():
                self.add(name, value)
        elif values is not None:
            for pv in values:
                self.add_property_value(pv)

    def add(self, name: str, value: Any) -> PropertyValues:
        """Add or replace the value for *name*. Returns self for chaining."""
        return self.add_property_value(PropertyValue(name, value))

    def add_property_value(self, pv: PropertyValue) -> PropertyValues:
        self._values[pv.name] = pv
        return self

    def get(self, name: str) -> PropertyValue | None:
        return self._values.get(name)

    def contains(self, name: str) -> bool:
        return name in self._values

    def to_dict(self) -> dict[str, Any]:
        """Return the raw ``name -> value`` mapping in insertion order."""
        return {pv.name: pv.value for pv in self._values.values()}

    def __iter__(self) -> Iterator[PropertyValue]:
        return iter(list(self._values.values()))

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __repr__(self) -> str:
        return f"PropertyValues({self.to_dict()!r})"


class BeanDefinition:
    """Metadata for one managed bean.

    Holds the bean's name, the class used to instantiate it and to answer
    type queries, its configured property values, and the cached singleton
    instance once the factory has created it.

    The name is fixed once the definition is registered with a factory. The
    instance slot is written twice during creation: first with the raw,
    not-yet-injected object (so circular references resolve to it), then
    with the final post-processed bean.
    """

    def __init__(
        self,
        bean_type: type,
        property_values: PropertyValues | dict[str, Any] | None = None,
        name: str = "",
    ) -> None:
        if not isinstance(bean_type, type):
            raise TypeError(f"bean_type must be a class, got {bean_type!r}")
        self.bean_type = bean_type
        if isinstance(property_values, PropertyValues):
            self.property_values = property_values
        else:
            self.property_values = PropertyValues(property_values)
        self._name = name
        self._registered = False
        self.instance: Any = None
        self.is_initialized = False

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        if self._registered and value != self._name:
            from pybeans.container.exceptions import BeanDefinitionStoreError

            raise BeanDefinitionStoreError(
                self._name,
                f"cannot rename registered bean definition to '{value}'",
            )
        self._name = value

    @property
    def is_registered(self) -> bool:
        """Whether a factory has taken ownership of this definition."""
        return self._registered

    @property
    def is_singleton(self) -> bool:
        return True

    def mark_registered(self, name: str) -> None:
        """Assign *name* and freeze it. Called by the factory on registration."""
        self.name = name
        self._registered = True

    def __repr__(self) -> str:
        return (
            f"BeanDefinition(name={self._name!r}, bean_type={self.bean_type.__qualname__}, "
            f"property_values={self.property_values.to_dict()!r}, initialized={self.is_initialized})"
        )
