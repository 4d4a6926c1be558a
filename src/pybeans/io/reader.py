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
"""Bean definition readers — turn configuration resources into bean definitions.

The expected document shape, for both mappings and YAML files::

    beans:
      - name: greeter
        class: myapp.services.Greeter
        properties:
          greeting: Hello
          printer: {ref: printer}
      - name: printer
        class: myapp.services:ConsolePrinter

``class`` is a dotted import path (``pkg.module.Class`` or
``pkg.module:Class``) or, for mappings built in code, a class object. A
property value of the form ``{ref: name}`` becomes a BeanReference; every
other value is passed through as a literal.
"""

from __future__ import annotations

import importlib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import structlog
import yaml  # type: ignore[import-untyped]

from pybeans.beans.definition import BeanDefinition, BeanReference, PropertyValues
from pybeans.container.exceptions import ResourceParseError

logger = structlog.get_logger("pybeans.io.reader")


@runtime_checkable
class BeanDefinitionReader(Protocol):
    """Loads ``(name, BeanDefinition)`` pairs from an opaque resource.

    Implementations raise ResourceParseError for any resource they cannot
    read or interpret.
    """

    def load_bean_definitions(self, resource: Any) -> list[tuple[str, BeanDefinition]]: ...


class MappingBeanDefinitionReader:
    """Reads bean definitions from an in-memory mapping."""

    def load_bean_definitions(self, resource: Any) -> list[tuple[str, BeanDefinition]]:
        return self._parse_document(resource, self._describe(resource))

    @staticmethod
    def _describe(resource: Any) -> str:
        return f"<{type(resource).__name__}>"

    def _parse_document(self, document: Any, source: str) -> list[tuple[str, BeanDefinition]]:
        if document is None:
            return []
        if not isinstance(document, Mapping):
            raise ResourceParseError(source, "document root must be a mapping")
        entries = document.get("beans") or []
        if not isinstance(entries, list):
            raise ResourceParseError(source, "'beans' must be a list")

        definitions: list[tuple[str, BeanDefinition]] = []
        seen: set[str] = set()
        for index, entry in enumerate(entries):
            name, definition = self._parse_entry(entry, index, source)
            if name in seen:
                raise ResourceParseError(source, f"bean '{name}' is defined more than once")
            seen.add(name)
            definitions.append((name, definition))

        logger.debug("bean_definitions_loaded", resource=source, count=len(definitions))
        return definitions

    def _parse_entry(self, entry: Any, index: int, source: str) -> tuple[str, BeanDefinition]:
        if not isinstance(entry, Mapping):
            raise ResourceParseError(source, f"bean entry #{index} must be a mapping")
        name = entry.get("name")
        if not name or not isinstance(name, str):
            raise ResourceParseError(source, f"bean entry #{index} has no 'name'")
        class_ref = entry.get("class")
        if class_ref is None:
            raise ResourceParseError(source, f"bean '{name}' has no 'class'")
        bean_type = self._resolve_class(class_ref, name, source)

        properties = entry.get("properties") or {}
        if not isinstance(properties, Mapping):
            raise ResourceParseError(source, f"'properties' of bean '{name}' must be a mapping")
        values = PropertyValues()
        for prop_name, raw in properties.items():
            values.add(str(prop_name), self._parse_value(raw, name, source))

        return name, BeanDefinition(bean_type, values, name=name)

    @staticmethod
    def _parse_value(raw: Any, bean_name: str, source: str) -> Any:
        if isinstance(raw, Mapping) and set(raw) == {"ref"}:
            ref = raw["ref"]
            if not ref or not isinstance(ref, str):
                raise ResourceParseError(source, f"bean '{bean_name}' has an empty reference")
            return BeanReference(ref)
        return raw

    @staticmethod
    def _resolve_class(class_ref: Any, bean_name: str, source: str) -> type:
        if isinstance(class_ref, type):
            return class_ref
        if not isinstance(class_ref, str):
            raise ResourceParseError(source, f"'class' of bean '{bean_name}' must be a string")

        if ":" in class_ref:
            module_name, _, attr = class_ref.partition(":")
        else:
            module_name, _, attr = class_ref.rpartition(".")
        if not module_name or not attr:
            raise ResourceParseError(source, f"'{class_ref}' is not a qualified class path")

        try:
            module = importlib.import_module(module_name)
        except ImportError as exc:
            raise ResourceParseError(source, f"cannot import module '{module_name}': {exc}") from exc

        obj: Any = module
        for part in attr.split("."):
            obj = getattr(obj, part, None)
            if obj is None:
                raise ResourceParseError(source, f"module '{module_name}' has no class '{attr}'")
        if not isinstance(obj, type):
            raise ResourceParseError(source, f"'{class_ref}' is not a class")
        return obj


class YamlBeanDefinitionReader(MappingBeanDefinitionReader):
    """Reads bean definitions from a YAML file."""

    def load_bean_definitions(self, resource: Any) -> list[tuple[str, BeanDefinition]]:
        path = Path(resource)
        source = str(path)
        try:
            with open(path) as f:
                document = yaml.safe_load(f)
        except OSError as exc:
            raise ResourceParseError(source, f"cannot read file: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ResourceParseError(source, f"invalid YAML: {exc}") from exc
        return self._parse_document(document, source)
