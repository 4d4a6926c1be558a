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
"""Container exceptions — errors raised while storing, creating, and loading beans."""

from __future__ import annotations

from typing import Any

from pybeans.kernel.exceptions import InfrastructureException


class BeansException(InfrastructureException):
    """Base class for every error raised by the bean container."""


class UndefinedBeanError(BeansException):
    """No bean definition is registered under the requested name."""

    def __init__(self, bean_name: str, *, suggestions: list[str] | None = None) -> None:
        self.bean_name = bean_name
        self.suggestions = suggestions or []

        headline = f"No bean named '{bean_name}' is defined"
        lines = [f"UndefinedBeanError: {headline}"]
        if self.suggestions:
            lines.append("")
            lines.append(f"  Similar registered names: {', '.join(self.suggestions)}")

        super().__init__(
            message=headline,
            code="BEAN_UNDEFINED",
            context={"bean_name": bean_name},
        )
        self.args = ("\n".join(lines),)

    def __str__(self) -> str:
        return self.args[0] if self.args else ""


class BeanCreationError(BeansException):
    """A registered bean could not be created."""

    def __init__(self, bean_name: str, reason: str, *, code: str = "BEAN_CREATION", **context: Any) -> None:
        self.bean_name = bean_name
        self.reason = reason
        super().__init__(
            message=f"Error creating bean '{bean_name}': {reason}",
            code=code,
            context={"bean_name": bean_name, **context},
        )


class InstantiationError(BeanCreationError):
    """The bean's class is abstract or cannot be constructed without arguments."""

    def __init__(self, bean_name: str, bean_type: type, reason: str) -> None:
        self.bean_type = bean_type
        super().__init__(
            bean_name,
            f"cannot instantiate {bean_type.__qualname__}: {reason}",
            code="BEAN_INSTANTIATION",
            bean_type=bean_type.__qualname__,
        )


class PropertyInjectionError(BeanCreationError):
    """A configured property could not be applied to a freshly created bean.

    Raised for unresolvable bean references and for values whose type does
    not match the annotated attribute. The underlying error, if any, is
    chained as ``__cause__``.
    """

    def __init__(self, bean_name: str, property_name: str | None, reason: str) -> None:
        self.property_name = property_name
        where = f"property '{property_name}'" if property_name else "property injection failed"
        super().__init__(
            bean_name,
            f"{where}: {reason}",
            code="BEAN_PROPERTY_INJECTION",
            property_name=property_name,
        )


class BeanDefinitionStoreError(BeansException):
    """A bean definition could not be stored in the registry."""

    def __init__(self, bean_name: str, reason: str, *, code: str = "BEAN_DEFINITION_STORE") -> None:
        self.bean_name = bean_name
        self.reason = reason
        super().__init__(
            message=f"Invalid bean definition '{bean_name}': {reason}",
            code=code,
            context={"bean_name": bean_name},
        )


class BeanDefinitionOverrideError(BeanDefinitionStoreError):
    """A definition is already registered under this name and overriding is disabled."""

    def __init__(self, bean_name: str) -> None:
        super().__init__(
            bean_name,
            "a different definition is already registered under this name and overriding is disabled",
            code="BEAN_DEFINITION_OVERRIDE",
        )


class ResourceParseError(BeansException):
    """A configuration resource could not be turned into bean definitions."""

    def __init__(self, resource: str, reason: str) -> None:
        self.resource = resource
        self.reason = reason
        super().__init__(
            message=f"Failed to parse bean definitions from {resource}: {reason}",
            code="RESOURCE_PARSE",
            context={"resource": resource},
        )


class ContextAlreadyRefreshedError(BeansException):
    """refresh() was called on an ApplicationContext that is already refreshed."""

    def __init__(self) -> None:
        super().__init__(
            message="ApplicationContext has already been refreshed; create a new context instead",
            code="CONTEXT_ALREADY_REFRESHED",
        )
