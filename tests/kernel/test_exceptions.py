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
"""Tests for the pybeans root exception hierarchy."""

from pybeans.container.exceptions import (
    BeanCreationError,
    BeanDefinitionOverrideError,
    BeanDefinitionStoreError,
    BeansException,
    ContextAlreadyRefreshedError,
    InstantiationError,
    PropertyInjectionError,
    ResourceParseError,
    UndefinedBeanError,
)
from pybeans.kernel.exceptions import InfrastructureException, PyBeansException


class TestPyBeansException:
    def test_basic_creation(self):
        exc = PyBeansException("something went wrong")
        assert str(exc) == "something went wrong"
        assert exc.code is None
        assert exc.context == {}

    def test_with_error_code(self):
        exc = PyBeansException("bad definition", code="BEAN_DEFINITION_STORE")
        assert exc.code == "BEAN_DEFINITION_STORE"

    def test_context_defaults_to_empty_dict(self):
        exc = PyBeansException("test")
        exc.context["key"] = "value"
        exc2 = PyBeansException("test2")
        assert exc2.context == {}


class TestExceptionHierarchy:
    def test_infrastructure_is_pybeans(self):
        assert issubclass(InfrastructureException, PyBeansException)

    def test_beans_exception_is_infrastructure(self):
        assert issubclass(BeansException, InfrastructureException)

    def test_creation_errors(self):
        assert issubclass(InstantiationError, BeanCreationError)
        assert issubclass(PropertyInjectionError, BeanCreationError)
        assert issubclass(BeanCreationError, BeansException)

    def test_store_errors(self):
        assert issubclass(BeanDefinitionOverrideError, BeanDefinitionStoreError)
        assert issubclass(BeanDefinitionStoreError, BeansException)

    def test_other_container_errors(self):
        assert issubclass(UndefinedBeanError, BeansException)
        assert issubclass(ResourceParseError, BeansException)
        assert issubclass(ContextAlreadyRefreshedError, BeansException)


class TestContainerExceptionDetails:
    def test_undefined_bean_message_and_code(self):
        exc = UndefinedBeanError("userService")
        assert "No bean named 'userService' is defined" in str(exc)
        assert exc.code == "BEAN_UNDEFINED"
        assert exc.context == {"bean_name": "userService"}

    def test_undefined_bean_lists_suggestions(self):
        exc = UndefinedBeanError("userServce", suggestions=["userService"])
        assert "Similar registered names: userService" in str(exc)
        assert exc.suggestions == ["userService"]

    def test_instantiation_error_names_type(self):
        class Widget:
            pass

        exc = InstantiationError("widget", Widget, "class is abstract")
        assert exc.bean_name == "widget"
        assert exc.bean_type is Widget
        assert "Widget" in str(exc)
        assert exc.code == "BEAN_INSTANTIATION"

    def test_property_injection_error_names_property(self):
        exc = PropertyInjectionError("greeter", "printer", "cannot resolve reference to bean 'printer'")
        assert exc.property_name == "printer"
        assert "property 'printer'" in str(exc)
        assert exc.context["property_name"] == "printer"

    def test_property_injection_error_without_property(self):
        exc = PropertyInjectionError("greeter", None, "boom")
        assert exc.property_name is None
        assert "property injection failed: boom" in str(exc)

    def test_resource_parse_error_keeps_resource(self):
        exc = ResourceParseError("beans.yaml", "invalid YAML")
        assert exc.resource == "beans.yaml"
        assert exc.reason == "invalid YAML"
        assert "beans.yaml" in str(exc)

    def test_override_error_code(self):
        exc = BeanDefinitionOverrideError("printer")
        assert exc.bean_name == "printer"
        assert exc.code == "BEAN_DEFINITION_OVERRIDE"
