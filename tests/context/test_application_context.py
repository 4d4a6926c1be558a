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
"""Tests for ApplicationContext — the refresh lifecycle."""

from typing import Any

import pytest

from pybeans.beans.definition import BeanDefinition, BeanReference
from pybeans.container.exceptions import (
    BeanDefinitionOverrideError,
    ContextAlreadyRefreshedError,
    InstantiationError,
    ResourceParseError,
)
from pybeans.container.factory import BeanFactory
from pybeans.context.application_context import ApplicationContext
from pybeans.core.config import Config
from pybeans.io.reader import MappingBeanDefinitionReader

# --- Test beans ---


class OutputService:
    prefix = ""


class HelloWorldService:
    text = None
    output = None


class Proxy:
    def __init__(self, target):
        self.target = target


class ProxyCreator:
    def after_init(self, bean, bean_name):
        if isinstance(bean, HelloWorldService):
            return Proxy(bean)
        return bean


class NeedsArgs:
    def __init__(self, value):
        self.value = value


class FakeLogging:
    def __init__(self):
        self.configured_with = None

    def configure(self, config: Any) -> None:
        self.configured_with = config

    def get_logger(self, name: str) -> Any:
        return None


def hello_document(*extra):
    return {
        "beans": [
            {
                "name": "helloWorldService",
                "class": HelloWorldService,
                "properties": {"text": "Hello World!", "output": {"ref": "outputService"}},
            },
            {"name": "outputService", "class": OutputService},
            *extra,
        ]
    }


class Tracer:
    def __init__(self):
        self.seen = []

    def after_init(self, bean, bean_name):
        self.seen.append(bean_name)
        return bean


class CountingReader(MappingBeanDefinitionReader):
    def __init__(self):
        self.loads = 0

    def load_bean_definitions(self, resource):
        self.loads += 1
        return super().load_bean_definitions(resource)


class FailingReader:
    def load_bean_definitions(self, resource):
        raise ResourceParseError(str(resource), "broken")


# --- Tests ---


class TestRefresh:
    def test_refresh_registers_and_eagerly_creates(self):
        ctx = ApplicationContext(MappingBeanDefinitionReader(), hello_document())
        ctx.refresh()

        assert ctx.is_refreshed
        assert ctx.factory.bean_definition_names == ("helloWorldService", "outputService")
        for name in ctx.factory.bean_definition_names:
            assert ctx.factory.get_bean_definition(name).is_initialized

        service = ctx.get_bean("helloWorldService")
        assert service.text == "Hello World!"
        assert service.output is ctx.get_bean("outputService")

    def test_lazy_when_eager_init_disabled(self):
        config = Config({"pybeans": {"context": {"eager-init": False}}})
        ctx = ApplicationContext(MappingBeanDefinitionReader(), hello_document(), config=config)
        ctx.refresh()

        assert ctx.is_refreshed
        assert ctx.factory.get_bean_definition("outputService").instance is None
        assert isinstance(ctx.get_bean("outputService"), OutputService)

    def test_refresh_without_reader(self):
        ctx = ApplicationContext()
        ctx.register_bean_definition("output", BeanDefinition(OutputService))
        ctx.refresh()
        assert ctx.factory.get_bean_definition("output").is_initialized

    def test_second_refresh_rejected(self):
        ctx = ApplicationContext(MappingBeanDefinitionReader(), hello_document())
        ctx.refresh()
        first = ctx.get_bean("outputService")

        with pytest.raises(ContextAlreadyRefreshedError):
            ctx.refresh()
        assert ctx.get_bean("outputService") is first
        assert ctx.factory.bean_definition_count == 2

    def test_parse_error_propagates_unchanged(self):
        ctx = ApplicationContext(FailingReader(), "beans.yaml")
        with pytest.raises(ResourceParseError) as exc_info:
            ctx.refresh()
        assert exc_info.value.resource == "beans.yaml"
        assert not ctx.is_refreshed

    def test_eager_failure_leaves_context_unrefreshed(self):
        doc = hello_document({"name": "broken", "class": NeedsArgs})
        ctx = ApplicationContext(MappingBeanDefinitionReader(), doc)
        with pytest.raises(InstantiationError):
            ctx.refresh()
        assert not ctx.is_refreshed

    def test_failed_refresh_can_be_retried(self):
        class Flaky:
            ready = False

            def __init__(self):
                if not Flaky.ready:
                    raise RuntimeError("not ready")

        reader = CountingReader()
        ctx = ApplicationContext(reader, hello_document({"name": "flaky", "class": Flaky}))
        with pytest.raises(InstantiationError):
            ctx.refresh()
        output = ctx.get_bean("outputService")

        Flaky.ready = True
        ctx.refresh()
        assert ctx.is_refreshed
        assert reader.loads == 1
        assert ctx.get_bean("outputService") is output

    def test_retry_with_overriding_disabled(self):
        class Flaky:
            ready = False

            def __init__(self):
                if not Flaky.ready:
                    raise RuntimeError("not ready")

        config = Config({"pybeans": {"container": {"allow-definition-overriding": False}}})
        doc = hello_document({"name": "flaky", "class": Flaky})
        ctx = ApplicationContext(MappingBeanDefinitionReader(), doc, config=config)
        with pytest.raises(InstantiationError):
            ctx.refresh()

        Flaky.ready = True
        ctx.refresh()
        assert isinstance(ctx.get_bean("flaky"), Flaky)

    def test_retry_does_not_duplicate_detected_post_processors(self):
        class Flaky:
            ready = False

            def __init__(self):
                if not Flaky.ready:
                    raise RuntimeError("not ready")

        doc = hello_document({"name": "tracer", "class": Tracer}, {"name": "flaky", "class": Flaky})
        ctx = ApplicationContext(MappingBeanDefinitionReader(), doc)
        with pytest.raises(InstantiationError):
            ctx.refresh()
        tracer = ctx.get_bean("tracer")

        Flaky.ready = True
        ctx.refresh()
        assert ctx.factory.post_processors == (tracer,)
        assert tracer.seen.count("flaky") == 1
        assert tracer.seen.count("helloWorldService") == 1


class TestPostProcessorDetection:
    def test_post_processor_definitions_are_registered(self):
        doc = hello_document({"name": "proxyCreator", "class": ProxyCreator})
        ctx = ApplicationContext(MappingBeanDefinitionReader(), doc)
        ctx.refresh()

        assert ctx.factory.post_processors == (ctx.get_bean("proxyCreator"),)
        service = ctx.get_bean("helloWorldService")
        assert isinstance(service, Proxy)
        assert service.target.text == "Hello World!"

    def test_detection_can_be_disabled(self):
        config = Config({"pybeans": {"context": {"detect-post-processors": False}}})
        doc = hello_document({"name": "proxyCreator", "class": ProxyCreator})
        ctx = ApplicationContext(MappingBeanDefinitionReader(), doc, config=config)
        ctx.refresh()

        assert ctx.factory.post_processors == ()
        assert isinstance(ctx.get_bean("helloWorldService"), HelloWorldService)

    def test_manual_post_processor(self):
        ctx = ApplicationContext(MappingBeanDefinitionReader(), hello_document())
        ctx.add_bean_post_processor(ProxyCreator())
        ctx.refresh()
        assert isinstance(ctx.get_bean("helloWorldService"), Proxy)


class TestContextDelegation:
    def test_get_beans_of_type(self):
        ctx = ApplicationContext(MappingBeanDefinitionReader(), hello_document())
        ctx.refresh()
        assert ctx.get_beans_of_type(OutputService) == [ctx.get_bean("outputService")]

    def test_contains_bean(self):
        ctx = ApplicationContext(MappingBeanDefinitionReader(), hello_document())
        ctx.refresh()
        assert ctx.contains_bean("outputService")
        assert not ctx.contains_bean("missing")

    def test_uses_supplied_factory(self):
        factory = BeanFactory()
        ctx = ApplicationContext(factory=factory)
        assert ctx.factory is factory

    def test_factory_configured_from_config(self):
        config = Config({"pybeans": {"container": {"allow-definition-overriding": False}}})
        ctx = ApplicationContext(config=config)
        ctx.register_bean_definition("a", BeanDefinition(OutputService))
        with pytest.raises(BeanDefinitionOverrideError):
            ctx.register_bean_definition("a", BeanDefinition(HelloWorldService))
        assert ctx.config is config

    def test_logging_port_configured_on_refresh(self):
        logging_port = FakeLogging()
        config = Config({})
        ctx = ApplicationContext(config=config, logging=logging_port)
        assert logging_port.configured_with is None
        ctx.refresh()
        assert logging_port.configured_with is config

    def test_references_across_manual_and_loaded_definitions(self):
        ctx = ApplicationContext(MappingBeanDefinitionReader(), {"beans": [{"name": "outputService", "class": OutputService}]})
        ctx.register_bean_definition(
            "hello", BeanDefinition(HelloWorldService, {"output": BeanReference("outputService")})
        )
        ctx.refresh()
        assert ctx.get_bean("hello").output is ctx.get_bean("outputService")
