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
"""pybeans — a small inversion-of-control container with Spring-style bean lifecycle."""

from pybeans.beans import BeanDefinition, BeanReference, PropertyValue, PropertyValues
from pybeans.container import (
    AttributePropertyInjector,
    BeanCreationError,
    BeanDefinitionOverrideError,
    BeanDefinitionStoreError,
    BeanFactory,
    BeanPostProcessor,
    BeansException,
    ContextAlreadyRefreshedError,
    InstantiationError,
    PropertyInjectionError,
    PropertyInjector,
    ResourceParseError,
    UndefinedBeanError,
)
from pybeans.context import ApplicationContext
from pybeans.core import Config
from pybeans.io import MappingBeanDefinitionReader, YamlBeanDefinitionReader

__version__ = "0.1.0"

__all__ = [
    "ApplicationContext",
    "AttributePropertyInjector",
    "BeanCreationError",
    "BeanDefinition",
    "BeanDefinitionOverrideError",
    "BeanDefinitionStoreError",
    "BeanFactory",
    "BeanPostProcessor",
    "BeanReference",
    "BeansException",
    "Config",
    "ContextAlreadyRefreshedError",
    "InstantiationError",
    "MappingBeanDefinitionReader",
    "PropertyInjectionError",
    "PropertyInjector",
    "PropertyValue",
    "PropertyValues",
    "ResourceParseError",
    "UndefinedBeanError",
    "YamlBeanDefinitionReader",
]
