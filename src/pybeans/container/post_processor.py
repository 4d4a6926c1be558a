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
"""BeanPostProcessor — hooks into bean creation, and the pipeline that runs them."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any, Protocol, runtime_checkable

import structlog

logger = structlog.get_logger("pybeans.container.post_processor")

_HOOKS = ("before_init", "after_init")


@runtime_checkable
class BeanPostProcessor(Protocol):
    """Hook into bean initialization.

    Implementations are called for every bean created by the BeanFactory,
    after its properties have been injected:
    - ``before_init``: first phase, run for every processor in order
    - ``after_init``: second phase, run for every processor in order

    A processor may implement only one of the two hooks. Either hook may
    return a replacement bean (e.g. a proxy); returning ``None`` keeps the
    current one.
    """

    def before_init(self, bean: Any, bean_name: str) -> Any:
        """Called before the after-init phase. May return a replacement bean."""
        ...

    def after_init(self, bean: Any, bean_name: str) -> Any:
        """Called last. May return a replacement bean."""
        ...


def is_post_processor(candidate: Any) -> bool:
    """Return True if *candidate* (an instance or a class) implements any hook."""
    return any(callable(getattr(candidate, hook, None)) for hook in _HOOKS)


class PostProcessorPipeline:
    """Ordered two-phase interception chain applied to every new bean.

    Processors run in the order they were added; that order cannot be
    changed afterwards. All ``before_init`` hooks run first, then all
    ``after_init`` hooks, each receiving whatever the previous hook returned.
    """

    def __init__(self, processors: Iterable[Any] | None = None) -> None:
        self._processors: list[Any] = []
        for processor in processors or ():
            self.add(processor)

    def add(self, processor: Any) -> None:
        """Append a processor to the end of the chain."""
        if not is_post_processor(processor):
            raise TypeError(
                f"{type(processor).__qualname__} implements neither before_init nor after_init"
            )
        self._processors.append(processor)

    def apply(self, bean: Any, bean_name: str) -> Any:
        """Run both phases over *bean* and return the final object."""
        bean = self._run_phase("before_init", bean, bean_name)
        return self._run_phase("after_init", bean, bean_name)

    def _run_phase(self, hook: str, bean: Any, bean_name: str) -> Any:
        for processor in list(self._processors):
            method = getattr(processor, hook, None)
            if method is None:
                continue
            result = method(bean, bean_name)
            if result is None:
                continue
            if result is not bean:
                logger.debug(
                    "bean_replaced",
                    bean=bean_name,
                    phase=hook,
                    processor=type(processor).__qualname__,
                    replacement=type(result).__qualname__,
                )
            bean = result
        return bean

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._processors))

    def __len__(self) -> int:
        return len(self._processors)
