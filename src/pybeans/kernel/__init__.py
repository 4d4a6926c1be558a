"""pybeans kernel — foundation layer with zero external dependencies."""

from pybeans.kernel.exceptions import InfrastructureException, PyBeansException

__all__ = [
    "InfrastructureException",
    "PyBeansException",
]
