"""
Modifier Kernel Registry.

This module provides a centralized registry mapping each modifier variant to
the executor that runs it. The set of variants is closed, so the registry
only accepts modifier types and can report which variants still lack an
executor.

Classes:
    ModifierKernelRegistry: Registry for modifier executors

Functions:
    get_default_registry: Get the global default registry (singleton)
    register_default_kernels: Register the built-in executor of every variant
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Type

from FP_Libs.ImageEditingLib.pixel_buffer import PixelBuffer
from FP_Libs.ModifiersLib.modifier_models import MODIFIER_TYPES, ModifierBase

logger = logging.getLogger(__name__)

# Type alias for executor function
KernelFunction = Callable[[PixelBuffer, Any], PixelBuffer]


class ModifierKernelRegistry:
    """
    Registry for modifier executors.

    Example:
        >>> registry = ModifierKernelRegistry()
        >>> registry.register(Negative, execute_negative)
        >>> output = registry.execute(buffer, Negative(grayscale=True))
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._kernels: Dict[Type[ModifierBase], KernelFunction] = {}

    def register(self, modifier_type: Type[ModifierBase], kernel: KernelFunction) -> None:
        """
        Register the executor for a modifier variant.

        Args:
            modifier_type: One of the modifier variant classes
            kernel: Callable accepting (buffer, modifier) and returning a buffer

        Raises:
            TypeError: If modifier_type is not a modifier variant
            ValueError: If kernel is not callable
            RuntimeError: If modifier_type is already registered
        """
        if modifier_type not in MODIFIER_TYPES:
            raise TypeError(f"Not a modifier variant: {modifier_type!r}")

        if not callable(kernel):
            raise ValueError(f"kernel must be callable, got {type(kernel)}")

        if modifier_type in self._kernels:
            raise RuntimeError(f"Modifier '{modifier_type.kind}' is already registered")

        self._kernels[modifier_type] = kernel
        logger.debug(f"Registered kernel for modifier: {modifier_type.kind}")

    def get_kernel(self, modifier_type: Type[ModifierBase]) -> KernelFunction:
        """
        Get the executor for a modifier variant.

        Raises:
            KeyError: If no executor is registered for the type
        """
        if modifier_type not in self._kernels:
            available = ", ".join(self.list_kinds())
            raise KeyError(
                f"No kernel registered for modifier '{getattr(modifier_type, 'kind', modifier_type)}'. "
                f"Available: {available}"
            )

        return self._kernels[modifier_type]

    def has_kernel(self, modifier_type: Type[ModifierBase]) -> bool:
        return modifier_type in self._kernels

    def execute(self, buffer: PixelBuffer, modifier: ModifierBase) -> PixelBuffer:
        """
        Run the executor registered for modifier's variant.

        Raises:
            KeyError: If the variant has no executor
        """
        kernel = self.get_kernel(type(modifier))
        return kernel(buffer, modifier)

    def list_kinds(self) -> List[str]:
        """Sorted list of registered modifier kinds."""
        return sorted(modifier_type.kind for modifier_type in self._kernels)

    def missing_kinds(self) -> List[str]:
        """Modifier kinds that have no executor, in catalogue order."""
        return [
            modifier_type.kind
            for modifier_type in MODIFIER_TYPES
            if modifier_type not in self._kernels
        ]

    def is_complete(self) -> bool:
        """True when every modifier variant has an executor."""
        return not self.missing_kinds()


# Global singleton registry
_default_registry: Optional[ModifierKernelRegistry] = None


def get_default_registry() -> ModifierKernelRegistry:
    """
    Get the global default registry (singleton).

    Creates the registry on first call and registers the built-in executors.

    Raises:
        RuntimeError: If a modifier variant was left without an executor
    """
    global _default_registry

    if _default_registry is None:
        registry = ModifierKernelRegistry()
        register_default_kernels(registry)
        if not registry.is_complete():
            raise RuntimeError(
                f"No built-in kernel for modifier(s): {', '.join(registry.missing_kinds())}"
            )
        _default_registry = registry

    return _default_registry


def register_default_kernels(registry: ModifierKernelRegistry) -> None:
    """
    Register the built-in executor of every modifier variant.

    Args:
        registry: The registry to register executors with
    """
    from FP_Libs.ModifiersLib import modifier_executors as executors
    from FP_Libs.ModifiersLib.modifier_models import (
        BoxBlur,
        Channels,
        GaussianBlur,
        Grayscale,
        Laplace,
        LightnessCorrection,
        MedianBlur,
        Negative,
        Sharpening,
        Sobel,
        Thresholding,
        UnsharpMasking,
    )

    registry.register(Negative, executors.execute_negative)
    registry.register(Thresholding, executors.execute_thresholding)
    registry.register(Grayscale, executors.execute_grayscale)
    registry.register(Channels, executors.execute_channels)
    registry.register(LightnessCorrection, executors.execute_lightness_correction)
    registry.register(BoxBlur, executors.execute_box_blur)
    registry.register(GaussianBlur, executors.execute_gaussian_blur)
    registry.register(MedianBlur, executors.execute_median_blur)
    registry.register(Sobel, executors.execute_sobel)
    registry.register(Laplace, executors.execute_laplace)
    registry.register(Sharpening, executors.execute_sharpening)
    registry.register(UnsharpMasking, executors.execute_unsharp_masking)

    logger.info("Registered default modifier kernels")
