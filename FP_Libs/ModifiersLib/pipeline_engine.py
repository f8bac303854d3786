"""
Modifier Pipeline Engine

Applies an ordered list of modifiers to a base image. The chain is always
recomputed in full from the base buffer, in list order, with no per-step
caching: the output is a pure function of (base, modifiers).
"""

import logging
import time
from typing import List, Optional, Sequence, Tuple

from FP_Libs.ImageEditingLib.pixel_buffer import PixelBuffer
from FP_Libs.ModifiersLib.modifier_models import Modifier, is_modifier
from FP_Libs.ModifiersLib.modifier_registry import (
    ModifierKernelRegistry,
    get_default_registry,
)

logger = logging.getLogger(__name__)


def validate_modifiers(
    modifiers: Sequence[Modifier],
    registry: Optional[ModifierKernelRegistry] = None,
) -> Tuple[bool, List[str]]:
    """
    Check that a modifier chain can be executed.

    Performs the following checks:
    - Every entry is a modifier variant
    - Every variant in the chain has a registered executor

    Args:
        modifiers: The modifier chain
        registry: Registry to check against (default registry if None)

    Returns:
        Tuple of (is_valid: bool, errors: List[str])
    """
    registry = registry or get_default_registry()
    errors: List[str] = []

    for index, modifier in enumerate(modifiers):
        if not is_modifier(modifier):
            errors.append(f"Entry {index}: not a modifier ({type(modifier).__name__})")
            continue
        if not registry.has_kernel(type(modifier)):
            errors.append(f"Entry {index}: no kernel registered for '{modifier.kind}'")

    return len(errors) == 0, errors


def apply_pipeline(
    base: PixelBuffer,
    modifiers: Sequence[Modifier],
    registry: Optional[ModifierKernelRegistry] = None,
) -> PixelBuffer:
    """
    Apply every modifier in order, starting from base.

    Args:
        base: The original image; never modified
        modifiers: Ordered modifier chain (may be empty)
        registry: Registry providing executors (default registry if None)

    Returns:
        The final buffer. With no modifiers this is base itself.

    Raises:
        TypeError: If base is not a PixelBuffer or the chain holds a non-modifier
        KeyError: If a modifier has no registered executor
        RuntimeError: If an executor fails, with the failing step in the message
    """
    if not isinstance(base, PixelBuffer):
        raise TypeError(f"Expected PixelBuffer, got {type(base)}")

    registry = registry or get_default_registry()
    chain = list(modifiers)

    is_valid, errors = validate_modifiers(chain, registry)
    if not is_valid:
        if any("not a modifier" in error for error in errors):
            raise TypeError("; ".join(errors))
        raise KeyError("; ".join(errors))

    started = time.perf_counter()
    result = base
    for index, modifier in enumerate(chain):
        try:
            result = registry.execute(result, modifier)
        except Exception as e:
            # Re-raise with step context
            raise RuntimeError(
                f"Error applying modifier {index} ({modifier.display_name}): {str(e)}"
            ) from e

    elapsed = time.perf_counter() - started
    logger.debug(
        f"Applied {len(chain)} modifier(s) to {base.width}x{base.height} image "
        f"in {elapsed:.3f}s"
    )
    return result


def get_pipeline_summary(modifiers: Sequence[Modifier]) -> str:
    """
    Generate human-readable summary of a modifier chain.

    Example:
        >>> print(get_pipeline_summary([Grayscale(), Thresholding()]))
        Pipeline Summary:
          Total Modifiers: 2
        ...
    """
    lines = [
        "Pipeline Summary:",
        f"  Total Modifiers: {len(modifiers)}",
        "",
    ]

    for index, modifier in enumerate(modifiers):
        options = {k: v for k, v in modifier.to_dict().items() if k != "type"}
        if options:
            option_str = ", ".join(f"{k}={v}" for k, v in options.items())
            lines.append(f"  {index}. {modifier.display_name} ({option_str})")
        else:
            lines.append(f"  {index}. {modifier.display_name}")

    order = " -> ".join(["base"] + [m.display_name for m in modifiers])
    lines.append("")
    lines.append(f"Execution Order: {order}")

    return "\n".join(lines)
