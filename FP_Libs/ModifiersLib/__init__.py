"""
ModifiersLib - Modifier model and pipeline engine

This module defines the closed set of modifier variants, their editable
options, the registry mapping each variant to its kernel, and the engine
that applies a modifier chain to a base image.
"""

from FP_Libs.ModifiersLib.modifier_models import (
    BoxBlur,
    Channels,
    GaussianBlur,
    Grayscale,
    Laplace,
    LightnessCorrection,
    MedianBlur,
    Modifier,
    ModifierBase,
    MODIFIER_TYPES,
    Negative,
    Sharpening,
    Sobel,
    Thresholding,
    UnsharpMasking,
    default_modifiers,
)
from FP_Libs.ModifiersLib.option_fields import OptionField, get_option_fields, with_option
from FP_Libs.ModifiersLib.modifier_registry import (
    ModifierKernelRegistry,
    get_default_registry,
)
from FP_Libs.ModifiersLib.pipeline_engine import (
    apply_pipeline,
    get_pipeline_summary,
    validate_modifiers,
)

__all__ = [
    "BoxBlur",
    "Channels",
    "GaussianBlur",
    "Grayscale",
    "Laplace",
    "LightnessCorrection",
    "MedianBlur",
    "Modifier",
    "ModifierBase",
    "MODIFIER_TYPES",
    "Negative",
    "Sharpening",
    "Sobel",
    "Thresholding",
    "UnsharpMasking",
    "default_modifiers",
    "OptionField",
    "get_option_fields",
    "with_option",
    "ModifierKernelRegistry",
    "get_default_registry",
    "apply_pipeline",
    "get_pipeline_summary",
    "validate_modifiers",
]
