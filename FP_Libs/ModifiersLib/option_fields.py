"""
Editable option descriptors for modifiers.

The parameter-editing panel of the presentation layer needs to know, for a
selected modifier, which controls to show: checkboxes for bool options and
sliders with a range and step for integer options. This module describes
those controls and applies an edited value to produce a new modifier.

Classes:
    OptionField: Description of one editable option

Functions:
    get_option_fields: List the editable options of a modifier or variant
    with_option: Return a copy of a modifier with one option changed
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Tuple, Type, Union

from FP_Libs.constants import (
    CHANNEL_WEIGHT_MAX,
    CHANNEL_WEIGHT_MIN,
    U8_MAX,
    U8_MIN,
    WINDOW_SIZE_MAX,
    WINDOW_SIZE_MIN,
    WINDOW_SIZE_STEP,
)
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
    Negative,
    Sharpening,
    Sobel,
    Thresholding,
    UnsharpMasking,
    is_modifier,
)

KIND_BOOL = "bool"
KIND_INT = "int"


@dataclass(frozen=True)
class OptionField:
    """
    One editable modifier option.

    Attributes:
        name: Dataclass field name on the modifier
        label: Label shown next to the control
        kind: 'bool' (checkbox) or 'int' (slider)
        minimum: Lowest slider value (int options only)
        maximum: Highest slider value (int options only)
        step: Slider step (int options only)
    """
    name: str
    label: str
    kind: str
    minimum: Optional[int] = None
    maximum: Optional[int] = None
    step: int = 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "label": self.label,
            "kind": self.kind,
            "minimum": self.minimum,
            "maximum": self.maximum,
            "step": self.step,
        }


def _checkbox(name: str, label: str) -> OptionField:
    return OptionField(name=name, label=label, kind=KIND_BOOL)


def _u8_slider(name: str, label: str) -> OptionField:
    return OptionField(name=name, label=label, kind=KIND_INT, minimum=U8_MIN, maximum=U8_MAX)


def _weight_slider(name: str, label: str) -> OptionField:
    return OptionField(
        name=name, label=label, kind=KIND_INT,
        minimum=CHANNEL_WEIGHT_MIN, maximum=CHANNEL_WEIGHT_MAX,
    )


def _window_slider(name: str) -> OptionField:
    return OptionField(
        name=name, label="Box size", kind=KIND_INT,
        minimum=WINDOW_SIZE_MIN, maximum=WINDOW_SIZE_MAX, step=WINDOW_SIZE_STEP,
    )


OPTION_FIELDS: Dict[Type[ModifierBase], Tuple[OptionField, ...]] = {
    Negative: (_checkbox("grayscale", "Grayscale"),),
    Thresholding: (
        _checkbox("grayscale", "Grayscale"),
        _u8_slider("threshold", "Threshold"),
    ),
    Grayscale: (
        _u8_slider("red_weight", "Red"),
        _u8_slider("green_weight", "Green"),
        _u8_slider("blue_weight", "Blue"),
    ),
    Channels: (
        _weight_slider("red_weight", "Red"),
        _checkbox("red_enabled", "Red enabled"),
        _weight_slider("green_weight", "Green"),
        _checkbox("green_enabled", "Green enabled"),
        _weight_slider("blue_weight", "Blue"),
        _checkbox("blue_enabled", "Blue enabled"),
    ),
    LightnessCorrection: (_u8_slider("exponent", "Exponent"),),
    BoxBlur: (_window_slider("size"),),
    GaussianBlur: (_window_slider("size"),),
    MedianBlur: (_window_slider("size"),),
    Sobel: (
        _checkbox("horizontal", "Horizontal"),
        _checkbox("vertical", "Vertical"),
    ),
    Laplace: (),
    Sharpening: (),
    UnsharpMasking: (_window_slider("blur_size"),),
}


def get_option_fields(
    modifier: Union[Modifier, Type[ModifierBase]],
) -> List[OptionField]:
    """
    List the editable options of a modifier or modifier variant.

    Raises:
        TypeError: If the argument is not a modifier variant
    """
    modifier_type = modifier if isinstance(modifier, type) else type(modifier)
    if modifier_type not in OPTION_FIELDS:
        raise TypeError(f"Expected a modifier, got {modifier_type.__name__}")
    return list(OPTION_FIELDS[modifier_type])


def with_option(modifier: Modifier, name: str, value: Any) -> Modifier:
    """
    Return a copy of modifier with one option replaced.

    The new value goes through the variant's validation, so an invalid value
    (e.g. an even blur size) raises instead of producing a bad modifier.

    Raises:
        TypeError: If modifier is not a modifier, or value has the wrong type
        KeyError: If the modifier has no editable option called name
        ValueError: If value is out of range
    """
    if not is_modifier(modifier):
        raise TypeError(f"Expected a modifier, got {type(modifier).__name__}")

    names = {option.name for option in OPTION_FIELDS[type(modifier)]}
    if name not in names:
        raise KeyError(f"{modifier.display_name} has no option '{name}'")

    return replace(modifier, **{name: value})
