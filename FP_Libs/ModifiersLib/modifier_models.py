"""
Modifier data model for Fairplay.

A modifier is one parametrized step of the editing pipeline. The set of
modifiers is closed: each variant is a frozen dataclass carrying its own
parameters, equality is structural, and parameters are validated when the
modifier is built so kernels never see out-of-range values.

Classes:
    ModifierBase: Shared behavior (serialization, display name)
    Negative, Thresholding, Grayscale, Channels, LightnessCorrection,
    BoxBlur, GaussianBlur, MedianBlur, Sobel, Laplace, Sharpening,
    UnsharpMasking: The modifier variants

Type Aliases:
    Modifier: Union of all modifier variants
"""

from dataclasses import asdict, dataclass, fields
from typing import Any, ClassVar, Dict, List, Tuple, Type, Union

from FP_Libs.constants import (
    CHANNEL_WEIGHT_MAX,
    CHANNEL_WEIGHT_MIN,
    DEFAULT_CHANNEL_WEIGHT,
    DEFAULT_GRAYSCALE_WEIGHTS,
    DEFAULT_LIGHTNESS_EXPONENT,
    DEFAULT_THRESHOLD,
    DEFAULT_WINDOW_SIZE,
    U8_MAX,
    U8_MIN,
    WINDOW_SIZE_MAX,
    WINDOW_SIZE_MIN,
)

FIELD_TYPE = "type"


def _check_bool(name: str, value: Any) -> None:
    if not isinstance(value, bool):
        raise TypeError(f"{name} must be a bool, got {type(value).__name__}")


def _check_int_range(name: str, value: Any, minimum: int, maximum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if not (minimum <= value <= maximum):
        raise ValueError(f"{name} must be {minimum}-{maximum}, got {value}")


def _check_u8(name: str, value: Any) -> None:
    _check_int_range(name, value, U8_MIN, U8_MAX)


def _check_window(name: str, value: Any) -> None:
    _check_int_range(name, value, WINDOW_SIZE_MIN, WINDOW_SIZE_MAX)
    if value % 2 == 0:
        raise ValueError(f"{name} must be odd, got {value}")


@dataclass(frozen=True)
class ModifierBase:
    """Behavior shared by every modifier variant."""

    kind: ClassVar[str] = ""
    display_name: ClassVar[str] = ""

    def __str__(self) -> str:
        return self.display_name

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, tagged with the modifier kind."""
        data: Dict[str, Any] = {FIELD_TYPE: self.kind}
        data.update(asdict(self))
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Modifier":
        """
        Create a modifier from a dictionary produced by to_dict().

        Called on ModifierBase the 'type' key selects the variant; called on
        a variant the key is optional but must match when present.

        Raises:
            KeyError: If the type is unknown
            ValueError: If the type does not match the variant
        """
        kind = data.get(FIELD_TYPE)
        if cls is ModifierBase:
            if kind not in MODIFIER_TYPES_BY_KIND:
                raise KeyError(f"Unknown modifier type: {kind}")
            target = MODIFIER_TYPES_BY_KIND[kind]
        else:
            if kind is not None and kind != cls.kind:
                raise ValueError(f"Cannot build {cls.kind} from data of type {kind}")
            target = cls

        field_names = {f.name for f in fields(target)}
        filtered = {k: v for k, v in data.items() if k in field_names}
        return target(**filtered)


@dataclass(frozen=True)
class Negative(ModifierBase):
    kind: ClassVar[str] = "negative"
    display_name: ClassVar[str] = "Negative"

    grayscale: bool = False

    def __post_init__(self) -> None:
        _check_bool("grayscale", self.grayscale)


@dataclass(frozen=True)
class Thresholding(ModifierBase):
    kind: ClassVar[str] = "thresholding"
    display_name: ClassVar[str] = "Thresholding"

    grayscale: bool = False
    threshold: int = DEFAULT_THRESHOLD

    def __post_init__(self) -> None:
        _check_bool("grayscale", self.grayscale)
        _check_u8("threshold", self.threshold)


@dataclass(frozen=True)
class Grayscale(ModifierBase):
    kind: ClassVar[str] = "grayscale"
    display_name: ClassVar[str] = "Grayscale"

    red_weight: int = DEFAULT_GRAYSCALE_WEIGHTS[0]
    green_weight: int = DEFAULT_GRAYSCALE_WEIGHTS[1]
    blue_weight: int = DEFAULT_GRAYSCALE_WEIGHTS[2]

    def __post_init__(self) -> None:
        _check_u8("red_weight", self.red_weight)
        _check_u8("green_weight", self.green_weight)
        _check_u8("blue_weight", self.blue_weight)


@dataclass(frozen=True)
class Channels(ModifierBase):
    kind: ClassVar[str] = "channels"
    display_name: ClassVar[str] = "Channels"

    red_enabled: bool = True
    red_weight: int = DEFAULT_CHANNEL_WEIGHT
    green_enabled: bool = True
    green_weight: int = DEFAULT_CHANNEL_WEIGHT
    blue_enabled: bool = True
    blue_weight: int = DEFAULT_CHANNEL_WEIGHT

    def __post_init__(self) -> None:
        for color in ("red", "green", "blue"):
            _check_bool(f"{color}_enabled", getattr(self, f"{color}_enabled"))
            _check_int_range(
                f"{color}_weight",
                getattr(self, f"{color}_weight"),
                CHANNEL_WEIGHT_MIN,
                CHANNEL_WEIGHT_MAX,
            )


@dataclass(frozen=True)
class LightnessCorrection(ModifierBase):
    kind: ClassVar[str] = "lightness_correction"
    display_name: ClassVar[str] = "Lightness correction"

    exponent: int = DEFAULT_LIGHTNESS_EXPONENT

    def __post_init__(self) -> None:
        _check_u8("exponent", self.exponent)


@dataclass(frozen=True)
class BoxBlur(ModifierBase):
    kind: ClassVar[str] = "box_blur"
    display_name: ClassVar[str] = "Box blur"

    size: int = DEFAULT_WINDOW_SIZE

    def __post_init__(self) -> None:
        _check_window("size", self.size)


@dataclass(frozen=True)
class GaussianBlur(ModifierBase):
    kind: ClassVar[str] = "gaussian_blur"
    display_name: ClassVar[str] = "Gaussian blur"

    size: int = DEFAULT_WINDOW_SIZE

    def __post_init__(self) -> None:
        _check_window("size", self.size)


@dataclass(frozen=True)
class MedianBlur(ModifierBase):
    kind: ClassVar[str] = "median_blur"
    display_name: ClassVar[str] = "Median blur"

    size: int = DEFAULT_WINDOW_SIZE

    def __post_init__(self) -> None:
        _check_window("size", self.size)


@dataclass(frozen=True)
class Sobel(ModifierBase):
    kind: ClassVar[str] = "sobel"
    display_name: ClassVar[str] = "Sobel"

    horizontal: bool = True
    vertical: bool = True

    def __post_init__(self) -> None:
        _check_bool("horizontal", self.horizontal)
        _check_bool("vertical", self.vertical)


@dataclass(frozen=True)
class Laplace(ModifierBase):
    kind: ClassVar[str] = "laplace"
    display_name: ClassVar[str] = "Laplace"


@dataclass(frozen=True)
class Sharpening(ModifierBase):
    kind: ClassVar[str] = "sharpening"
    display_name: ClassVar[str] = "Sharpening"


@dataclass(frozen=True)
class UnsharpMasking(ModifierBase):
    kind: ClassVar[str] = "unsharp_masking"
    display_name: ClassVar[str] = "Unsharp masking"

    blur_size: int = DEFAULT_WINDOW_SIZE

    def __post_init__(self) -> None:
        _check_window("blur_size", self.blur_size)


Modifier = Union[
    Negative,
    Thresholding,
    Grayscale,
    Channels,
    LightnessCorrection,
    BoxBlur,
    GaussianBlur,
    MedianBlur,
    Sobel,
    Laplace,
    Sharpening,
    UnsharpMasking,
]

# Catalogue order, as offered by the "Add a modifier" list
MODIFIER_TYPES: Tuple[Type[ModifierBase], ...] = (
    Negative,
    Thresholding,
    Grayscale,
    Channels,
    LightnessCorrection,
    BoxBlur,
    GaussianBlur,
    MedianBlur,
    Sobel,
    Laplace,
    Sharpening,
    UnsharpMasking,
)

MODIFIER_TYPES_BY_KIND: Dict[str, Type[ModifierBase]] = {
    modifier_type.kind: modifier_type for modifier_type in MODIFIER_TYPES
}


def is_modifier(value: Any) -> bool:
    """Check whether value is an instance of one of the modifier variants."""
    return type(value) in MODIFIER_TYPES


def default_modifiers() -> List[Modifier]:
    """Return one default-parameter instance of every variant, in catalogue order."""
    return [modifier_type() for modifier_type in MODIFIER_TYPES]
