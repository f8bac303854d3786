"""
Immutable RGBA8 pixel buffer.

A PixelBuffer is the value every filter kernel consumes and produces. Pixels
are held in a read-only numpy array of shape (height, width, 4), so a buffer
can be shared freely between the editing thread and recomputation workers.

Classes:
    PixelBuffer: Fixed-size RGBA8 raster with value semantics
"""

from dataclasses import dataclass
from typing import Any, Tuple

import numpy as np
from PIL import Image

from FP_Libs.constants import CHANNEL_COUNT
from FP_Libs.ImageEditingLib.image_models import RgbaColor


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """
    Fixed-size RGBA8 raster.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
        pixels: Read-only uint8 array of shape (height, width, 4)
    """
    width: int
    height: int
    pixels: np.ndarray

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Invalid buffer size: {self.width}x{self.height}")

        if not isinstance(self.pixels, np.ndarray):
            raise TypeError(f"Expected numpy array, got {type(self.pixels)}")

        if self.pixels.dtype != np.uint8:
            raise TypeError(f"Expected uint8 pixels, got {self.pixels.dtype}")

        expected = (self.height, self.width, CHANNEL_COUNT)
        if self.pixels.shape != expected:
            raise ValueError(
                f"Pixel array shape {self.pixels.shape} does not match {expected}"
            )

        self.pixels.setflags(write=False)

    __hash__ = None  # type: ignore[assignment]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.pixels, other.pixels)
        )

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_array(cls, array: Any, copy: bool = True) -> "PixelBuffer":
        """
        Build a buffer from an (height, width, 4) array.

        Args:
            array: Array-like of RGBA values
            copy: Copy the data first. Pass False only for freshly
                  allocated arrays nobody else holds; they become read-only.
        """
        if copy or not isinstance(array, np.ndarray) or array.dtype != np.uint8:
            array = np.array(array, dtype=np.uint8, copy=True)
        array = np.ascontiguousarray(array)
        if array.ndim != 3:
            raise ValueError(f"Expected a 3-dimensional array, got {array.ndim} dimensions")
        height, width = array.shape[:2]
        return cls(width=width, height=height, pixels=array)

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes) -> "PixelBuffer":
        """
        Build a buffer from contiguous RGBA8 bytes.

        Raises:
            ValueError: If len(data) != width * height * 4
        """
        expected = width * height * CHANNEL_COUNT
        if len(data) != expected:
            raise ValueError(
                f"Expected {expected} bytes for {width}x{height} RGBA, got {len(data)}"
            )
        array = np.frombuffer(bytes(data), dtype=np.uint8).reshape(
            (height, width, CHANNEL_COUNT)
        ).copy()
        return cls(width=width, height=height, pixels=array)

    @classmethod
    def from_image(cls, image: Any) -> "PixelBuffer":
        """Build a buffer from a PIL Image (converted to RGBA)."""
        if not hasattr(image, "convert"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")
        rgba = image.convert("RGBA")
        return cls.from_array(np.asarray(rgba, dtype=np.uint8), copy=True)

    @classmethod
    def solid(cls, width: int, height: int, color: RgbaColor) -> "PixelBuffer":
        """Build a buffer where every pixel has the same color."""
        array = np.empty((height, width, CHANNEL_COUNT), dtype=np.uint8)
        array[:, :] = color
        return cls(width=width, height=height, pixels=array)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def get_pixel(self, x: int, y: int) -> RgbaColor:
        r, g, b, a = (int(v) for v in self.pixels[y, x])
        return r, g, b, a

    def to_bytes(self) -> bytes:
        """Return pixels as contiguous RGBA8 bytes, row-major."""
        return self.pixels.tobytes()

    def to_image(self) -> Any:
        """Return a new RGBA PIL Image with the buffer's pixels."""
        return Image.frombytes("RGBA", (self.width, self.height), self.to_bytes())
