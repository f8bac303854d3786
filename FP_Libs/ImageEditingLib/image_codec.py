"""
Image codec adapters for Fairplay.

Turns encoded bytes or image files into PixelBuffers and back, using Pillow.
Decoding always yields RGBA8. Failures are reported as ImageDecodeError or
ImageEncodeError with the Pillow error chained.

Functions:
    decode_image: Decode bytes into a PixelBuffer
    encode_image: Encode a PixelBuffer into bytes of a given format
    format_from_path: Guess a Pillow format name from a file extension
    load_image_file: Read and decode an image file
    save_image_file: Encode and write an image file
    is_supported_open_format: Check whether a path can be opened in the editor
"""

import io
import logging
from pathlib import Path
from typing import Optional, Union

from PIL import Image, UnidentifiedImageError

from FP_Libs.constants import DEFAULT_OUTPUT_FORMAT, SUPPORTED_OPEN_EXTENSIONS
from FP_Libs.errors import ImageDecodeError, ImageEncodeError
from FP_Libs.ImageEditingLib.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def is_supported_open_format(path: PathLike) -> bool:
    """Check whether the file extension is one the editor opens."""
    return Path(path).suffix.lower() in SUPPORTED_OPEN_EXTENSIONS


def format_from_path(path: PathLike) -> str:
    """
    Guess the Pillow format name from a file extension.

    Args:
        path: Target file path (e.g. "edited.jpg")

    Returns:
        Pillow format name such as "PNG" or "JPEG"

    Raises:
        ImageEncodeError: If the extension is missing or unknown
    """
    suffix = Path(path).suffix.lower()
    if not suffix:
        raise ImageEncodeError(f"Cannot determine image format for '{path}': no extension")

    image_format = Image.registered_extensions().get(suffix)
    if image_format is None:
        raise ImageEncodeError(f"Unsupported image extension: {suffix}")
    return image_format


def decode_image(data: bytes) -> PixelBuffer:
    """
    Decode encoded image bytes into an RGBA PixelBuffer.

    The format is guessed from the content.

    Raises:
        ImageDecodeError: If the bytes are not a readable image
    """
    if not data:
        raise ImageDecodeError("No image data")

    try:
        with Image.open(io.BytesIO(data)) as image:
            image.load()
            buffer = PixelBuffer.from_image(image)
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise ImageDecodeError(f"Failed to decode image: {exc}") from exc

    logger.debug(f"Decoded {buffer.width}x{buffer.height} image ({len(data)} bytes)")
    return buffer


def encode_image(buffer: PixelBuffer, image_format: str = DEFAULT_OUTPUT_FORMAT) -> bytes:
    """
    Encode a PixelBuffer into the given format.

    Formats without an alpha channel (JPEG, BMP) receive an RGB copy.

    Args:
        buffer: Buffer to encode
        image_format: Pillow format name ("PNG", "JPEG", ...). "JPG" is accepted.

    Raises:
        ImageEncodeError: If Pillow cannot write the format
    """
    save_format = image_format.upper()
    if save_format == "JPG":
        save_format = "JPEG"

    image = buffer.to_image()
    if save_format in ("JPEG", "BMP"):
        image = image.convert("RGB")

    output = io.BytesIO()
    try:
        image.save(output, format=save_format)
    except (KeyError, OSError, ValueError) as exc:
        raise ImageEncodeError(f"Failed to encode image as {save_format}: {exc}") from exc

    data = output.getvalue()
    logger.debug(f"Encoded {buffer.width}x{buffer.height} image as {save_format} ({len(data)} bytes)")
    return data


def load_image_file(path: PathLike) -> PixelBuffer:
    """
    Read an image file from disk.

    Raises:
        ImageDecodeError: If the file cannot be read or decoded
    """
    file_path = Path(path)
    try:
        data = file_path.read_bytes()
    except OSError as exc:
        raise ImageDecodeError(f"Cannot read image file {file_path}: {exc}") from exc
    return decode_image(data)


def save_image_file(
    buffer: PixelBuffer,
    path: PathLike,
    image_format: Optional[str] = None,
) -> Path:
    """
    Encode a buffer and write it to disk.

    Args:
        buffer: Buffer to save
        path: Output file path
        image_format: Explicit format, or None to guess from the extension

    Returns:
        The path written

    Raises:
        ImageEncodeError: If encoding or writing fails
    """
    file_path = Path(path)
    data = encode_image(buffer, image_format or format_from_path(file_path))
    try:
        file_path.write_bytes(data)
    except OSError as exc:
        raise ImageEncodeError(f"Cannot write image file {file_path}: {exc}") from exc

    logger.info(f"Saved image to {file_path}")
    return file_path
