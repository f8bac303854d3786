"""
ImageEditingLib - Core image editing functionality

This module provides the pixel buffer, filter kernels, histogram and image
codec used by the Fairplay modifier pipeline.
"""

from FP_Libs.ImageEditingLib.image_models import RgbaColor
from FP_Libs.ImageEditingLib.pixel_buffer import PixelBuffer
from FP_Libs.ImageEditingLib.histogram import Histogram, histogram
from FP_Libs.ImageEditingLib.image_codec import (
    decode_image,
    encode_image,
    format_from_path,
    load_image_file,
    save_image_file,
)

__all__ = [
    "RgbaColor",
    "PixelBuffer",
    "Histogram",
    "histogram",
    "decode_image",
    "encode_image",
    "format_from_path",
    "load_image_file",
    "save_image_file",
]
