"""
Editor shell state.

The Editor holds the session of the currently opened image. Opening another
image replaces the session, and with it the modifier chain and the history,
so undo never reaches across images. A failed open or save leaves the
current session as it was.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from FP_Libs.constants import DEFAULT_OUTPUT_FORMAT, DEFAULT_SAVE_FILENAME
from FP_Libs.errors import ImageDecodeError, InvalidActionError
from FP_Libs.HistoryLib.edit_session import EditSession
from FP_Libs.HistoryLib.recompute_runner import RecomputeRunner
from FP_Libs.ImageEditingLib.image_codec import (
    decode_image,
    encode_image,
    is_supported_open_format,
    load_image_file,
    save_image_file,
)
from FP_Libs.ImageEditingLib.pixel_buffer import PixelBuffer
from FP_Libs.ModifiersLib.pipeline_engine import apply_pipeline

logger = logging.getLogger(__name__)


class Editor:
    """
    Owns the current EditSession and the recompute runner shared by sessions.

    Example:
        >>> editor = Editor()
        >>> session = editor.open_file("photo.png")
        >>> session.apply(ModifierAdded(Grayscale()))
        >>> editor.export_file("edited.png")
    """

    def __init__(self, runner: Optional[RecomputeRunner] = None) -> None:
        self._owns_runner = runner is None
        self._runner = runner or RecomputeRunner()
        self.session: Optional[EditSession] = None

    def _require_session(self) -> EditSession:
        if self.session is None:
            raise InvalidActionError("No image is open")
        return self.session

    def open_buffer(self, buffer: PixelBuffer) -> EditSession:
        """Start a new session on an already decoded buffer."""
        previous = self.session
        self.session = EditSession(buffer, runner=self._runner)
        if previous is not None:
            previous.close()
        logger.info(f"Opened {buffer.width}x{buffer.height} image in a new session")
        return self.session

    def open_bytes(self, data: bytes) -> EditSession:
        """
        Decode image bytes and start a new session.

        Raises:
            ImageDecodeError: If the bytes cannot be decoded
        """
        return self.open_buffer(decode_image(data))

    def open_file(self, path: Union[str, Path]) -> EditSession:
        """
        Read a PNG or JPEG file and start a new session.

        Raises:
            ImageDecodeError: If the extension is not supported, or the file
                cannot be read or decoded
        """
        if not is_supported_open_format(path):
            raise ImageDecodeError(f"Unsupported image file type: {Path(path).suffix or path}")
        return self.open_buffer(load_image_file(path))

    def render(self) -> PixelBuffer:
        """
        Apply the current chain to the base image synchronously.

        Unlike session.output this never lags behind a pending recomputation.
        """
        session = self._require_session()
        return apply_pipeline(session.base, list(session.modifiers))

    def export_bytes(self, image_format: str = DEFAULT_OUTPUT_FORMAT) -> bytes:
        """
        Encode the edited image.

        Raises:
            InvalidActionError: If no image is open
            ImageEncodeError: If encoding fails
        """
        return encode_image(self.render(), image_format)

    def export_file(
        self,
        path: Union[str, Path] = DEFAULT_SAVE_FILENAME,
        image_format: Optional[str] = None,
    ) -> Path:
        """
        Save the edited image, guessing the format from the extension.

        Raises:
            InvalidActionError: If no image is open
            ImageEncodeError: If encoding or writing fails
        """
        return save_image_file(self.render(), path, image_format)

    def close(self) -> None:
        """Close the current session and the shared runner."""
        if self.session is not None:
            self.session.close()
            self.session = None
        if self._owns_runner:
            self._runner.shutdown(wait=False)
