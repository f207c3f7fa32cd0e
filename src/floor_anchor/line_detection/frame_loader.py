"""
Frame decoding and loading for floor-line detection.
"""

import base64
import binascii
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Generator, List, Optional, Tuple, Union

import cv2
import numpy as np

from ..errors import FrameDecodeFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Frame:
    """
    A decoded camera frame.

    Attributes:
        pixels: Raster as (H, W, 3) RGB, (H, W, 4) RGBA or (H, W) grayscale
        frame_id: Caller supplied identifier, not interpreted here
    """

    pixels: np.ndarray
    frame_id: int = 0

    def __post_init__(self):
        if self.pixels.ndim not in (2, 3) or self.pixels.size == 0:
            raise FrameDecodeFailure(f"Unsupported raster shape {self.pixels.shape}")
        if self.pixels.ndim == 3 and self.pixels.shape[2] not in (3, 4):
            raise FrameDecodeFailure(f"Unsupported channel count {self.pixels.shape[2]}")
        if self.pixels.flags.writeable:
            pixels = self.pixels.copy()
            pixels.setflags(write=False)
            object.__setattr__(self, 'pixels', pixels)

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def channels(self) -> int:
        return 1 if self.pixels.ndim == 2 else int(self.pixels.shape[2])

    def __repr__(self) -> str:
        return f"Frame(frame_id={self.frame_id}, width={self.width}, height={self.height})"


def frame_from_bgr(image: np.ndarray, frame_id: int = 0) -> Frame:
    """Wrap an OpenCV BGR(A) image as an RGB(A) Frame."""
    if image.ndim == 3 and image.shape[2] == 4:
        rgb = cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)
    elif image.ndim == 3:
        rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
    else:
        rgb = image.copy()
    return Frame(rgb, frame_id)


def decode_frame(payload: Union[str, bytes], frame_id: int = 0) -> Frame:
    """
    Decode an encoded color image into a Frame.

    Args:
        payload: Base64 string (optionally a ``data:image/...;base64,`` URL)
            or the raw encoded image bytes
        frame_id: Identifier carried on the resulting frame

    Returns:
        Decoded RGB frame

    Raises:
        FrameDecodeFailure: If the payload is not a decodable image
    """
    if isinstance(payload, str):
        if payload.startswith("data:"):
            _, _, payload = payload.partition(",")
        # Line-wrapped base64 (MIME style) is accepted.
        payload = ''.join(payload.split())
        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as err:
            raise FrameDecodeFailure(f"Invalid base64 payload: {err}") from err
    else:
        try:
            data = bytes(payload)
        except (TypeError, ValueError) as err:
            raise FrameDecodeFailure(
                f"Unsupported payload type {type(payload).__name__}") from err

    if not data:
        raise FrameDecodeFailure("Empty frame payload")

    buffer = np.frombuffer(data, dtype=np.uint8)
    try:
        image = cv2.imdecode(buffer, cv2.IMREAD_COLOR)
    except cv2.error as err:
        raise FrameDecodeFailure(f"OpenCV could not decode frame: {err}") from err

    if image is None:
        raise FrameDecodeFailure("Payload is not a supported image format")

    return frame_from_bgr(image, frame_id)


class FrameLoader:
    """
    Loads recorded frames from a video file or an image directory so the
    pipeline can be replayed offline.
    """

    def __init__(self,
                 video_path: Optional[str] = None,
                 image_dir: Optional[str] = None,
                 target_size: Optional[Tuple[int, int]] = None,
                 frame_skip: int = 1):
        """
        Initialize frame loader.

        Args:
            video_path: Path to video file
            image_dir: Path to directory containing images
            target_size: Target size for resizing frames (width, height)
            frame_skip: Yield every Nth frame
        """
        if video_path is None and image_dir is None:
            raise ValueError("Either video_path or image_dir must be provided")

        if video_path is not None and image_dir is not None:
            raise ValueError("Only one of video_path or image_dir should be provided")

        if frame_skip < 1:
            raise ValueError(f"frame_skip must be >= 1, got {frame_skip}")

        self.video_path = video_path
        self.image_dir = image_dir
        self.target_size = target_size
        self.frame_skip = frame_skip

    def _get_image_files(self) -> List[str]:
        """Get sorted list of image files."""
        image_dir = Path(self.image_dir)
        extensions = {'.jpg', '.jpeg', '.png', '.bmp'}

        return sorted(str(f) for f in image_dir.iterdir()
                      if f.is_file() and f.suffix.lower() in extensions)

    def load_frames(self) -> Generator[Frame, None, None]:
        """
        Load frames from video or images.

        Yields:
            Frames numbered by processed index
        """
        if self.video_path is not None:
            yield from self._load_from_video()
        else:
            yield from self._load_from_images()

    def _prepare(self, image: np.ndarray, frame_id: int) -> Frame:
        if self.target_size is not None:
            image = cv2.resize(image, self.target_size)
        return frame_from_bgr(image, frame_id)

    def _load_from_video(self) -> Generator[Frame, None, None]:
        cap = cv2.VideoCapture(self.video_path)
        if not cap.isOpened():
            raise FrameDecodeFailure(f"Could not open video {self.video_path}")

        frame_idx = 0
        processed_idx = 0
        try:
            while True:
                ret, image = cap.read()
                if not ret:
                    break

                if frame_idx % self.frame_skip == 0:
                    yield self._prepare(image, processed_idx)
                    processed_idx += 1

                frame_idx += 1
        finally:
            cap.release()

    def _load_from_images(self) -> Generator[Frame, None, None]:
        for idx, image_path in enumerate(self._get_image_files()):
            if idx % self.frame_skip != 0:
                continue

            image = cv2.imread(image_path)
            if image is None:
                logger.warning("Could not load image %s", image_path)
                continue

            yield self._prepare(image, idx // self.frame_skip)
