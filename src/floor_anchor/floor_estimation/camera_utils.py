"""
Camera pose utilities.

The rendering host owns the camera; these helpers turn the pose it reports
into the forward vector the projector needs.
"""

import logging
import threading
from typing import Optional, Sequence

import numpy as np
from scipy.spatial.transform import Rotation

from ..errors import MissingCollaborator

logger = logging.getLogger(__name__)

# Cameras look down their local -Z axis.
CAMERA_LOCAL_FORWARD = np.array([0.0, 0.0, -1.0])


def parse_vector_message(message: str, expected_length: int) -> np.ndarray:
    """
    Parse a comma-separated list of floats sent by the host.

    Args:
        message: String such as ``"0.1,0.2,0.3"``
        expected_length: Required number of components

    Returns:
        Parsed values (expected_length,)
    """
    try:
        values = np.array([float(part) for part in message.split(',')], dtype=np.float64)
    except ValueError as err:
        raise ValueError(f"Malformed vector message {message!r}") from err

    if values.shape != (expected_length,):
        raise ValueError(
            f"Expected {expected_length} values, got {values.shape[0]} in {message!r}"
        )
    return values


def forward_from_quaternion(quaternion: Sequence[float]) -> np.ndarray:
    """
    Rotate the camera's local forward axis by an orientation quaternion.

    Args:
        quaternion: Orientation as (x, y, z, w)

    Returns:
        Unit forward vector in world coordinates (3,)
    """
    try:
        rotation = Rotation.from_quat(np.asarray(quaternion, dtype=np.float64))
    except ValueError as err:
        raise MissingCollaborator(f"Invalid camera orientation {quaternion!r}") from err
    return rotation.apply(CAMERA_LOCAL_FORWARD)


class StaticPoseProvider:
    """Pose provider with a fixed forward vector."""

    def __init__(self, forward: Sequence[float] = (0.0, 0.0, -1.0)):
        self.forward = np.asarray(forward, dtype=np.float64)

    def forward_vector(self) -> Optional[np.ndarray]:
        return self.forward


class CameraPoseState:
    """
    Latest camera orientation reported by the host.

    The host pushes its rotation quaternion as a comma-separated string
    whenever the camera moves; the pipeline reads the forward vector at
    projection time. Updates and reads are serialized by a lock.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._quaternion = None

    def set_rotation(self, message: str):
        quaternion = parse_vector_message(message, 4)
        if not np.any(quaternion):
            raise ValueError(f"Zero quaternion in {message!r}")
        with self._lock:
            self._quaternion = quaternion

    def forward_vector(self) -> Optional[np.ndarray]:
        with self._lock:
            quaternion = self._quaternion

        if quaternion is None:
            logger.debug("No camera rotation received yet")
            return None
        return forward_from_quaternion(quaternion)
