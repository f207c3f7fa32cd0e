"""
Projection of a floor estimate into a camera-relative anchor point.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from ..errors import MissingCollaborator
from .floor_estimator import FloorEstimate


@dataclass(frozen=True)
class AnchorPoint:
    """3D placement point relative to the viewer."""

    x: float
    y: float
    z: float

    def as_tuple(self):
        return (self.x, self.y, self.z)

    def to_dict(self):
        return {'x': self.x, 'y': self.y, 'z': self.z}


class Projector:
    """
    Places the anchor a fixed distance along the camera's forward direction.

    No depth is recovered from the image: ``forward_scale`` is a placement
    policy, and the vertical coordinate comes straight from the floor estimate.
    """

    def __init__(self, forward_scale: float = 2.0):
        self.forward_scale = forward_scale

    @staticmethod
    def normalize_forward(forward: Optional[Sequence[float]]) -> np.ndarray:
        if forward is None:
            raise MissingCollaborator("Camera forward vector unavailable")

        try:
            vector = np.asarray(forward, dtype=np.float64).reshape(-1)
        except (TypeError, ValueError) as err:
            raise MissingCollaborator(f"Invalid camera forward vector {forward!r}") from err
        if vector.shape != (3,) or not np.all(np.isfinite(vector)):
            raise MissingCollaborator(f"Invalid camera forward vector {forward!r}")

        norm = np.linalg.norm(vector)
        if norm == 0:
            raise MissingCollaborator("Camera forward vector has zero length")
        return vector / norm

    def project(self, y_proj: float, forward: Optional[Sequence[float]]) -> AnchorPoint:
        """
        Build the anchor point.

        Args:
            y_proj: Vertical offset in projection space
            forward: Camera forward direction (x, y, z)

        Returns:
            Anchor point

        Raises:
            MissingCollaborator: If the forward vector is missing or unusable
        """
        direction = self.normalize_forward(forward)
        return AnchorPoint(
            x=float(direction[0] * self.forward_scale),
            y=float(y_proj),
            z=float(direction[2] * self.forward_scale),
        )

    def project_estimate(self, estimate: FloorEstimate,
                         forward: Optional[Sequence[float]]) -> AnchorPoint:
        return self.project(estimate.y_proj, forward)
