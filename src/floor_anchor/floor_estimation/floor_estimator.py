"""
Floor row estimation from a pair of boundary lines.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from ..line_detection.line_detector import LineSegment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FloorEstimate:
    """
    Estimated floor row for one frame.

    Attributes:
        floor_bottom_y: Floor boundary row in pixels
        frame_height: Height of the frame the row was measured in
        projection_scale: Factor mapping the normalized row to projection space
    """

    floor_bottom_y: float
    frame_height: int
    projection_scale: float = 0.5

    @property
    def y_norm(self) -> float:
        """Row mapped to [-1, 1], top of the frame at -1."""
        return (self.floor_bottom_y / self.frame_height) * 2 - 1

    @property
    def y_proj(self) -> float:
        """Vertical offset in projection space, top of the frame at +scale."""
        return -self.y_norm * self.projection_scale


class FloorEstimator:
    """
    Combines the best positive-slope and negative-slope lines into one floor row.

    Two conventions for picking the row circulate for this heuristic: the
    average of each line's bottom-most endpoint, and the average of the
    positive line's second endpoint with the negative line's first. Only the
    first one is implemented; every estimate uses it.
    """

    def __init__(self, projection_scale: float = 0.5):
        self.projection_scale = projection_scale

    @staticmethod
    def floor_row(positive: LineSegment, negative: LineSegment) -> float:
        return (positive.bottom_y + negative.bottom_y) / 2

    def estimate(self,
                 positive: Optional[LineSegment],
                 negative: Optional[LineSegment],
                 frame_height: int) -> Optional[FloorEstimate]:
        """
        Estimate the floor row.

        Args:
            positive: Best positive-slope line, if any
            negative: Best negative-slope line, if any
            frame_height: Frame height in pixels

        Returns:
            Floor estimate, or None when either line is missing
        """
        if positive is None or negative is None:
            return None
        if frame_height <= 0:
            raise ValueError(f"frame_height must be positive, got {frame_height}")

        estimate = FloorEstimate(
            floor_bottom_y=self.floor_row(positive, negative),
            frame_height=frame_height,
            projection_scale=self.projection_scale,
        )
        logger.debug("Floor row %.1f of %d (y_proj=%.3f)",
                     estimate.floor_bottom_y, frame_height, estimate.y_proj)
        return estimate
