"""
Edge and Line Segment Extraction

This module turns a color frame into a binary edge map and extracts raw line
segments from it with OpenCV's probabilistic Hough transform.
"""

import logging
import math
from dataclasses import dataclass
from typing import List

import cv2
import numpy as np

from ..errors import VisionLibraryFailure
from .frame_loader import Frame

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineSegment:
    """A 2D line segment in image pixel coordinates."""

    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def length(self) -> float:
        return math.hypot(self.x2 - self.x1, self.y2 - self.y1)

    def slope(self, vertical_epsilon: float = 1e-4) -> float:
        """
        Slope dy/dx with a vertical segment's dx replaced by ``vertical_epsilon``.
        """
        dx = self.x2 - self.x1
        return (self.y2 - self.y1) / (dx or vertical_epsilon)

    @property
    def bottom_y(self) -> float:
        """Row of the lower endpoint (image rows grow downwards)."""
        return max(self.y1, self.y2)


class EdgeExtractor:
    """
    Canny edge detector followed by a morphological close.

    Dilating for more iterations than eroding bridges gaps along floor
    boundaries while isolated noise pixels stay suppressed by Canny's
    hysteresis thresholds.
    """

    def __init__(self,
                 low_threshold: float = 50.0,
                 high_threshold: float = 150.0,
                 kernel_size: int = 5,
                 dilate_iterations: int = 5,
                 erode_iterations: int = 3):
        """
        Initialize edge extractor.

        Args:
            low_threshold: Lower Canny hysteresis threshold
            high_threshold: Upper Canny hysteresis threshold
            kernel_size: Side of the square structuring element
            dilate_iterations: Dilation passes
            erode_iterations: Erosion passes, must not exceed dilation passes
        """
        if kernel_size < 1:
            raise ValueError(f"kernel_size must be positive, got {kernel_size}")
        if low_threshold > high_threshold:
            raise ValueError("low_threshold must not exceed high_threshold")
        if erode_iterations > dilate_iterations:
            raise ValueError("erode_iterations must not exceed dilate_iterations")

        self.low_threshold = low_threshold
        self.high_threshold = high_threshold
        self.dilate_iterations = dilate_iterations
        self.erode_iterations = erode_iterations
        self.kernel = cv2.getStructuringElement(cv2.MORPH_RECT, (kernel_size, kernel_size))

    @staticmethod
    def to_grayscale(pixels: np.ndarray) -> np.ndarray:
        if pixels.ndim == 2:
            return pixels
        if pixels.shape[2] == 4:
            return cv2.cvtColor(pixels, cv2.COLOR_RGBA2GRAY)
        return cv2.cvtColor(pixels, cv2.COLOR_RGB2GRAY)

    def extract(self, frame: Frame) -> np.ndarray:
        """
        Compute the edge map of a frame.

        Args:
            frame: Input frame

        Returns:
            Binary uint8 edge map (H, W) with values 0 or 255

        Raises:
            VisionLibraryFailure: If an OpenCV routine fails
        """
        try:
            gray = self.to_grayscale(frame.pixels)
            edges = cv2.Canny(gray, self.low_threshold, self.high_threshold)
            edges = cv2.dilate(edges, self.kernel, iterations=self.dilate_iterations)
            edges = cv2.erode(edges, self.kernel, iterations=self.erode_iterations)
        except cv2.error as err:
            raise VisionLibraryFailure(f"Edge extraction failed: {err}") from err

        return edges


class HoughLineExtractor:
    """
    Probabilistic Hough line segment detector.
    """

    def __init__(self,
                 rho: float = 1.0,
                 theta_degrees: float = 1.0,
                 threshold: int = 20,
                 min_line_length: float = 20.0,
                 max_line_gap: float = 10.0):
        """
        Initialize line extractor.

        Args:
            rho: Distance resolution in pixels
            theta_degrees: Angle resolution in degrees
            threshold: Accumulator vote threshold
            min_line_length: Minimum segment length in pixels
            max_line_gap: Maximum gap between collinear pixels joined into one segment
        """
        self.rho = rho
        self.theta = math.radians(theta_degrees)
        self.threshold = threshold
        self.min_line_length = min_line_length
        self.max_line_gap = max_line_gap

    def extract(self, edges: np.ndarray) -> List[LineSegment]:
        """
        Detect line segments in an edge map.

        Args:
            edges: Binary edge map (H, W)

        Returns:
            Segments in detector order, empty if none were found
        """
        try:
            lines = cv2.HoughLinesP(
                edges,
                rho=self.rho,
                theta=self.theta,
                threshold=self.threshold,
                minLineLength=self.min_line_length,
                maxLineGap=self.max_line_gap,
            )
        except cv2.error as err:
            raise VisionLibraryFailure(f"Line extraction failed: {err}") from err

        if lines is None:
            return []

        segments = [LineSegment(*map(int, line)) for line in lines.reshape(-1, 4)]
        logger.debug("Extracted %d raw segments", len(segments))
        return segments
