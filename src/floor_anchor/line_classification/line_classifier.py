"""
Line classification and selection.

Raw Hough segments are filtered by length and slope, then split by slope sign
into the two groups the floor estimator pairs up.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from ..line_detection.line_detector import LineSegment

logger = logging.getLogger(__name__)


@dataclass
class ClassifiedLineSet:
    """
    Segments that passed the filters, bucketed by slope sign.

    Both lists keep discovery order; they are not sorted by quality.
    """

    positive: List[LineSegment] = field(default_factory=list)
    negative: List[LineSegment] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.positive) + len(self.negative)


class LineClassifier:
    """
    Filters segments that are unlikely floor boundaries and buckets the rest.
    """

    def __init__(self,
                 min_length: float = 20.0,
                 min_abs_slope: float = 0.1,
                 max_abs_slope: float = 10.0,
                 vertical_epsilon: float = 1e-4,
                 slope_decimals: int = 2):
        """
        Initialize classifier.

        Args:
            min_length: Segments shorter than this (pixels) are dropped
            min_abs_slope: Segments with a flatter rounded slope are dropped
            max_abs_slope: Segments with a steeper rounded slope are dropped
            vertical_epsilon: Stand-in for dx when a segment is vertical
            slope_decimals: Slope is rounded to this many decimals before the
                magnitude tests, which decides segments sitting right at a threshold
        """
        if min_abs_slope > max_abs_slope:
            raise ValueError("min_abs_slope must not exceed max_abs_slope")
        if vertical_epsilon == 0:
            raise ValueError("vertical_epsilon must be non-zero")

        self.min_length = min_length
        self.min_abs_slope = min_abs_slope
        self.max_abs_slope = max_abs_slope
        self.vertical_epsilon = vertical_epsilon
        self.slope_decimals = slope_decimals

    def quantized_slope(self, segment: LineSegment) -> float:
        return round(segment.slope(self.vertical_epsilon), self.slope_decimals)

    def accepts(self, segment: LineSegment) -> bool:
        if segment.length < self.min_length:
            return False
        slope = abs(self.quantized_slope(segment))
        return self.min_abs_slope <= slope <= self.max_abs_slope

    def classify(self, segments: Iterable[LineSegment]) -> ClassifiedLineSet:
        """
        Split segments into positive-slope and negative-slope groups.

        Args:
            segments: Raw segments in detector order

        Returns:
            Classified line set
        """
        classified = ClassifiedLineSet()
        rejected = 0

        for segment in segments:
            if not self.accepts(segment):
                rejected += 1
                continue

            if self.quantized_slope(segment) > 0:
                classified.positive.append(segment)
            else:
                classified.negative.append(segment)

        logger.debug("Classified %d positive, %d negative, rejected %d",
                     len(classified.positive), len(classified.negative), rejected)
        return classified


def select_best_line(lines: Sequence[LineSegment]) -> Optional[LineSegment]:
    """
    Return the longest segment, the first one on ties, or None if empty.
    """
    best = None
    for line in lines:
        if best is None or line.length > best.length:
            best = line
    return best
