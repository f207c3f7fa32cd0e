"""Line detection module for extracting edges and 2D line segments."""

from .frame_loader import Frame, FrameLoader, decode_frame, frame_from_bgr
from .line_detector import EdgeExtractor, HoughLineExtractor, LineSegment

__all__ = [
    'Frame',
    'FrameLoader',
    'decode_frame',
    'frame_from_bgr',
    'EdgeExtractor',
    'HoughLineExtractor',
    'LineSegment'
]
