"""
floor_anchor: Floor Line Estimation for AR Placement

Estimates the image row of the floor boundary from a single camera frame by
pairing the longest left- and right-leaning edge lines, and projects it into a
camera-relative anchor point for a rendering host.
"""

__version__ = "0.1.0"
__author__ = "floor_anchor Contributors"

from .pipeline import FloorAnchorPipeline, FrameResult, FrameStatus, PipelineState

__all__ = ['FloorAnchorPipeline', 'FrameResult', 'FrameStatus', 'PipelineState']
