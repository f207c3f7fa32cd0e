"""Utility functions for the floor_anchor project."""

from .visualization import (
    draw_lines_on_image,
    draw_detection_overlay,
    plot_slope_histogram
)

__all__ = [
    'draw_lines_on_image',
    'draw_detection_overlay',
    'plot_slope_histogram'
]
