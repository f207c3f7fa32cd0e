"""
Visualization utilities for classified lines and floor estimates.
"""

from typing import Optional, Sequence, Tuple

import cv2
import matplotlib.pyplot as plt
import numpy as np

from ..floor_estimation.floor_estimator import FloorEstimate
from ..line_classification.line_classifier import ClassifiedLineSet, select_best_line
from ..line_detection.line_detector import LineSegment


def draw_lines_on_image(image: np.ndarray,
                        lines: Sequence[LineSegment],
                        color: Tuple[int, int, int] = (0, 255, 0),
                        thickness: int = 2) -> np.ndarray:
    """
    Draw line segments on an image.

    Args:
        image: Input image (H, W, 3)
        lines: Line segments
        color: Line color in the image's channel order
        thickness: Line thickness

    Returns:
        Image with drawn lines
    """
    result = image.copy()

    for line in lines:
        pt1 = (int(line.x1), int(line.y1))
        pt2 = (int(line.x2), int(line.y2))
        cv2.line(result, pt1, pt2, color, thickness)

    return result


def draw_detection_overlay(image: np.ndarray,
                           lines: ClassifiedLineSet,
                           estimate: Optional[FloorEstimate] = None) -> np.ndarray:
    """
    Draw both line groups, the chosen line of each group and the floor row.

    Positive-slope lines are drawn in the first channel, negative-slope lines
    in the third; chosen lines are thicker and the floor row spans the width.

    Args:
        image: RGB image (H, W, 3) or grayscale (H, W)
        lines: Classified lines for the image
        estimate: Optional floor estimate

    Returns:
        Annotated RGB image
    """
    if image.ndim == 2:
        result = cv2.cvtColor(image, cv2.COLOR_GRAY2RGB)
    elif image.shape[2] == 4:
        result = cv2.cvtColor(image, cv2.COLOR_RGBA2RGB)
    else:
        result = image.copy()

    result = draw_lines_on_image(result, lines.positive, color=(255, 0, 0), thickness=1)
    result = draw_lines_on_image(result, lines.negative, color=(0, 0, 255), thickness=1)

    for best, color in ((select_best_line(lines.positive), (255, 0, 0)),
                        (select_best_line(lines.negative), (0, 0, 255))):
        if best is not None:
            result = draw_lines_on_image(result, [best], color=color, thickness=3)

    if estimate is not None:
        row = int(round(estimate.floor_bottom_y))
        cv2.line(result, (0, row), (result.shape[1] - 1, row), (0, 255, 0), 2)

    return result


def plot_slope_histogram(lines: ClassifiedLineSet,
                         min_abs_slope: float = 0.1,
                         max_abs_slope: float = 10.0,
                         save_path: Optional[str] = None):
    """
    Plot the slope distribution of classified lines.

    Args:
        lines: Classified lines, possibly accumulated over many frames
        min_abs_slope: Lower rejection threshold, drawn for reference
        max_abs_slope: Upper rejection threshold, drawn for reference
        save_path: Optional path to save the figure

    Returns:
        The matplotlib figure
    """
    fig, axes = plt.subplots(1, 2, figsize=(12, 4))

    groups = (('Positive slope', lines.positive, 'tab:red'),
              ('Negative slope', lines.negative, 'tab:blue'))
    for ax, (title, group, color) in zip(axes, groups):
        slopes = [line.slope() for line in group]
        lengths = [line.length for line in group]
        if slopes:
            ax.hist(slopes, bins=30, weights=lengths, color=color, alpha=0.7)
        for threshold in (min_abs_slope, max_abs_slope):
            sign = 1 if group is lines.positive else -1
            ax.axvline(sign * threshold, color='gray', linestyle='--', linewidth=1)
        ax.set_title(f'{title} ({len(group)} lines)')
        ax.set_xlabel('Slope (dy/dx)')
        ax.set_ylabel('Total length (px)')

    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

    return fig
