import numpy as np

from floor_anchor.floor_estimation import FloorEstimate
from floor_anchor.line_classification import ClassifiedLineSet
from floor_anchor.line_detection import LineSegment
from floor_anchor.utils import draw_detection_overlay, draw_lines_on_image, plot_slope_histogram

LINES = ClassifiedLineSet(
    positive=[LineSegment(450, 310, 600, 400), LineSegment(460, 330, 500, 354)],
    negative=[LineSegment(50, 400, 200, 300)],
)


def test_draw_lines_does_not_modify_input():
    image = np.zeros((100, 100, 3), dtype=np.uint8)
    result = draw_lines_on_image(image, [LineSegment(10, 10, 90, 90)])
    assert not image.any()
    assert result[50, 50].tolist() == [0, 255, 0]


def test_overlay_marks_groups_and_floor_row():
    image = np.zeros((480, 640, 3), dtype=np.uint8)
    estimate = FloorEstimate(floor_bottom_y=420, frame_height=480)

    result = draw_detection_overlay(image, LINES, estimate)

    assert result.shape == (480, 640, 3)
    assert result[355, 525].tolist() == [255, 0, 0]
    assert result[350, 125].tolist() == [0, 0, 255]
    assert result[420, 320].tolist() == [0, 255, 0]


def test_overlay_accepts_grayscale_without_estimate():
    image = np.zeros((480, 640), dtype=np.uint8)
    result = draw_detection_overlay(image, ClassifiedLineSet())
    assert result.shape == (480, 640, 3)
    assert not result.any()


def test_slope_histogram_saved(tmp_path):
    path = tmp_path / 'slopes.png'
    fig = plot_slope_histogram(LINES, save_path=str(path))
    assert path.exists() and path.stat().st_size > 0
    assert len(fig.axes) == 2


def test_slope_histogram_with_empty_groups():
    fig = plot_slope_histogram(ClassifiedLineSet())
    assert fig.axes[0].get_title() == 'Positive slope (0 lines)'
