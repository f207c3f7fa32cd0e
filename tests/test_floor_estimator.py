import pytest

from floor_anchor.floor_estimation import FloorEstimate, FloorEstimator
from floor_anchor.line_detection import LineSegment

LEFT = LineSegment(50, 400, 200, 300)
RIGHT = LineSegment(450, 310, 600, 400)


@pytest.fixture
def estimator():
    return FloorEstimator()


class TestFloorEstimator:
    def test_scenario_estimate(self, estimator):
        estimate = estimator.estimate(RIGHT, LEFT, frame_height=480)

        assert estimate.floor_bottom_y == pytest.approx(400.0)
        assert estimate.y_norm == pytest.approx(2 / 3)
        assert estimate.y_proj == pytest.approx(-1 / 3)

    def test_average_of_bottom_endpoints(self, estimator):
        positive = LineSegment(10, 120, 90, 200)
        negative = LineSegment(300, 260, 380, 180)

        estimate = estimator.estimate(positive, negative, frame_height=400)

        assert estimate.floor_bottom_y == pytest.approx((200 + 260) / 2)

    def test_endpoint_order_does_not_matter(self, estimator):
        flipped = LineSegment(RIGHT.x2, RIGHT.y2, RIGHT.x1, RIGHT.y1)
        assert (estimator.estimate(flipped, LEFT, 480).floor_bottom_y
                == estimator.estimate(RIGHT, LEFT, 480).floor_bottom_y)

    @pytest.mark.parametrize('positive,negative', [
        (None, LEFT),
        (RIGHT, None),
        (None, None),
    ])
    def test_missing_side_gives_no_estimate(self, estimator, positive, negative):
        assert estimator.estimate(positive, negative, frame_height=480) is None

    def test_invalid_frame_height(self, estimator):
        with pytest.raises(ValueError):
            estimator.estimate(RIGHT, LEFT, frame_height=0)


class TestFloorEstimateProjection:
    @pytest.mark.parametrize('row,expected', [
        (0, 0.5),
        (480, -0.5),
        (240, 0.0),
        (120, 0.25),
    ])
    def test_row_to_projection_offset(self, row, expected):
        estimate = FloorEstimate(floor_bottom_y=row, frame_height=480)
        assert estimate.y_proj == pytest.approx(expected)

    def test_projection_is_invertible(self):
        height = 720
        for row in (0.0, 17.5, 360.0, 719.0):
            y_proj = FloorEstimate(row, height).y_proj
            recovered = ((-y_proj / 0.5) + 1) / 2 * height
            assert recovered == pytest.approx(row)

    def test_custom_projection_scale(self):
        estimate = FloorEstimator(projection_scale=1.0).estimate(RIGHT, LEFT, 480)
        assert estimate.y_proj == pytest.approx(-2 / 3)
