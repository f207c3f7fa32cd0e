import base64

import cv2
import matplotlib
import numpy as np
import pytest

matplotlib.use('Agg')

from floor_anchor.line_detection import Frame

FRAME_WIDTH = 640
FRAME_HEIGHT = 480

NEGATIVE_LINE = ((50, 400), (200, 300))
POSITIVE_LINE = ((450, 310), (600, 400))


def draw_frame(lines, width=FRAME_WIDTH, height=FRAME_HEIGHT, thickness=3):
    image = np.zeros((height, width, 3), dtype=np.uint8)
    for pt1, pt2 in lines:
        cv2.line(image, pt1, pt2, (255, 255, 255), thickness)
    return image


def encode_png_base64(image):
    ok, buffer = cv2.imencode('.png', image)
    assert ok
    return base64.b64encode(buffer.tobytes()).decode('ascii')


@pytest.fixture
def blank_frame():
    return Frame(np.zeros((FRAME_HEIGHT, FRAME_WIDTH, 3), dtype=np.uint8))


@pytest.fixture
def floor_image():
    return draw_frame([NEGATIVE_LINE, POSITIVE_LINE])


@pytest.fixture
def floor_frame(floor_image):
    return Frame(floor_image)


class RecordingConsumer:
    def __init__(self):
        self.messages = []

    def __call__(self, message):
        self.messages.append(message)


@pytest.fixture
def consumer():
    return RecordingConsumer()


@pytest.fixture
def make_image():
    return draw_frame


@pytest.fixture
def encode_png():
    return encode_png_base64
