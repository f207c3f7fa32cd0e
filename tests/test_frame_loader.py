import base64

import cv2
import numpy as np
import pytest

from floor_anchor.errors import FrameDecodeFailure
from floor_anchor.line_detection import Frame, FrameLoader, decode_frame, frame_from_bgr


class TestFrame:
    def test_dimensions(self):
        frame = Frame(np.zeros((48, 64, 4), dtype=np.uint8), frame_id=3)
        assert (frame.width, frame.height, frame.channels) == (64, 48, 4)
        assert frame.frame_id == 3

    def test_pixels_are_read_only_copy(self):
        pixels = np.zeros((10, 10, 3), dtype=np.uint8)
        frame = Frame(pixels)
        pixels[0, 0] = 255

        assert frame.pixels[0, 0].tolist() == [0, 0, 0]
        with pytest.raises(ValueError):
            frame.pixels[0, 0] = 1

    @pytest.mark.parametrize('shape', [(10,), (10, 10, 2), (0, 10, 3)])
    def test_unsupported_shapes(self, shape):
        with pytest.raises(FrameDecodeFailure):
            Frame(np.zeros(shape, dtype=np.uint8))

    def test_from_bgr_swaps_channels(self):
        bgr = np.zeros((4, 4, 3), dtype=np.uint8)
        bgr[..., 0] = 255
        frame = frame_from_bgr(bgr)
        assert frame.pixels[0, 0].tolist() == [0, 0, 255]


class TestDecodeFrame:
    def test_base64_png(self, floor_image, encode_png):
        frame = decode_frame(encode_png(floor_image), frame_id=7)
        assert (frame.width, frame.height) == (640, 480)
        assert frame.frame_id == 7
        assert np.array_equal(frame.pixels, cv2.cvtColor(floor_image, cv2.COLOR_BGR2RGB))

    def test_data_url_jpeg(self, floor_image):
        ok, buffer = cv2.imencode('.jpg', floor_image)
        assert ok
        payload = "data:image/jpeg;base64," + base64.b64encode(buffer.tobytes()).decode()
        frame = decode_frame(payload)
        assert (frame.width, frame.height) == (640, 480)

    def test_raw_bytes(self, floor_image):
        ok, buffer = cv2.imencode('.png', floor_image)
        assert decode_frame(buffer.tobytes()).height == 480

    def test_line_wrapped_base64(self, floor_image):
        ok, buffer = cv2.imencode('.png', floor_image)
        assert ok
        payload = base64.encodebytes(buffer.tobytes()).decode()
        assert '\n' in payload
        assert decode_frame(payload).height == 480

    @pytest.mark.parametrize('payload', [None, 3.5, object()])
    def test_unsupported_payload_types(self, payload):
        with pytest.raises(FrameDecodeFailure):
            decode_frame(payload)

    @pytest.mark.parametrize('payload', [
        "not base64 at all!",
        base64.b64encode(b"plain text, not an image").decode(),
        "",
        b"",
    ])
    def test_undecodable_payloads(self, payload):
        with pytest.raises(FrameDecodeFailure):
            decode_frame(payload)


class TestFrameLoader:
    def test_requires_exactly_one_source(self, tmp_path):
        with pytest.raises(ValueError):
            FrameLoader()
        with pytest.raises(ValueError):
            FrameLoader(video_path='a.mp4', image_dir=str(tmp_path))
        with pytest.raises(ValueError):
            FrameLoader(image_dir=str(tmp_path), frame_skip=0)

    def test_image_directory(self, tmp_path, floor_image):
        for i in range(4):
            cv2.imwrite(str(tmp_path / f'frame_{i:03d}.png'), floor_image)
        (tmp_path / 'notes.txt').write_text('ignored')

        frames = list(FrameLoader(image_dir=str(tmp_path), frame_skip=2,
                                  target_size=(320, 240)).load_frames())

        assert [f.frame_id for f in frames] == [0, 1]
        assert all((f.width, f.height) == (320, 240) for f in frames)

    def test_unreadable_image_is_skipped(self, tmp_path, floor_image):
        cv2.imwrite(str(tmp_path / 'a.png'), floor_image)
        (tmp_path / 'b.png').write_bytes(b'broken')

        frames = list(FrameLoader(image_dir=str(tmp_path)).load_frames())

        assert len(frames) == 1

    def test_missing_video(self, tmp_path):
        loader = FrameLoader(video_path=str(tmp_path / 'missing.mp4'))
        with pytest.raises(FrameDecodeFailure):
            list(loader.load_frames())
