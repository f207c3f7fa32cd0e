"""
Example script demonstrating how to use the floor anchor pipeline programmatically.
"""

import logging
from pathlib import Path

import cv2
import numpy as np

from floor_anchor import FloorAnchorPipeline
from floor_anchor.config import load_config
from floor_anchor.floor_estimation import CameraPoseState, StaticPoseProvider
from floor_anchor.line_classification import ClassifiedLineSet
from floor_anchor.line_detection import Frame, FrameLoader
from floor_anchor.utils import draw_detection_overlay, plot_slope_histogram

CONFIG_PATH = Path(__file__).parent.parent / 'configs' / 'default_config.yaml'


def example_host_bridge():
    """Wire the pipeline to a host that pushes frames and camera pose strings."""

    pose = CameraPoseState()

    def send_to_host(message):
        print(f"{message.target}.{message.method}({message.payload})")

    pipeline = FloorAnchorPipeline(load_config(str(CONFIG_PATH)), pose, send_to_host)

    # The host reports its camera orientation as "x,y,z,w"
    pose.set_rotation("0,0,0,1")

    image = np.zeros((480, 640, 3), dtype=np.uint8)
    cv2.line(image, (50, 400), (200, 300), (255, 255, 255), 3)
    cv2.line(image, (450, 310), (600, 400), (255, 255, 255), 3)

    result = pipeline.receive_frame(Frame(image))
    print(f"Status: {result.status.value}, state: {pipeline.state.value}")
    return result


def example_replay(image_dir='data/frames/', output_dir='output/replay'):
    """Replay recorded frames and save debug overlays."""

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    pipeline = FloorAnchorPipeline(pose_provider=StaticPoseProvider())
    loader = FrameLoader(image_dir=image_dir, frame_skip=2)

    all_lines = ClassifiedLineSet()
    for frame in loader.load_frames():
        result = pipeline.process_frame(frame)
        if result.lines is None:
            continue

        all_lines.positive.extend(result.lines.positive)
        all_lines.negative.extend(result.lines.negative)

        overlay = draw_detection_overlay(frame.pixels, result.lines, result.estimate)
        cv2.imwrite(str(output_path / f'floor_{frame.frame_id:04d}.jpg'),
                    cv2.cvtColor(overlay, cv2.COLOR_RGB2BGR))

    plot_slope_histogram(all_lines, save_path=str(output_path / 'slopes.png'))
    print(f"Last anchor: {pipeline.last_anchor}")


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)

    print("=" * 60)
    print("Floor Anchor Usage Examples")
    print("=" * 60)

    print("\nExample 1: Host Bridge")
    print("-" * 60)
    print("This example can run without data:")
    example_host_bridge()

    print("\nExample 2: Replay")
    print("-" * 60)
    print("Runs the pipeline over a directory of recorded frames.")
    print("Uncomment the line below to run:")
    print("# example_replay('data/frames/')")
