"""
Floor anchor pipeline.

This module wires the per-frame stages together:
1. Extracting an edge map and raw line segments from the frame
2. Classifying segments and picking the best line on each side
3. Estimating the floor row and projecting it to a camera-relative anchor

The pipeline object owns the one piece of state that outlives a frame: the
last successfully computed anchor point.
"""

import enum
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Union

from tqdm import tqdm

from .config import DEFAULT_CONFIG, merge_config
from .emitter import AnchorEmitter, HostMessage
from .errors import FrameDecodeFailure, MissingCollaborator, VisionLibraryFailure
from .floor_estimation import AnchorPoint, FloorEstimate, FloorEstimator, Projector
from .line_classification import ClassifiedLineSet, LineClassifier, select_best_line
from .line_detection import EdgeExtractor, Frame, HoughLineExtractor, decode_frame

logger = logging.getLogger(__name__)


class PipelineState(enum.Enum):
    NO_ESTIMATE = 'no_estimate'
    HAS_ESTIMATE = 'has_estimate'


class FrameStatus(enum.Enum):
    """Outcome of processing one frame."""

    ESTIMATED = 'estimated'
    INSUFFICIENT_EVIDENCE = 'insufficient_evidence'
    FRAME_DECODE_FAILURE = 'frame_decode_failure'
    VISION_LIBRARY_FAILURE = 'vision_library_failure'
    MISSING_COLLABORATOR = 'missing_collaborator'


@dataclass
class FrameResult:
    """
    Per-frame result. Only ``ESTIMATED`` results carry an anchor; the other
    statuses say why the frame produced nothing.
    """

    status: FrameStatus
    anchor: Optional[AnchorPoint] = None
    estimate: Optional[FloorEstimate] = None
    lines: Optional[ClassifiedLineSet] = None
    message: Optional[HostMessage] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is FrameStatus.ESTIMATED


class FloorAnchorPipeline:
    """
    Single-frame floor line estimation pipeline.
    """

    def __init__(self,
                 config: Optional[Dict] = None,
                 pose_provider=None,
                 consumer: Optional[Callable[[HostMessage], None]] = None):
        """
        Initialize pipeline with configuration.

        Args:
            config: Configuration dictionary, merged over the defaults
            pose_provider: Object exposing ``forward_vector()``
            consumer: Callable receiving host messages for new anchors
        """
        self.config = merge_config(DEFAULT_CONFIG, config)
        self.pose_provider = pose_provider

        self.edge_extractor = None
        self.line_extractor = None
        self.line_classifier = None
        self.floor_estimator = None
        self.projector = None
        self.emitter = None

        self._lock = threading.Lock()
        self._last_anchor = None

        self._setup_components(consumer)

    def _setup_components(self, consumer):
        """Setup pipeline components from config."""
        edge_config = self.config.get('edge_extractor', {})
        self.edge_extractor = EdgeExtractor(
            low_threshold=edge_config.get('low_threshold', 50.0),
            high_threshold=edge_config.get('high_threshold', 150.0),
            kernel_size=edge_config.get('kernel_size', 5),
            dilate_iterations=edge_config.get('dilate_iterations', 5),
            erode_iterations=edge_config.get('erode_iterations', 3)
        )

        line_config = self.config.get('line_extractor', {})
        self.line_extractor = HoughLineExtractor(
            rho=line_config.get('rho', 1.0),
            theta_degrees=line_config.get('theta_degrees', 1.0),
            threshold=line_config.get('threshold', 20),
            min_line_length=line_config.get('min_line_length', 20.0),
            max_line_gap=line_config.get('max_line_gap', 10.0)
        )

        classifier_config = self.config.get('line_classifier', {})
        self.line_classifier = LineClassifier(
            min_length=classifier_config.get('min_length', 20.0),
            min_abs_slope=classifier_config.get('min_abs_slope', 0.1),
            max_abs_slope=classifier_config.get('max_abs_slope', 10.0),
            vertical_epsilon=classifier_config.get('vertical_epsilon', 1e-4),
            slope_decimals=classifier_config.get('slope_decimals', 2)
        )

        estimator_config = self.config.get('floor_estimator', {})
        self.floor_estimator = FloorEstimator(
            projection_scale=estimator_config.get('projection_scale', 0.5)
        )

        projector_config = self.config.get('projector', {})
        self.projector = Projector(
            forward_scale=projector_config.get('forward_scale', 2.0)
        )

        emitter_config = self.config.get('emitter', {})
        self.emitter = AnchorEmitter(
            consumer=consumer,
            target=emitter_config.get('target', 'FloorDetector'),
            method=emitter_config.get('method', 'OnReceiveFloorPosition'),
            message_format=emitter_config.get('message_format', 'json'),
            lock_after_first=emitter_config.get('lock_after_first', False)
        )

        logger.info("Floor anchor pipeline ready (canny=%s/%s, hough threshold=%s)",
                    self.edge_extractor.low_threshold,
                    self.edge_extractor.high_threshold,
                    self.line_extractor.threshold)

    @property
    def last_anchor(self) -> Optional[AnchorPoint]:
        with self._lock:
            return self._last_anchor

    @property
    def state(self) -> PipelineState:
        with self._lock:
            if self._last_anchor is None:
                return PipelineState.NO_ESTIMATE
            return PipelineState.HAS_ESTIMATE

    def detect_lines(self, frame: Frame) -> ClassifiedLineSet:
        """
        Run edge extraction, line extraction and classification on a frame.

        Raises:
            VisionLibraryFailure: If an OpenCV routine fails
        """
        edges = self.edge_extractor.extract(frame)
        segments = self.line_extractor.extract(edges)
        return self.line_classifier.classify(segments)

    def estimate_floor(self, frame: Frame, lines: ClassifiedLineSet) -> Optional[FloorEstimate]:
        return self.floor_estimator.estimate(
            select_best_line(lines.positive),
            select_best_line(lines.negative),
            frame.height
        )

    def _forward_vector(self):
        """Ask the pose provider for the camera forward vector."""
        if self.pose_provider is None:
            return None
        try:
            return self.pose_provider.forward_vector()
        except MissingCollaborator:
            raise
        except Exception as err:
            raise MissingCollaborator(f"Camera pose provider failed: {err!r}") from err

    def process_frame(self, frame: Frame) -> FrameResult:
        """
        Process one decoded frame.

        Failures are logged and reported through the result status; the
        stored anchor only changes when a new anchor is produced.

        Args:
            frame: Decoded frame

        Returns:
            Frame result
        """
        try:
            lines = self.detect_lines(frame)
        except VisionLibraryFailure as err:
            logger.warning("Frame %s abandoned: %s", frame.frame_id, err)
            return FrameResult(FrameStatus.VISION_LIBRARY_FAILURE, error=str(err))

        estimate = self.estimate_floor(frame, lines)
        if estimate is None:
            logger.debug("Frame %s: no line pair (%d positive, %d negative)",
                         frame.frame_id, len(lines.positive), len(lines.negative))
            return FrameResult(FrameStatus.INSUFFICIENT_EVIDENCE, lines=lines)

        try:
            forward = self._forward_vector()
            anchor = self.projector.project_estimate(estimate, forward)
        except MissingCollaborator as err:
            logger.warning("Frame %s not projected: %s", frame.frame_id, err)
            return FrameResult(FrameStatus.MISSING_COLLABORATOR, estimate=estimate,
                               lines=lines, error=str(err))

        with self._lock:
            self._last_anchor = anchor

        message = None
        try:
            message = self.emitter.emit(anchor)
        except Exception:
            logger.exception("Anchor consumer failed for frame %s", frame.frame_id)

        logger.debug("Frame %s anchor (%.3f, %.3f, %.3f)",
                     frame.frame_id, anchor.x, anchor.y, anchor.z)
        return FrameResult(FrameStatus.ESTIMATED, anchor=anchor, estimate=estimate,
                           lines=lines, message=message)

    def receive_frame(self, payload: Union[str, bytes, Frame], frame_id: int = 0) -> FrameResult:
        """
        Entry point for one encoded frame from the host.

        Args:
            payload: Base64 string, encoded image bytes, or a decoded Frame
            frame_id: Identifier used in log messages

        Returns:
            Frame result
        """
        if isinstance(payload, Frame):
            return self.process_frame(payload)

        try:
            frame = decode_frame(payload, frame_id)
        except FrameDecodeFailure as err:
            logger.warning("Frame %s could not be decoded: %s", frame_id, err)
            return FrameResult(FrameStatus.FRAME_DECODE_FAILURE, error=str(err))

        return self.process_frame(frame)

    def process_frames(self, frames: Iterable[Frame], progress: bool = True) -> List[FrameResult]:
        """
        Run the pipeline over a sequence of frames, e.g. from a FrameLoader.

        Args:
            frames: Frames in arrival order
            progress: Show a progress bar

        Returns:
            One result per frame
        """
        results = []
        for frame in tqdm(frames, desc="Estimating floor", disable=not progress):
            results.append(self.process_frame(frame))

        estimated = sum(1 for result in results if result.ok)
        logger.info("Estimated floor in %d of %d frames", estimated, len(results))
        return results
