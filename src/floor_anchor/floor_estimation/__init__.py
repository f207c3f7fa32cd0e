"""Floor estimation module for the floor row and its 3D anchor."""

from .floor_estimator import FloorEstimate, FloorEstimator
from .projector import AnchorPoint, Projector
from .camera_utils import (
    CameraPoseState,
    StaticPoseProvider,
    forward_from_quaternion,
    parse_vector_message
)

__all__ = [
    'FloorEstimate',
    'FloorEstimator',
    'AnchorPoint',
    'Projector',
    'CameraPoseState',
    'StaticPoseProvider',
    'forward_from_quaternion',
    'parse_vector_message'
]
