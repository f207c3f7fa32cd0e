"""
Pipeline configuration defaults and YAML loading.
"""

import copy
from typing import Dict, Optional

import yaml

DEFAULT_CONFIG = {
    'edge_extractor': {
        'low_threshold': 50.0,
        'high_threshold': 150.0,
        'kernel_size': 5,
        'dilate_iterations': 5,
        'erode_iterations': 3,
    },
    'line_extractor': {
        'rho': 1.0,
        'theta_degrees': 1.0,
        'threshold': 20,
        'min_line_length': 20.0,
        'max_line_gap': 10.0,
    },
    'line_classifier': {
        'min_length': 20.0,
        'min_abs_slope': 0.1,
        'max_abs_slope': 10.0,
        'vertical_epsilon': 1e-4,
        'slope_decimals': 2,
    },
    'floor_estimator': {
        'projection_scale': 0.5,
    },
    'projector': {
        'forward_scale': 2.0,
    },
    'emitter': {
        'target': 'FloorDetector',
        'method': 'OnReceiveFloorPosition',
        'message_format': 'json',
        'lock_after_first': False,
    },
}


def merge_config(base: Dict, override: Optional[Dict]) -> Dict:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: str) -> Dict:
    """Load configuration from YAML file, filled in with defaults."""
    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)

    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ValueError(f"Configuration root must be a mapping: {config_path}")

    return merge_config(DEFAULT_CONFIG, config)
