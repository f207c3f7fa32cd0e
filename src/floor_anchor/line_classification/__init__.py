"""Line classification module for filtering and pairing floor boundary candidates."""

from .line_classifier import ClassifiedLineSet, LineClassifier, select_best_line

__all__ = [
    'ClassifiedLineSet',
    'LineClassifier',
    'select_best_line'
]
