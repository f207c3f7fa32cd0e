"""Exceptions raised while turning a frame into a floor anchor."""


class FloorAnchorError(Exception):
    """Base class for frame-local pipeline failures."""


class FrameDecodeFailure(FloorAnchorError):
    """The incoming payload could not be decoded into a raster."""


class VisionLibraryFailure(FloorAnchorError):
    """An OpenCV routine failed while processing a frame."""


class MissingCollaborator(FloorAnchorError):
    """The camera pose provider could not supply a usable forward vector."""
