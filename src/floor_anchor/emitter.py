"""
Delivery of anchor points to the rendering host.
"""

import json
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .floor_estimation.projector import AnchorPoint

logger = logging.getLogger(__name__)

MESSAGE_FORMATS = ('csv', 'json')


@dataclass(frozen=True)
class HostMessage:
    """One message addressed to an object/method pair on the host side."""

    target: str
    method: str
    payload: str


def format_anchor(anchor: AnchorPoint, message_format: str = 'json') -> str:
    """
    Serialize an anchor point.

    Args:
        anchor: Anchor to serialize
        message_format: ``'csv'`` for ``"x,y,z"`` or ``'json'`` for an object

    Returns:
        Payload string
    """
    if message_format == 'csv':
        return f"{anchor.x},{anchor.y},{anchor.z}"
    if message_format == 'json':
        return json.dumps(anchor.to_dict())
    raise ValueError(f"Unsupported message format: {message_format}")


class AnchorEmitter:
    """
    Hands anchor points to a consumer callable as host messages.

    With ``lock_after_first`` set, only the first anchor is delivered until
    ``unlock`` is called, so a placed object stays where it was dropped.
    """

    def __init__(self,
                 consumer: Optional[Callable[[HostMessage], None]] = None,
                 target: str = 'FloorDetector',
                 method: str = 'OnReceiveFloorPosition',
                 message_format: str = 'json',
                 lock_after_first: bool = False):
        if message_format not in MESSAGE_FORMATS:
            raise ValueError(f"Unsupported message format: {message_format}")

        self.consumer = consumer
        self.target = target
        self.method = method
        self.message_format = message_format
        self.lock_after_first = lock_after_first
        self.placed = False

    def unlock(self):
        self.placed = False

    def emit(self, anchor: AnchorPoint) -> Optional[HostMessage]:
        """
        Deliver an anchor.

        Returns:
            The delivered message, or None if nothing was sent
        """
        if self.consumer is None:
            return None
        if self.lock_after_first and self.placed:
            logger.debug("Anchor already placed, not emitting")
            return None

        message = HostMessage(self.target, self.method,
                              format_anchor(anchor, self.message_format))
        self.consumer(message)
        self.placed = True
        logger.debug("Emitted %s.%s(%s)", message.target, message.method, message.payload)
        return message
