"""Delivery of quiz announcements to every connected participant."""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

ANNOUNCEMENT_EVENT = 'announcement'
_COLOR_CODE = re.compile(r'&[0-9a-f]')


def strip_color_codes(text: str) -> str:
    return _COLOR_CODE.sub('', text)


class SocketIOBroadcaster:
    """Emit announcements to the whole Socket.IO namespace and log a plain copy."""

    def __init__(self, socketio, namespace='/ws'):
        self._socketio = socketio
        self._namespace = namespace

    def send(self, text: str) -> None:
        plain = strip_color_codes(text)
        self._socketio.emit(ANNOUNCEMENT_EVENT, {'message': text, 'plain': plain}, namespace=self._namespace)
        logger.info(plain)
