# This file is part of Clipclean.
#
# Clipclean is free software: you can redistribute it and/or modify
# it under the terms of the zlib license. See the COPYING file.
"""
Delayed events are the standard way to schedule something for later in
clipclean, on the asyncio event loop.

Once created, they must be scheduled with :py:func:`add_timed_event`, and
can be unscheduled with :py:func:`remove_timed_event`.
"""

import asyncio

from typing import Callable, Optional, Union


class DelayedEvent:
    """
    An event whose callback is called after a delay in seconds.
    Use it if you want an event to happen in, e.g. 6 seconds.
    """

    def __init__(self, delay: Union[int, float], callback: Callable,
                 *args) -> None:
        """
        Create a new DelayedEvent.

        :param int delay: The number of seconds.
        :param function callback: The handler that will be executed.
        :param args: Optional arguments passed to the handler.
        """
        self.callback = callback
        self.args = args
        self.delay = delay
        # An asyncio handler, as returned by call_later()
        self.handler: Optional[asyncio.TimerHandle] = None


def add_timed_event(event: DelayedEvent,
                    loop: Optional[asyncio.AbstractEventLoop] = None):
    """Schedule a delayed event"""
    if loop is None:
        loop = asyncio.get_event_loop()
    event.handler = loop.call_later(event.delay, event.callback, *event.args)


def remove_timed_event(event: DelayedEvent):
    """Unschedule a delayed event, does nothing if it is not scheduled"""
    if event.handler is not None:
        event.handler.cancel()
        event.handler = None
