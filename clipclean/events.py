#
# This file is part of Clipclean.
#
# Clipclean is free software: you can redistribute it and/or modify
# it under the terms of the zlib license. See the COPYING file.
"""
Defines the EventHandler class, through which the monitor tells the rest of
the program (and whoever is interested) what it did.

Available events:

``url_cleaned(service_name)``
    The clipboard content was cleaned and written back.
"""
import logging

from collections import OrderedDict
from typing import Callable, Dict, List

log = logging.getLogger(__name__)


class EventHandler:
    """
    A class keeping a list of possible events that are triggered
    by clipclean. You can add an event handler associated with an event
    name, and whenever that event is triggered, the callback is called.
    """

    def __init__(self):
        events = [
            'url_cleaned',
        ]
        self.events: Dict[str, OrderedDict[int, List[Callable]]] = {}
        for event in events:
            self.events[event] = OrderedDict()

    def add_event_handler(self, name: str, callback: Callable,
                          priority: int = 50) -> bool:
        """
        Add a callback to a given event.
        Note that if that event name doesn’t exist, it just returns False.
        If it was successfully added, it returns True
        priority is a integer between 0 and 100. 0 is the highest priority and
        will be called first. 100 is the lowest.
        """

        if name not in self.events:
            return False

        callbacks = self.events[name]

        # Clamp priority
        priority = max(0, min(priority, 100))

        entry = callbacks.setdefault(priority, [])
        entry.append(callback)
        # keep the priorities sorted, whatever the order they were added in
        for key in sorted(callbacks):
            callbacks.move_to_end(key)

        return True

    def trigger(self, name: str, *args, **kwargs):
        """
        Call all the callbacks associated to the given event name.

        An exception in a callback is logged and does not prevent the
        other callbacks from being called.
        """
        callbacks = self.events.get(name, None)
        if callbacks is None:
            return
        for priority in callbacks.values():
            for callback in priority:
                try:
                    callback(*args, **kwargs)
                except Exception:
                    log.error('Error in the %s handler %s', name, callback,
                              exc_info=True)
