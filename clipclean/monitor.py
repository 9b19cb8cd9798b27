# This file is part of Clipclean.
#
# Clipclean is free software: you can redistribute it and/or modify
# it under the terms of the zlib license. See the COPYING file.
"""
The clipboard monitor: polls the clipboard, cleans what was copied, and
writes the result back.

Everything runs on the asyncio event loop, one tick after the other, so
the clipboard is never touched by two ticks at the same time.
"""

import asyncio
import logging

from dataclasses import dataclass
from typing import Optional

from clipclean import timed_events
from clipclean.clipboard import Clipboard, ClipboardUnavailable
from clipclean.events import EventHandler
from clipclean.matcher import is_single_url
from clipclean.rewriter import sanitize
from clipclean.rules import RuleTable

log = logging.getLogger(__name__)

POLL_INTERVAL = 0.5


@dataclass
class MonitorState:
    """
    What the monitor remembers from one tick to the next.
    """
    last_generation: Optional[int] = None
    cleaned_count: int = 0


class ClipboardMonitor:
    """
    Periodically look at the clipboard, and clean the URLs copied in it.

    :param clipboard: The clipboard adapter.
    :param table: The rule table, can be replaced between two ticks.
    :param preferences: The preferences, read again at every tick.
    :param events: Where ``url_cleaned`` is triggered.
    """

    def __init__(self,
                 clipboard: Clipboard,
                 table: RuleTable,
                 preferences,
                 events: EventHandler,
                 state: Optional[MonitorState] = None,
                 interval: float = POLL_INTERVAL,
                 loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self.clipboard = clipboard
        self.table = table
        self.preferences = preferences
        self.events = events
        self.state = state or MonitorState(
            cleaned_count=preferences.cleaned_count)
        self.interval = interval
        self.loop = loop
        self.timer: Optional[timed_events.DelayedEvent] = None

    @property
    def monitoring(self) -> bool:
        return self.timer is not None

    def start_monitoring(self) -> None:
        """
        Start polling. What is already in the clipboard is left alone,
        only what is copied from now on is cleaned.
        """
        if self.timer is not None:
            return
        try:
            self.state.last_generation = self.clipboard.generation
        except ClipboardUnavailable:
            log.debug('Clipboard unavailable when starting', exc_info=True)
        log.debug('Starting to monitor the clipboard every %ss',
                  self.interval)
        self._schedule()

    def stop_monitoring(self) -> None:
        """Stop polling. Does nothing if it was already stopped."""
        if self.timer is None:
            return
        timed_events.remove_timed_event(self.timer)
        self.timer = None
        log.debug('Stopped monitoring the clipboard')

    def _schedule(self) -> None:
        self.timer = timed_events.DelayedEvent(self.interval, self._on_timer)
        timed_events.add_timed_event(self.timer, self.loop)

    def _on_timer(self) -> None:
        try:
            self.tick()
        finally:
            if self.timer is not None:
                self._schedule()

    def tick(self) -> Optional[str]:
        """
        Look at the clipboard once. Returns the name of the service whose
        URL was cleaned, or None if the clipboard was left untouched.
        """
        if not self.preferences.monitoring_enabled:
            return None
        try:
            return self._check_clipboard()
        except ClipboardUnavailable:
            log.debug('Clipboard unavailable, will retry', exc_info=True)
            return None

    def _check_clipboard(self) -> Optional[str]:
        generation = self.clipboard.generation
        if generation == self.state.last_generation:
            return None
        # remember it before anything else, this content is handled once
        self.state.last_generation = generation

        content = self.clipboard.read_text()
        if content is None:
            return None

        if not self.preferences.clean_urls_in_text:
            if not is_single_url(content):
                return None
            content = content.strip()

        cleaned, service = sanitize(content, self.table)
        if cleaned == content or service is None:
            return None

        self.clipboard.write_text(cleaned)
        # our own write changed the generation, do not handle it again
        self.state.last_generation = self.clipboard.generation

        self.state.cleaned_count = self.preferences.increment_cleaned_count()
        log.debug('Cleaned a %s URL (%d so far)', service,
                  self.state.cleaned_count)
        self.events.trigger('url_cleaned', service)
        return service
