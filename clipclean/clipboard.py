# This file is part of Clipclean.
#
# Clipclean is free software: you can redistribute it and/or modify
# it under the terms of the zlib license. See the COPYING file.
"""
Access to the system clipboard.

The monitor only needs three things from a clipboard: read its text, write
new text, and a *generation* counter that increases every time the content
changes, so that changes can be detected without comparing contents.
"""

import logging

from typing import Optional

import pyperclip

log = logging.getLogger(__name__)


class ClipboardUnavailable(Exception):
    """The clipboard could not be read or written"""


class Clipboard:
    """
    Base class of the clipboard adapters.
    """

    @property
    def generation(self) -> int:
        raise NotImplementedError

    def read_text(self) -> Optional[str]:
        raise NotImplementedError

    def write_text(self, text: str) -> None:
        raise NotImplementedError


class PyperclipClipboard(Clipboard):
    """
    The system clipboard, through pyperclip.

    pyperclip has no change counter, so the generation is bumped whenever
    the content read differs from the last one seen, and after each write.
    """

    def __init__(self) -> None:
        self._generation = 0
        self._last_content: Optional[str] = None

    def _paste(self) -> Optional[str]:
        try:
            content = pyperclip.paste()
        except pyperclip.PyperclipException as exc:
            raise ClipboardUnavailable(str(exc)) from exc
        # pyperclip returns an empty string for non-text content
        return content or None

    @property
    def generation(self) -> int:
        content = self._paste()
        if content != self._last_content:
            self._last_content = content
            self._generation += 1
        return self._generation

    def read_text(self) -> Optional[str]:
        return self._paste()

    def write_text(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            raise ClipboardUnavailable(str(exc)) from exc
        self._last_content = text
        self._generation += 1
        log.debug('Wrote %d characters to the clipboard', len(text))
