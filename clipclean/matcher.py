# This file is part of Clipclean.
#
# Clipclean is free software: you can redistribute it and/or modify
# it under the terms of the zlib license. See the COPYING file.
"""
URL discovery in arbitrary text.

This module knows nothing about rules: it finds ``http`` and ``https`` URLs
in a piece of text and parses them into their components.

Where a URL ends is decided by :py:func:`trim_url`, which leans towards
matching too little rather than too much:

* a URL stops at whitespace, ``<``, ``>``, ``"``, a backtick, or a control
  character;
* trailing ``. , ; : ! ? ' *`` are never part of the URL;
* a trailing ``)``, ``]`` or ``}`` is only kept if it closes an opening
  bracket found inside the URL, so that
  ``https://en.wikipedia.org/wiki/Foo_(bar)`` is kept whole while in
  ``(see https://example.com)`` the parenthesis stays in the text.
"""

import logging
import re

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple
from urllib.parse import unquote_plus, urlsplit

log = logging.getLogger(__name__)

RE_URL = re.compile(r'\bhttps?://[^\s<>"`\x00-\x1f\x7f]+', re.IGNORECASE)

TRAILING_PUNCTUATION = '.,;:!?\'*'

BRACKETS = {
    ')': '(',
    ']': '[',
    '}': '{',
}

QueryItems = List[Tuple[str, Optional[str]]]


@dataclass
class MatchCandidate:
    """
    A URL found in a text, with its position and parsed components.

    ``query`` keeps the raw ``(name, value)`` pairs in their original order,
    as written in the text (not percent-decoded).
    """
    __slots__ = ('start', 'end', 'url', 'scheme', 'host', 'path', 'query',
                 'fragment')
    start: int
    end: int
    url: str
    scheme: str
    host: str
    path: str
    query: QueryItems
    fragment: Optional[str]


def param_name(raw_name: str) -> str:
    return unquote_plus(raw_name).lower()


def trim_url(url: str) -> str:
    """
    Remove the characters at the end of a match that are more likely
    to be part of the surrounding text than of the URL.
    """
    while url:
        last = url[-1]
        if last in TRAILING_PUNCTUATION:
            url = url[:-1]
        elif last in BRACKETS and \
                url.count(BRACKETS[last]) < url.count(last):
            url = url[:-1]
        else:
            break
    return url


def split_query(query: str) -> QueryItems:
    """
    Split a raw query string into (name, value) pairs, keeping their order.
    The value is None for a pair without ``=``, and empty pairs
    (``a=1&&b=2``) are dropped.
    """
    items: QueryItems = []
    for pair in query.split('&'):
        if not pair:
            continue
        name, sep, value = pair.partition('=')
        items.append((name, value if sep else None))
    return items


def parse_url(url: str, start: int = 0) -> Optional[MatchCandidate]:
    """
    Parse an URL string, returns None if it has no scheme or no host, or
    if it can’t be parsed at all.
    """
    try:
        parts = urlsplit(url)
        host = parts.hostname
    except ValueError:
        log.debug('Unable to parse %r as an URL', url, exc_info=True)
        return None
    if not parts.scheme or not host:
        return None
    without_fragment, hash_sign, fragment = url.partition('#')
    _, _, query = without_fragment.partition('?')
    return MatchCandidate(
        start=start,
        end=start + len(url),
        url=url,
        scheme=parts.scheme.lower(),
        host=host.lower(),
        path=parts.path,
        query=split_query(query),
        fragment=fragment if hash_sign else None,
    )


def find_urls(text: str) -> Iterator[MatchCandidate]:
    """
    Yield the URLs found in the text, ordered by position.

    The matches never overlap, and the ones that can’t be parsed into a
    scheme and a host are skipped.
    """
    for match in RE_URL.finditer(text):
        url = trim_url(match.group(0))
        candidate = parse_url(url, match.start())
        if candidate is not None:
            yield candidate


def is_single_url(text: str) -> bool:
    """
    True if the text, once stripped, is exactly one URL with a scheme and
    a host.
    """
    text = text.strip()
    if not text:
        return False
    match = RE_URL.fullmatch(text)
    if match is None:
        return False
    return parse_url(text) is not None
