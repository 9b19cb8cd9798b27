# This file is part of Clipclean.
#
# Clipclean is free software: you can redistribute it and/or modify
# it under the terms of the zlib license. See the COPYING file.
"""
Cleaning of all the URLs of a piece of text.
"""

import logging

from typing import Optional, Tuple

from clipclean.filters import filter_url
from clipclean.matcher import MatchCandidate, find_urls, parse_url, trim_url
from clipclean.rules import RuleTable

log = logging.getLogger(__name__)


def clean_candidate(candidate: MatchCandidate,
                    table: RuleTable) -> Optional[Tuple[str, str]]:
    """
    Return the replacement text of the URL and the service name, or None
    if the URL is left as it is.

    Removing the last parameters can leave the URL ending with punctuation
    (``?a.&fbclid=1`` becomes ``?a.``), which would not be part of the URL
    if the text was looked at again. That punctuation is moved out of the
    URL and what remains is cleaned again, until it is stable, so that
    cleaning the result once more changes nothing.
    """
    result = filter_url(candidate, table)
    if result is None:
        return None
    url, service = result.url, result.service
    tail = ''
    while True:
        trimmed = trim_url(url)
        if trimmed == url:
            break
        tail = url[len(trimmed):] + tail
        url = trimmed
        again = parse_url(url)
        result = filter_url(again, table) if again is not None else None
        if result is None:
            break
        url, service = result.url, result.service
    return url + tail, service


def sanitize(text: str, table: RuleTable) -> Tuple[str, Optional[str]]:
    """
    Clean every URL of the text, and return the new text with the name of
    the service of one of the cleaned URLs (None if nothing changed).

    The URLs are replaced starting from the end of the text, so the
    positions of the ones before stay valid. Only one service name is
    returned even if several URLs were cleaned by different rules: the one
    of the first cleaned URL of the text.
    """
    candidates = list(find_urls(text))
    service: Optional[str] = None
    for candidate in reversed(candidates):
        result = clean_candidate(candidate, table)
        if result is None:
            continue
        replacement, service = result
        log.debug('Cleaned %s into %s (%s)', candidate.url, replacement,
                  service)
        text = text[:candidate.start] + replacement + text[candidate.end:]
    return text, service
