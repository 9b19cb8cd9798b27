# This file is part of Clipclean.
#
# Clipclean is free software: you can redistribute it and/or modify
# it under the terms of the zlib license. See the COPYING file.
"""
Removal of the tracking parameters of a single URL.

For each URL, at most one host-scoped rule applies (the first enabled one
matching the host, in table order). Its parameters are combined with the
ones of every enabled universal rule, unless it removes all the parameters,
in which case the universal rules are not looked at.
"""

import logging

from dataclasses import dataclass
from typing import Dict, List, Optional, Set

from clipclean.matcher import MatchCandidate, QueryItems, param_name
from clipclean.rules import Rule, RuleTable

log = logging.getLogger(__name__)


@dataclass
class FilterResult:
    __slots__ = ('url', 'service')
    url: str
    service: str


def find_host_rule(host: str, table: RuleTable) -> Optional[Rule]:
    """
    The first enabled host-scoped rule matching the host, if any
    """
    for rule in table.host_rules():
        if rule.matches_host(host) and table.is_enabled(rule.id):
            return rule
    return None


def render_url(candidate: MatchCandidate, query: QueryItems) -> str:
    """
    Rebuild the URL text with a new query, leaving everything before the
    ``?`` and the fragment as they were written. An empty query leaves
    no ``?`` behind.
    """
    base = candidate.url.partition('#')[0].partition('?')[0]
    if query:
        base += '?' + '&'.join(
            name if value is None else '%s=%s' % (name, value)
            for name, value in query)
    if candidate.fragment is not None:
        base += '#' + candidate.fragment
    return base


def filter_url(candidate: MatchCandidate,
               table: RuleTable) -> Optional[FilterResult]:
    """
    Compute the cleaned version of an URL.

    Returns None when nothing would be removed, either because no enabled
    rule applies, or because the URL has none of the parameters to remove.
    """
    host_rule = find_host_rule(candidate.host, table)

    if host_rule is not None and host_rule.remove_all_params:
        if not candidate.query:
            return None
        log.debug('Removing all the parameters of %s (%s)', candidate.url,
                  host_rule.name)
        return FilterResult(render_url(candidate, []), host_rule.name)

    removal: Set[str] = set()
    # parameter name -> first universal rule removing it
    owners: Dict[str, Rule] = {}
    if host_rule is not None:
        removal |= host_rule.tracking_params
    for rule in table.universal_rules():
        if not table.is_enabled(rule.id):
            continue
        for param in rule.tracking_params:
            owners.setdefault(param, rule)
        removal |= rule.tracking_params

    if not removal:
        return None

    kept: QueryItems = []
    removed: List[str] = []
    for name, value in candidate.query:
        decoded = param_name(name)
        if decoded in removal:
            removed.append(decoded)
        else:
            kept.append((name, value))

    if not removed:
        return None

    if host_rule is not None:
        service = host_rule.name
    else:
        contributors = {owners[name].id for name in removed if name in owners}
        service = next(rule.name for rule in table.universal_rules()
                       if rule.id in contributors)
    return FilterResult(render_url(candidate, kept), service)
