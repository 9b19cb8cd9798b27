# This file is part of Clipclean.
#
# Clipclean is free software: you can redistribute it and/or modify
# it under the terms of the zlib license. See the COPYING file.
"""
The rule table: which URLs are cleaned, and of which parameters.

A rule with an empty ``hosts`` set is *universal*: it applies to every URL
and can be combined with the (at most one) host-scoped rule matching a URL.
"""

import logging

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple

log = logging.getLogger(__name__)

RULE_SECTION_PREFIX = 'rule:'

UTM_PARAMS = frozenset({
    'utm_source',
    'utm_medium',
    'utm_campaign',
    'utm_term',
    'utm_content',
})

AMAZON_HOSTS = frozenset({
    'amazon.com',
    'amazon.ca',
    'amazon.com.mx',
    'amazon.com.br',
    'amazon.co.uk',
    'amazon.de',
    'amazon.fr',
    'amazon.it',
    'amazon.es',
    'amazon.nl',
    'amazon.se',
    'amazon.pl',
    'amazon.com.be',
    'amazon.com.tr',
    'amazon.ae',
    'amazon.sa',
    'amazon.eg',
    'amazon.in',
    'amazon.sg',
    'amazon.co.jp',
    'amazon.com.au',
})


class DuplicateRuleError(Exception):
    """Two rules of the same table share an id"""


@dataclass(frozen=True)
class Rule:
    id: str
    name: str
    description: str = ''
    hosts: FrozenSet[str] = field(default_factory=frozenset)
    tracking_params: FrozenSet[str] = field(default_factory=frozenset)
    remove_all_params: bool = False
    default_enabled: bool = True

    @property
    def is_universal(self) -> bool:
        return not self.hosts

    def matches_host(self, host: str) -> bool:
        """
        True if ``host`` is one of the rule hosts or a subdomain of one.
        Universal rules match nothing here, they are not host-scoped.
        """
        host = host.lower()
        return any(host == h or host.endswith('.' + h) for h in self.hosts)


DEFAULT_RULES: Tuple[Rule, ...] = (
    Rule(
        id='youtube',
        name='YouTube',
        description='Removes tracking parameters (si, feature, utm_*) from '
        'video, shorts, and playlist URLs.',
        hosts=frozenset({'youtube.com', 'youtu.be', 'youtube-nocookie.com'}),
        tracking_params=frozenset({'si', 'feature', 'app', 'pp'}),
    ),
    Rule(
        id='spotify',
        name='Spotify',
        description='Removes tracking parameters (si, nd, context, utm_*) '
        'from track, album, playlist, and artist URLs.',
        hosts=frozenset({'open.spotify.com', 'spotify.link'}),
        tracking_params=frozenset({'si', 'nd', 'context'}),
    ),
    Rule(
        id='instagram',
        name='Instagram',
        description='Removes tracking parameters (igsh, igshid, utm_*) from '
        'post, reel, and story URLs.',
        hosts=frozenset({'instagram.com'}),
        tracking_params=frozenset({'igsh', 'igshid'}),
    ),
    Rule(
        id='amazon',
        name='Amazon',
        description='Removes all query parameters from product URLs. '
        'Supports all international Amazon domains.',
        hosts=AMAZON_HOSTS,
        remove_all_params=True,
    ),
    Rule(
        id='utm',
        name='UTM parameters',
        description='Removes the utm_* campaign parameters from every URL.',
        tracking_params=UTM_PARAMS,
    ),
    # fbclid: Facebook, gclid/dclid: Google Ads and DoubleClick,
    # msclkid: Microsoft Ads, ncid: DoubleClick, twclid/ref_*: Twitter
    Rule(
        id='clickid',
        name='Click identifiers',
        description='Removes advertising click identifiers (fbclid, gclid, '
        'msclkid, …) from every URL.',
        tracking_params=frozenset({
            'fbclid',
            'gclid',
            'dclid',
            'msclkid',
            'ncid',
            'twclid',
            'ref_src',
            'ref_url',
        }),
    ),
)


class RuleTable:
    """
    An ordered, read-only collection of rules.

    The order of the rules is the order in which they were given, it decides
    which host-scoped rule wins when several match, and which universal rule
    is credited for a cleaning.

    ``preferences`` is any object with a ``rule_enabled(rule_id, default)``
    method; without it every rule uses its ``default_enabled`` value.
    """

    def __init__(self, rules: Iterable[Rule], preferences=None) -> None:
        self._rules: List[Rule] = []
        self._by_id: Dict[str, Rule] = {}
        for rule in rules:
            if rule.id in self._by_id:
                raise DuplicateRuleError('Duplicate rule id: %s' % rule.id)
            self._by_id[rule.id] = rule
            self._rules.append(rule)
        self.preferences = preferences

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def rules(self) -> List[Rule]:
        return list(self._rules)

    def get(self, rule_id: str) -> Optional[Rule]:
        return self._by_id.get(rule_id)

    def host_rules(self) -> List[Rule]:
        return [rule for rule in self._rules if not rule.is_universal]

    def universal_rules(self) -> List[Rule]:
        return [rule for rule in self._rules if rule.is_universal]

    def is_enabled(self, rule_id: str) -> bool:
        """
        Whether the rule is enabled, according to the preferences or,
        if there is no explicit preference, to the rule default.
        """
        rule = self._by_id[rule_id]
        if self.preferences is None:
            return rule.default_enabled
        return self.preferences.rule_enabled(rule_id, rule.default_enabled)


def rule_from_section(config, section: str) -> Rule:
    """
    Build a rule from a ``[rule:<id>]`` config section.

    Lists (hosts, params) are colon-separated, like every list option.
    Raises ValueError if the section does not describe a usable rule.
    """
    rule_id = section[len(RULE_SECTION_PREFIX):].strip()
    if not rule_id:
        raise ValueError('Rule section %r has no id' % section)
    name = config.getstr('name', section)
    if not name:
        raise ValueError('Rule %r has no name' % rule_id)
    hosts = frozenset(h.lower() for h in config.getlist('hosts', section))
    remove_all_params = config.get('remove_all_params', False, section)
    # universal rules never remove every parameter
    if remove_all_params and not hosts:
        raise ValueError('Rule %r: remove_all_params needs hosts' % rule_id)
    return Rule(
        id=rule_id,
        name=name,
        description=config.getstr('description', section),
        hosts=hosts,
        tracking_params=frozenset(
            p.lower() for p in config.getlist('params', section)),
        remove_all_params=remove_all_params,
        default_enabled=config.get('default_enabled', True, section),
    )


def load_rules(config=None) -> List[Rule]:
    """
    The built-in rules followed by the ones defined in the config file,
    in the order of their sections.
    """
    rules = list(DEFAULT_RULES)
    if config is None:
        return rules
    for section in config.sections():
        if section.startswith(RULE_SECTION_PREFIX):
            rule = rule_from_section(config, section)
            log.debug('Loaded rule %s (%s) from the config', rule.id,
                      rule.name)
            rules.append(rule)
    return rules


def create_rule_table(config=None, preferences=None) -> RuleTable:
    "Build the rule table, raises DuplicateRuleError or ValueError"
    return RuleTable(load_rules(config), preferences)
