# This file is part of Clipclean.
#
# Clipclean is free software: you can redistribute it and/or modify
# it under the terms of the zlib license. See the COPYING file.
"""
The user preferences, as seen by the rule table and the monitor.

Every value is read from the config object when it is asked for, so a
change (for example after a reload of the config file) is taken into
account at the next tick of the monitor.
"""

import logging

from clipclean.config import Config

log = logging.getLogger(__name__)


class Preferences:
    """
    Read-only access to the preferences, except for the cleaned counter
    which is saved in the ``var`` section of the config file.
    """

    def __init__(self, config: Config) -> None:
        self.config = config

    @property
    def monitoring_enabled(self) -> bool:
        return self.config.getbool('monitoring_enabled')

    @property
    def clean_urls_in_text(self) -> bool:
        return self.config.getbool('clean_urls_in_text')

    @property
    def notifications_enabled(self) -> bool:
        return self.config.getbool('notifications_enabled')

    @property
    def poll_interval(self) -> float:
        interval = self.config.getfloat('poll_interval')
        if not interval or interval <= 0:
            return 0.5
        return interval

    def rule_enabled(self, rule_id: str, default: bool) -> bool:
        """
        The value of the ``[rules]`` option named after the rule, or the
        default if there is none (or if it is not a boolean).
        """
        return self.config.get(rule_id, default, section='rules')

    @property
    def cleaned_count(self) -> int:
        return self.config.getint('cleaned_count', section='var') or 0

    def increment_cleaned_count(self) -> int:
        count = self.cleaned_count + 1
        if not self.config.silent_set('cleaned_count', count, section='var'):
            log.error('Unable to save the number of cleaned URLs')
        return count

    def reset_cleaned_count(self) -> None:
        self.config.silent_set('cleaned_count', 0, section='var')
