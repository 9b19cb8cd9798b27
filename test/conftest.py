"""
Fixtures shared by the tests
"""

from typing import Optional

import pytest

from clipclean import config
from clipclean.clipboard import Clipboard, ClipboardUnavailable
from clipclean.preferences import Preferences
from clipclean.rules import DEFAULT_RULES, RuleTable


class FakeClipboard(Clipboard):
    """
    A clipboard living in memory, with a generation counter bumped on every
    change, like the system ones.
    """

    def __init__(self, text: Optional[str] = None) -> None:
        self.text = text
        self._generation = 0
        self.writes = []
        self.available = True

    @property
    def generation(self) -> int:
        if not self.available:
            raise ClipboardUnavailable('permission denied')
        return self._generation

    def read_text(self) -> Optional[str]:
        if not self.available:
            raise ClipboardUnavailable('permission denied')
        return self.text

    def write_text(self, text: str) -> None:
        if not self.available:
            raise ClipboardUnavailable('permission denied')
        self.writes.append(text)
        self.text = text
        self._generation += 1

    def copy(self, text: Optional[str]) -> None:
        "Another program copies something"
        self.text = text
        self._generation += 1


@pytest.fixture
def config_obj(tmp_path):
    return config.Config(tmp_path / 'clipclean.cfg', config.DEFAULT_CONFIG)


@pytest.fixture
def preferences(config_obj):
    return Preferences(config_obj)


@pytest.fixture
def table(preferences):
    return RuleTable(DEFAULT_RULES, preferences)


@pytest.fixture
def clipboard():
    return FakeClipboard()


def disable(config_obj, *rule_ids):
    for rule_id in rule_ids:
        config_obj.silent_set(rule_id, 'false', section='rules')
