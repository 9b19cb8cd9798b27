"""
Tests for the EventHandler class
"""

import logging

from clipclean.events import EventHandler


def test_unknown_event():
    events = EventHandler()
    assert not events.add_event_handler('nope', print)
    events.trigger('nope', 'whatever')


def test_priorities():
    events = EventHandler()
    calls = []
    events.add_event_handler('url_cleaned', lambda s: calls.append(('low', s)),
                             priority=90)
    events.add_event_handler('url_cleaned', lambda s: calls.append(('high', s)),
                             priority=0)
    events.add_event_handler('url_cleaned', lambda s: calls.append(('mid', s)))
    events.trigger('url_cleaned', 'YouTube')
    assert calls == [('high', 'YouTube'), ('mid', 'YouTube'),
                     ('low', 'YouTube')]


def test_failing_handler(caplog):
    events = EventHandler()
    calls = []

    def broken(service):
        raise RuntimeError('boom')

    events.add_event_handler('url_cleaned', broken, priority=10)
    events.add_event_handler('url_cleaned', calls.append, priority=20)
    with caplog.at_level(logging.ERROR, logger='clipclean.events'):
        events.trigger('url_cleaned', 'Spotify')
    assert calls == ['Spotify']
    assert 'Error in the url_cleaned handler' in caplog.text
