# This file is part of Clipclean.
#
# Clipclean is free software: you can redistribute it and/or modify
# it under the terms of the zlib license. See the COPYING file.
"""
Starting point of clipclean. Sets up the config, the rule table and the
monitor, then runs the event loop until asked to stop.
"""

import asyncio
import logging
import signal
import sys

from clipclean import args, config
from clipclean.clipboard import PyperclipClipboard
from clipclean.events import EventHandler
from clipclean.monitor import ClipboardMonitor
from clipclean.preferences import Preferences
from clipclean.rewriter import sanitize
from clipclean.rules import DuplicateRuleError, RuleTable, create_rule_table

log = logging.getLogger(__name__)


def load_rule_table(preferences: Preferences) -> RuleTable:
    "Build the rule table from the config, or exit"
    try:
        return create_rule_table(config.config, preferences)
    except (DuplicateRuleError, ValueError) as exc:
        sys.stderr.write('Clipclean was unable to load the rules: %s\n' % exc)
        sys.exit(1)


def notify(service: str) -> None:
    print('%s URL has been cleaned' % service, flush=True)


class Clipclean:
    """
    Glue between the monitor, the config and the signals.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop,
                 preferences: Preferences, table: RuleTable) -> None:
        self.loop = loop
        self.preferences = preferences
        self.events = EventHandler()
        self.monitor = ClipboardMonitor(
            PyperclipClipboard(),
            table,
            preferences,
            self.events,
            interval=preferences.poll_interval,
            loop=loop,
        )
        self.events.add_event_handler('url_cleaned', self.on_url_cleaned)

    def on_url_cleaned(self, service: str) -> None:
        if self.preferences.notifications_enabled:
            notify(service)

    def reload_config(self) -> None:
        """
        Read the config file again and rebuild the rule table. If the new
        rules are invalid the old table is kept.
        """
        log.debug('SIGUSR1 caught, reloading the config…')
        config.config.read_file()
        try:
            table = create_rule_table(config.config, self.preferences)
        except (DuplicateRuleError, ValueError):
            log.error('Unable to reload the rules, keeping the old ones',
                      exc_info=True)
            return
        self.monitor.table = table
        self.monitor.interval = self.preferences.poll_interval
        log.debug('Config reloaded, %d rules.', len(table))

    def exit_from_signal(self, signame: str) -> None:
        log.debug('%s received. Exiting…', signame)
        self.monitor.stop_monitoring()
        self.loop.stop()

    def run(self) -> None:
        self.loop.add_signal_handler(signal.SIGUSR1, self.reload_config)
        for sig in (signal.SIGINT, signal.SIGTERM, signal.SIGHUP):
            self.loop.add_signal_handler(sig, self.exit_from_signal, sig.name)
        self.monitor.start_monitoring()
        try:
            self.loop.run_forever()
        finally:
            self.monitor.stop_monitoring()
            self.loop.close()


def main(argv=None):
    """
    Entry point.
    """
    options, _ = args.run_cmdline_args(argv)
    config.create_global_config(options.filename)
    config.setup_logging(options.debug or '')

    preferences = Preferences(config.config)
    table = load_rule_table(preferences)

    if options.check_config:
        config.check_config(table, {
            rule.id: table.is_enabled(rule.id)
            for rule in table
        })
        sys.exit(0)

    if options.reset_count:
        preferences.reset_cleaned_count()
        print('URLs cleaned: 0')
        sys.exit(0)

    if options.sanitize:
        text, _ = sanitize(sys.stdin.read(), table)
        sys.stdout.write(text)
        sys.exit(0)

    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    Clipclean(loop, preferences, table).run()
