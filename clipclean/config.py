# This file is part of Clipclean.
#
# Clipclean is free software: you can redistribute it and/or modify
# it under the terms of the zlib license. See the COPYING file.
"""
Defines the global config instance, used to get or set (and save) values
from/to the config file.

The same file stores the user preferences (which rules are enabled,
whether monitoring is on) and the only persisted state of the program,
the number of cleaned URLs, in the ``var`` section.
"""

import logging
import logging.config
import os
import sys

from configparser import RawConfigParser, NoOptionError, NoSectionError
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union, cast

from clipclean import xdg

log = logging.getLogger(__name__)  # type: logging.Logger

ConfigValue = Union[str, int, float, bool]

ConfigDict = Dict[str, Dict[str, ConfigValue]]

USE_DEFAULT_SECTION = '__DEFAULT SECTION PLACEHOLDER__'

DEFAULT_CONFIG: ConfigDict = {
    'Clipclean': {
        'clean_urls_in_text': False,
        'log_dir': '',
        'log_errors': True,
        'monitoring_enabled': True,
        'notifications_enabled': False,
        'poll_interval': 0.5,
    },
    'rules': {},
    'var': {
        'cleaned_count': 0,
    },
}


class ClipcleanConfigParser(RawConfigParser):
    def optionxform(self, value) -> str:
        return str(value)


class Config:
    """
    The config file, read with configparser.

    Values are looked up in the file first, then in ``default``. Writes only
    touch the line of the option, so the comments of the file survive.
    """

    configparser: ClipcleanConfigParser
    file_name: Path
    default: ConfigDict
    default_section: str = 'Clipclean'

    def __init__(self, file_name: Path, default: Optional[ConfigDict] = None) -> None:
        self.file_name = file_name
        self.default = default or {}
        self.read_file()

    def read_file(self):
        "(Re)load the file, dropping every value set before"
        self.configparser = ClipcleanConfigParser()
        self.configparser.read(str(self.file_name), encoding='utf-8')
        for section in (self.default_section, 'rules', 'var'):
            if not self.has_section(section):
                self.add_section(section)

    def get(self,
            option: str,
            default: Optional[ConfigValue] = None,
            section: str = USE_DEFAULT_SECTION) -> Any:
        """
        get a value from the config but return
        a default value if it is not found
        The type of default defines the type
        returned
        """
        if section == USE_DEFAULT_SECTION:
            section = self.default_section
        if default is None:
            default = self.default.get(section, {}).get(option, '')

        if isinstance(default, bool):
            getter = self.configparser.getboolean
        elif isinstance(default, int):
            getter = self.configparser.getint
        elif isinstance(default, float):
            getter = self.configparser.getfloat
        else:
            getter = self.configparser.get
        try:
            return getter(section, option)
        except (NoOptionError, NoSectionError, ValueError):
            return default

    def _get_default(self, option, section):
        return self.default.get(section, {}).get(option)

    def _typed_get(self, getter: Callable, option: str, section: str) -> Any:
        if section == USE_DEFAULT_SECTION:
            section = self.default_section
        try:
            return getter(section, option)
        except (NoOptionError, NoSectionError, ValueError):
            return self._get_default(option, section)

    def sections(self) -> List[str]:
        return self.configparser.sections()

    def has_option(self, section: str, option: str) -> bool:
        return self.configparser.has_option(section, option)

    def has_section(self, section: str) -> bool:
        return self.configparser.has_section(section)

    def add_section(self, section: str) -> None:
        self.configparser.add_section(section)

    def getstr(self, option, section=USE_DEFAULT_SECTION) -> str:
        return cast(str, self._typed_get(self.configparser.get, option,
                                         section) or '')

    def getint(self, option, section=USE_DEFAULT_SECTION) -> int:
        return cast(int, self._typed_get(self.configparser.getint, option,
                                         section))

    def getfloat(self, option, section=USE_DEFAULT_SECTION) -> float:
        return cast(float, self._typed_get(self.configparser.getfloat, option,
                                           section))

    def getbool(self, option, section=USE_DEFAULT_SECTION) -> bool:
        return cast(bool, self._typed_get(self.configparser.getboolean, option,
                                          section))

    def getlist(self, option, section=USE_DEFAULT_SECTION) -> List[str]:
        """
        get a colon-separated value as a list, without the empty items
        """
        items = (item.strip() for item in self.getstr(option, section).split(':'))
        return [item for item in items if item]

    def silent_set(self, option: str, value: ConfigValue,
                   section=USE_DEFAULT_SECTION) -> bool:
        """
        Set a value and save it, return True on success and False on failure.
        The new value is used even if it could not be saved.
        """
        if section == USE_DEFAULT_SECTION:
            section = self.default_section
        if not self.has_section(section):
            self.add_section(section)
        self.configparser.set(section, option, str(value))
        return self.write_in_file(section, option, str(value))

    def write_in_file(self, section: str, option: str,
                      value: ConfigValue) -> bool:
        """
        Replace the line of the option in its section, or add it at the end
        of the section (and the section at the end of the file) if missing.
        """
        result = self._parse_file()
        if result is None:
            return False
        sections, lines = result
        new_line = '%s = %s' % (option, value)

        if section not in sections:
            lines.append('[%s]' % section)
            lines.append(new_line)
        else:
            begin, end = sections[section]
            pos = find_line(lines, begin, end, option)
            if pos == -1:
                lines.insert(end, new_line)
            else:
                lines[pos] = new_line

        return self._write_file(lines)

    def _write_file(self, lines: List[str]) -> bool:
        """
        Write the config file, write to a temporary file
        before copying it to the final destination
        """
        try:
            filename = self.file_name.parent / (
                '.%s.tmp' % self.file_name.name)
            with os.fdopen(
                    os.open(
                        str(filename),
                        os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
                        0o600,
                    ),
                    'w',
                    encoding='utf-8') as fd:
                for line in lines:
                    fd.write('%s\n' % line)
            filename.replace(self.file_name)
        except OSError:
            log.error('Unable to save the config file.', exc_info=True)
            return False
        return True

    def _parse_file(self) -> Optional[Tuple[Dict[str, List[int]], List[str]]]:
        """
        Return the lines of the file, and the [start, end[ line range of
        each section. The second copy of a duplicate section is not
        indexed.

        Returns None if reading fails
        """
        if file_ok(self.file_name):
            try:
                with self.file_name.open('r', encoding='utf-8') as df:
                    lines: List[str] = [line.strip() for line in df]
            except OSError:
                log.error(
                    'Unable to read the config file %s',
                    self.file_name,
                    exc_info=True)
                return None
        else:
            lines = []

        sections: Dict[str, List[int]] = {}
        current: Optional[str] = None
        for number, line in enumerate(lines):
            if not line.startswith('['):
                continue
            if current is not None:
                sections[current][1] = number
            name = line[1:-1]
            if name in sections:
                log.error('Duplicate section [%s] in the config file, '
                          'only the first one is updated', name)
                current = None
            else:
                sections[name] = [number, number]
                current = name
        if current is not None:
            sections[current][1] = len(lines)

        return (sections, lines)


def find_line(lines: List[str], start: int, end: int, option: str) -> int:
    """
    Get the number of the line containing the option in the
    relevant part of the config file.

    Returns -1 if the option isn’t found
    """
    current = start
    for line in lines[start:end]:
        if (line.startswith('%s ' % option)
                or line.startswith('%s=' % option)):
            return current
        current += 1
    return -1


def file_ok(filepath: Path) -> bool:
    """
    Returns True if the file exists and is readable and writeable,
    False otherwise.
    """
    val = filepath.exists()
    val &= os.access(str(filepath), os.R_OK | os.W_OK)
    return bool(val)


def check_config(rules: Iterable[Any], enabled: Dict[str, bool]):
    """
    Check the config file and print results, then the state of every rule
    """
    result: Dict[str, list] = {'missing': [], 'changed': []}
    for option in DEFAULT_CONFIG['Clipclean']:
        value = config.get(option)
        if value != DEFAULT_CONFIG['Clipclean'][option]:
            result['changed'].append((option, value,
                                      DEFAULT_CONFIG['Clipclean'][option]))
        elif not config.has_option('Clipclean', option):
            result['missing'].append(option)

    result['changed'].sort(key=lambda x: x[0])
    result['missing'].sort()
    if result['changed']:
        print(
            '\033[1mOptions changed from the default configuration:\033[0m\n')
        for option, new_value, default in result['changed']:
            print(
                '    \033[1m%s\033[0m = \033[33m%s\033[0m (default: \033[32m%s\033[0m)'
                % (option, new_value, default))

    if result['missing']:
        print('\n\033[1mMissing options:\033[0m (the defaults are used)\n')
        for option in result['missing']:
            print('    \033[31m%s\033[0m' % option)

    print('\n\033[1mRules:\033[0m\n')
    for rule in rules:
        state = '\033[32mon\033[0m' if enabled[rule.id] else '\033[31moff\033[0m'
        scope = ', '.join(sorted(rule.hosts)) or 'all hosts'
        print('    \033[1m%s\033[0m (%s) [%s]: %s' % (rule.id, rule.name, state,
                                                     scope))


def create_global_config(filename):
    "Create the global config object, or crash"
    try:
        global config
        config = Config(filename, DEFAULT_CONFIG)
    except Exception:
        import traceback
        sys.stderr.write('Clipclean was unable to read or'
                         ' parse the config file.\n')
        traceback.print_exc(limit=0)
        sys.exit(1)


def setup_logging(debug_file=''):
    "Change the logging config according to the cmdline options and config"
    global LOG_DIR
    LOG_DIR = config.get('log_dir')
    LOG_DIR = Path(LOG_DIR).expanduser() if LOG_DIR else xdg.DATA_HOME / 'logs'
    from copy import deepcopy
    logging_config = deepcopy(LOGGING_CONFIG)
    if config.get('log_errors'):
        try:
            LOG_DIR.mkdir(parents=True, exist_ok=True)
        except OSError:
            # We can’t really log any error here, because logging isn’t setup yet.
            pass
        else:
            logging_config['root']['handlers'].append('error')
            logging_config['handlers']['error'] = {
                'level': 'ERROR',
                'class': 'logging.FileHandler',
                'filename': str(LOG_DIR / 'errors.log'),
                'formatter': 'simple',
            }
            logging.disable(logging.WARNING)

    if debug_file:
        logging_config['root']['handlers'].append('debug')
        logging_config['handlers']['debug'] = {
            'level': 'DEBUG',
            'class': 'logging.FileHandler',
            'filename': debug_file,
            'formatter': 'simple',
        }
        logging.disable(logging.NOTSET)

    if logging_config['root']['handlers']:
        logging.config.dictConfig(logging_config)
    else:
        logging.disable(logging.ERROR)
        logging.basicConfig(level=logging.CRITICAL)


LOGGING_CONFIG = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s %(levelname)s:%(module)s:%(message)s'
        }
    },
    'handlers': {},
    'root': {
        'handlers': [],
        'propagate': True,
        'level': 'DEBUG',
    }
}

# Global config object. Is setup for real in clipclean.py
config = Config(Path('/dev/null'))

# the global log dir
LOG_DIR = Path()
