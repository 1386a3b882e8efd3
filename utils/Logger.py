#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from colorama import init, Fore, Style
from datetime import datetime
from enum import Enum, IntEnum
from pathlib import Path

from utils.ConfigLoader import ConfigLoader, PROJECT_ROOT

init()

class DebugColorLevel(Enum):
    SUCCESS = Fore.GREEN + Style.BRIGHT
    INFO = Fore.BLUE + Style.BRIGHT
    WARNING = Fore.YELLOW + Style.BRIGHT
    ERROR = Fore.RED + Style.BRIGHT
    DEBUG = Fore.CYAN + Style.BRIGHT


class DebugLevel(IntEnum):
    NONE = 0x00
    SUCCESS = 0x01
    INFO = 0x02
    WARNING = 0x08
    ERROR = 0x10
    DEBUG = 0x20
    ALL = 0xff


class Logger:
    """Unified colored console logger + file logger."""

    @staticmethod
    def _logging_config() -> dict:
        return ConfigLoader.get_config().get('Logging', {})

    @staticmethod
    def _get_logging_mask(levels):
        level_map = {
            'None': DebugLevel.NONE,
            'Success': DebugLevel.SUCCESS,
            'Information': DebugLevel.INFO,
            'Warning': DebugLevel.WARNING,
            'Error': DebugLevel.ERROR,
            'Debug': DebugLevel.DEBUG,
            'All': DebugLevel.ALL
        }

        mask = DebugLevel.NONE
        for level in levels:
            if level in level_map:
                mask |= level_map[level]

        return mask

    @staticmethod
    def _should_log(level: DebugLevel):
        levels = Logger._logging_config().get('logging_levels', 'All').split(', ')
        mask = Logger._get_logging_mask(levels)
        return (mask & level) != 0

    @staticmethod
    def _should_log_file(level: DebugLevel):
        levels = Logger._logging_config().get('logging_file_levels', 'None').split(', ')
        mask = Logger._get_logging_mask(levels)
        return (mask & level) != 0

    @staticmethod
    def _log_path() -> Path:
        cfg = Logger._logging_config()
        log_dir = Path(cfg.get('log_dir', 'logs'))
        if not log_dir.is_absolute():
            log_dir = PROJECT_ROOT / log_dir
        return log_dir / cfg.get('log_file', 'srp.log')

    @staticmethod
    def _colorize(label, color, msg):
        date = datetime.now().strftime(Logger._logging_config().get('date_format', ''))
        if label:
            return f"{color.value}{label}{Style.RESET_ALL}{date} {msg}"
        return msg

    @staticmethod
    def add_to_log(msg, level_tag):
        date = datetime.now().strftime(Logger._logging_config().get('date_format', ''))

        if level_tag:
            line = f"[{level_tag}]{date} {msg}"
        else:
            line = msg

        path = Logger._log_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding='utf-8', errors='replace') as log:
            log.write(line + "\n")

    @staticmethod
    def reset_log():
        path = Logger._log_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        open(path, "w").close()

    # ===================================================================
    # Console + File logging methods
    # ===================================================================

    @staticmethod
    def debug(msg):
        if Logger._should_log(DebugLevel.DEBUG):
            print(Logger._colorize("[DEBUG]", DebugColorLevel.DEBUG, msg))
        if Logger._should_log_file(DebugLevel.DEBUG):
            Logger.add_to_log(msg, "DEBUG")

    @staticmethod
    def info(msg):
        if Logger._should_log(DebugLevel.INFO):
            print(Logger._colorize("[INFO]", DebugColorLevel.INFO, msg))
        if Logger._should_log_file(DebugLevel.INFO):
            Logger.add_to_log(msg, "INFO")

    @staticmethod
    def warning(msg):
        if Logger._should_log(DebugLevel.WARNING):
            print(Logger._colorize("[WARNING]", DebugColorLevel.WARNING, msg))
        if Logger._should_log_file(DebugLevel.WARNING):
            Logger.add_to_log(msg, "WARNING")

    @staticmethod
    def error(msg):
        if Logger._should_log(DebugLevel.ERROR):
            print(Logger._colorize("[ERROR]", DebugColorLevel.ERROR, msg))
        if Logger._should_log_file(DebugLevel.ERROR):
            Logger.add_to_log(msg, "ERROR")

    @staticmethod
    def success(msg):
        if Logger._should_log(DebugLevel.SUCCESS):
            print(Logger._colorize("[SUCCESS]", DebugColorLevel.SUCCESS, msg))
        if Logger._should_log_file(DebugLevel.SUCCESS):
            Logger.add_to_log(msg, "SUCCESS")
