from __future__ import annotations  # allows forward references in type hints
from enum import Enum
from pathlib import Path
import yaml
from dotenv import load_dotenv
import os
import typing


class YAMLParseException(Exception):
    """Raised to signal that there was an error parsing a YAML file"""


class ConfigScanFoundError(Exception):
    def __init__(self, log_messages: LogMessages) -> None:
        self.log_messages: LogMessages = log_messages
        super().__init__(log_messages)


class ConfigFileNotFoundError(Exception):
    def __init__(self, error_details: str) -> None:
        self.error_details: str = error_details
        super().__init__(error_details)


class EventsFileException(Exception):
    def __init__(self, log_messages: LogMessages) -> None:
        self.log_messages: LogMessages = log_messages
        super().__init__(log_messages)


class UnknownException(Exception):
    def __init__(self, log_messages: LogMessages, error_message: str) -> None:
        self.log_messages: LogMessages = log_messages
        self.error_message = error_message
        super().__init__(log_messages, error_message)


class LogLevels(Enum):
    UNKNOWN = (0, '? Unknown')
    INFO = (1, 'ℹ️ Info')
    DEBUG = (2, '🐞 Debug')
    WARNING = (3, '⚠️ Warnings')
    ERROR = (4, '⚠️ Errors')

    @property
    def key(self) -> int:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]

    @classmethod
    def from_key(cls, key: int) -> LogLevels:
        """Return the LogLevels member that matches the key"""
        for level in cls:
            if level.key == key:
                return level
        return LogLevels.UNKNOWN


class LogMessage:
    def __init__(self, message: str, level: int) -> None:
        self.message: str = message
        self.level: int = level

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return self.message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LogMessage):
            return NotImplemented
        return self.message == other.message and self.level == other.level

    def is_error(self) -> bool:
        if self.level == LogLevels.ERROR.key:
            return True
        return False


class LogMessages:
    def __init__(self, log_messages: list[LogMessage] | None = None) -> None:
        if log_messages is None:
            self.log_messages: list[LogMessage] = []
        else:
            self.log_messages = log_messages

    def __add__(self, other: LogMessages) -> LogMessages:
        new_log: LogMessages = LogMessages()
        new_log.log_messages = self.log_messages + other.log_messages
        return new_log

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LogMessages):
            return NotImplemented
        return self.log_messages == other.log_messages

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, LogMessages):
            return NotImplemented
        return self.log_messages != other.log_messages

    def __len__(self) -> int:
        return len(self.log_messages)

    def add_log_message(self, message: LogMessage) -> None:
        self.log_messages.append(message)

    def print_log_messages(self, heading: str) -> None:
        if not self.log_messages:
            return

        print(heading, end='')
        log_messages_by_level: dict[int, list[LogMessage]] = {}
        for message in self.log_messages:
            if message.level in log_messages_by_level.keys():
                log_messages_by_level[message.level].append(message)
            else:
                log_messages_by_level[message.level] = [message]

        for level in sorted(log_messages_by_level.keys()):
            if log_messages_by_level[level]:
                print(f'\n{LogLevels.from_key(level).label}:')
                for message in log_messages_by_level[level]:
                    print(message)

    def contains_error(self) -> bool:
        for message in self.log_messages:
            if message.is_error():
                return True
        return False

    def is_empty(self) -> bool:
        if self.log_messages:
            return False
        return True


BORDER_STYLES: tuple[str, ...] = ('ascii', 'box')


class CalendarStandardFallBackConfig:
    def __init__(self) -> None:
        self.show_surrounding_month_events: bool = False

        self.weekday_labels: list[str] = ['Mo', 'Tu', 'We', 'Th', 'Fr', 'Sa', 'Su']

        self.month_names: dict[int, str] = {
            1: 'January',
            2: 'February',
            3: 'March',
            4: 'April',
            5: 'May',
            6: 'June',
            7: 'July',
            8: 'August',
            9: 'September',
            10: 'October',
            11: 'November',
            12: 'December',
        }

        self.border_style: str = 'ascii'
        self.events_file: str = 'events.yaml'


class CalendarConfig:
    def __init__(
            self,
            log_messages: LogMessages | None = None,
            show_surrounding_month_events: bool | None = None,
            weekday_labels: list[str] | None = None,
            month_names: dict[int, str] | None = None,
            border_style: str | None = None,
            events_file: str | None = None,
            **kwargs: typing.Any
    ) -> None:
        if log_messages is None:
            log_messages = LogMessages()

        fallback: CalendarStandardFallBackConfig = CalendarStandardFallBackConfig()

        self.show_surrounding_month_events: bool = fallback.show_surrounding_month_events
        self.weekday_labels: list[str] = fallback.weekday_labels
        self.month_names: dict[int, str] = fallback.month_names
        self.border_style: str = fallback.border_style
        self.events_file: str = fallback.events_file

        if show_surrounding_month_events is not None:
            if not isinstance(show_surrounding_month_events, bool):
                log_messages.add_log_message(LogMessage(
                    f'Configuration for show_surrounding_month_events is invalid (not True / False)',
                    LogLevels.ERROR.key
                ))
            else:
                self.show_surrounding_month_events = show_surrounding_month_events
        else:
            log_messages.add_log_message(LogMessage(
                f'Configuration for show_surrounding_month_events is missing (base.yaml,'
                f' falling back to standard config)',
                LogLevels.WARNING.key
            ))

        if weekday_labels is not None:
            if not isinstance(weekday_labels, list) or not all(isinstance(label, str) for label in weekday_labels):
                log_messages.add_log_message(LogMessage(
                    f'Configuration for weekday_labels is invalid (not a list of strings)',
                    LogLevels.ERROR.key
                ))
            elif len(weekday_labels) != 7:
                log_messages.add_log_message(LogMessage(
                    f'Configuration for weekday_labels has wrong length ({len(weekday_labels)}, not 7)',
                    LogLevels.ERROR.key
                ))
            else:
                self.weekday_labels = list(weekday_labels)
        else:
            log_messages.add_log_message(LogMessage(
                f'Configuration for weekday_labels is missing (base.yaml,'
                f' falling back to standard config)',
                LogLevels.WARNING.key
            ))

        if month_names is not None:
            if not isinstance(month_names, dict):
                log_messages.add_log_message(LogMessage(
                    f'Configuration for month_names is invalid (not a mapping)',
                    LogLevels.ERROR.key
                ))
            else:
                try:
                    parsed_names: dict[int, str] = {int(k): str(v) for k, v in month_names.items()}
                except (ValueError, TypeError) as e:
                    log_messages.add_log_message(LogMessage(
                        f'Configuration for month_names is invalid for {e}',
                        LogLevels.ERROR.key
                    ))
                else:
                    if sorted(parsed_names.keys()) != list(range(1, 13)):
                        log_messages.add_log_message(LogMessage(
                            f'Configuration for month_names must name exactly the months 1 to 12',
                            LogLevels.ERROR.key
                        ))
                    else:
                        self.month_names = parsed_names
        else:
            log_messages.add_log_message(LogMessage(
                f'Configuration for month_names is missing (base.yaml,'
                f' falling back to standard config)',
                LogLevels.WARNING.key
            ))

        if border_style is not None:
            if border_style not in BORDER_STYLES:
                log_messages.add_log_message(LogMessage(
                    f'Configuration for border_style is invalid (not one of {", ".join(BORDER_STYLES)})',
                    LogLevels.ERROR.key
                ))
            else:
                self.border_style = border_style
        else:
            log_messages.add_log_message(LogMessage(
                f'Configuration for border_style is missing (base.yaml,'
                f' falling back to standard config)',
                LogLevels.WARNING.key
            ))

        if events_file is not None:
            if not isinstance(events_file, str) or not events_file.strip():
                log_messages.add_log_message(LogMessage(
                    f'Configuration for events_file is invalid (not a file name)',
                    LogLevels.ERROR.key
                ))
            else:
                self.events_file = events_file
        else:
            log_messages.add_log_message(LogMessage(
                f'Configuration for events_file is missing (base.yaml,'
                f' falling back to standard config)',
                LogLevels.WARNING.key
            ))

        for key, value in kwargs.items():
            log_messages.add_log_message(LogMessage(
                f'Configuration for key "{key}" is not expected (base.yaml)',
                LogLevels.WARNING.key
            ))


class ConfigLoader:
    def __init__(self, config_dir: Path | None = None) -> None:
        if config_dir is None:
            env_dir = os.getenv('TCALENDAR_CONFIG_DIR')
            config_dir = Path(env_dir) if env_dir else Path.home() / '.config' / 'tcalendar'
        self.CONFIG_DIR = config_dir
        load_dotenv(self.CONFIG_DIR / 'calendar.env')

    def reload_env(self) -> None:
        load_dotenv(self.CONFIG_DIR / 'calendar.env', override=True)

    @staticmethod
    def get_setting(name: str, default: typing.Any | None = None) -> str | None:
        return os.getenv(name, default)

    @staticmethod
    def load_yaml(path: Path) -> dict[str, typing.Any]:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    def load_base_config(self, log_messages: LogMessages) -> CalendarConfig:
        base_path = self.CONFIG_DIR / 'base.yaml'
        if not base_path.exists():
            raise ConfigFileNotFoundError(f'Base config "{base_path}" not found')
        try:
            pure_yaml: dict[str, typing.Any] = self.load_yaml(base_path)
        except yaml.YAMLError:
            raise YAMLParseException(f'Base config "{base_path}" not valid YAML')

        if not isinstance(pure_yaml, dict):
            raise YAMLParseException(f'Base config "{base_path}" is not a mapping')

        return CalendarConfig(log_messages=log_messages, **pure_yaml)

    def events_path(self, config: CalendarConfig) -> Path:
        events_file = self.get_setting('TCALENDAR_EVENTS_FILE') or config.events_file
        path = Path(events_file).expanduser()
        if not path.is_absolute():
            path = self.CONFIG_DIR / path
        return path


class ConfigScanner:
    def __init__(self, config_loader: ConfigLoader) -> None:
        self.config_loader = config_loader

    def scan_config(self) -> LogMessages | typing.Literal[True]:
        """Scan config, either returns log messages or 'True' representing that no errors were found"""
        final_log: LogMessages = LogMessages()

        current_log: LogMessages = LogMessages()
        try:
            self.config_loader.load_base_config(current_log)
            if current_log.contains_error():
                final_log += current_log
        except YAMLParseException as e:
            final_log += LogMessages([LogMessage(str(e), LogLevels.ERROR.key)])

        if final_log.contains_error():
            return final_log
        return True
