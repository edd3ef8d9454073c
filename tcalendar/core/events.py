from __future__ import annotations  # allows forward references in type hints
from dataclasses import dataclass
from pathlib import Path
import typing
import yaml

from tcalendar.core.base import (
    ConfigFileNotFoundError,
    YAMLParseException,
    LogMessages,
    LogMessage,
    LogLevels
)


@dataclass(frozen=True)
class Date:
    year: int
    month: int
    day: int


@dataclass(frozen=True)
class Time:
    hour: int
    minute: int


@dataclass(frozen=True)
class Event:
    date: Date
    time: Time
    description: str


def _int_parts(value: typing.Any, separator: str, keys: tuple[str, ...]) -> list[int]:
    if isinstance(value, dict):
        return [int(value[key]) for key in keys]
    if isinstance(value, str):
        parts = value.strip().split(separator)
        if len(parts) != len(keys):
            raise ValueError(f'expected {len(keys)} parts separated by "{separator}", got "{value}"')
        return [int(part) for part in parts]
    raise ValueError(f'unsupported value "{value}"')


def parse_date(value: typing.Any) -> Date:
    # yaml.safe_load already turns unquoted 2023-02-15 into a datetime.date
    if hasattr(value, 'year') and hasattr(value, 'month') and hasattr(value, 'day'):
        return Date(int(value.year), int(value.month), int(value.day))
    year, month, day = _int_parts(value, '-', ('year', 'month', 'day'))
    return Date(year, month, day)


def parse_time(value: typing.Any) -> Time:
    if value is None:
        return Time(0, 0)
    if isinstance(value, int):
        # YAML 1.1 reads unquoted 14:30 as the base-60 integer 870
        if not 0 <= value < 24 * 60:
            raise ValueError(f'time {value} is not HH:MM')
        return Time(value // 60, value % 60)
    hour, minute = _int_parts(value, ':', ('hour', 'minute'))
    return Time(hour, minute)


def parse_event(entry: typing.Any) -> Event:
    if not isinstance(entry, dict):
        raise ValueError('entry is not a mapping')
    if 'date' not in entry:
        raise KeyError('date')
    description = entry.get('description')
    if not isinstance(description, str):
        raise ValueError('description is missing or not text')
    return Event(parse_date(entry['date']), parse_time(entry.get('time')), description)


def load_events(path: Path, log_messages: LogMessages) -> list[Event]:
    if not path.exists():
        raise ConfigFileNotFoundError(f'Events file "{path}" not found')
    try:
        with open(path, 'r', encoding='utf-8') as f:
            pure_yaml: typing.Any = yaml.safe_load(f) or {}
    except yaml.YAMLError:
        raise YAMLParseException(f'Events file "{path}" not valid YAML')

    if not isinstance(pure_yaml, dict):
        raise YAMLParseException(f'Events file "{path}" must contain an "events" list')

    # "events:" with no entries loads as None
    entries: typing.Any = pure_yaml.get('events') or []
    if not isinstance(entries, list):
        raise YAMLParseException(f'Events file "{path}" must contain an "events" list')

    events: list[Event] = []
    for index, entry in enumerate(entries):
        try:
            events.append(parse_event(entry))
        except KeyError as e:
            log_messages.add_log_message(LogMessage(
                f'Event #{index} is missing {e} ("{path.name}")',
                LogLevels.ERROR.key
            ))
        except (ValueError, TypeError) as e:
            log_messages.add_log_message(LogMessage(
                f'Event #{index} is invalid: {e} ("{path.name}")',
                LogLevels.ERROR.key
            ))

    if not events:
        log_messages.add_log_message(LogMessage(
            f'No events loaded from "{path.name}"',
            LogLevels.INFO.key
        ))

    return events
