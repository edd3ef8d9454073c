import tempfile
import unittest
from pathlib import Path

from tcalendar.core.base import ConfigFileNotFoundError, YAMLParseException, LogMessages
from tcalendar.core.events import Date, Time, Event, load_events, parse_time

EVENTS_YAML = """
events:
  - date: '2023-02-15'
    time: '09:05'
    description: 'Quoted'
  - date: {year: 2023, month: 2, day: 16}
    time: {hour: 8, minute: 0}
    description: 'Mapping'
  - date: 2023-02-17
    time: 14:30
    description: 'Unquoted'
  - date: '2023-02-31'
    description: 'No time'
  - time: '10:00'
    description: 'No date'
  - date: '2023-02'
    description: 'Short date'
  - date: '2023-02-18'
"""


class EventsFileTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / 'events.yaml'

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_load_events(self) -> None:
        self.path.write_text(EVENTS_YAML, encoding='utf-8')
        log = LogMessages()
        events = load_events(self.path, log)

        self.assertEqual(events, [
            Event(Date(2023, 2, 15), Time(9, 5), 'Quoted'),
            Event(Date(2023, 2, 16), Time(8, 0), 'Mapping'),
            Event(Date(2023, 2, 17), Time(14, 30), 'Unquoted'),
            Event(Date(2023, 2, 31), Time(0, 0), 'No time'),
        ])
        # Missing date, short date, missing description
        self.assertTrue(log.contains_error())
        self.assertEqual(len([m for m in log.log_messages if m.is_error()]), 3)

    def test_missing_file(self) -> None:
        with self.assertRaises(ConfigFileNotFoundError):
            load_events(self.path, LogMessages())

    def test_events_must_be_a_list(self) -> None:
        self.path.write_text('events: nope\n', encoding='utf-8')
        with self.assertRaises(YAMLParseException):
            load_events(self.path, LogMessages())

    def test_empty_file_has_no_events(self) -> None:
        self.path.write_text('', encoding='utf-8')
        log = LogMessages()
        self.assertEqual(load_events(self.path, log), [])
        self.assertFalse(log.contains_error())

    def test_events_are_immutable(self) -> None:
        event = Event(Date(2023, 2, 15), Time(9, 0), 'Meeting')
        with self.assertRaises(AttributeError):
            event.description = 'Changed'  # type: ignore[misc]

    def test_events_key_without_entries(self) -> None:
        self.path.write_text('events:\n', encoding='utf-8')
        log = LogMessages()
        self.assertEqual(load_events(self.path, log), [])
        self.assertFalse(log.contains_error())

    def test_parse_time_default(self) -> None:
        self.assertEqual(parse_time(None), Time(0, 0))

    def test_integer_time_must_be_within_a_day(self) -> None:
        self.assertEqual(parse_time(870), Time(14, 30))
        with self.assertRaises(ValueError):
            parse_time(24 * 60)
        with self.assertRaises(ValueError):
            parse_time(-1)

    def test_out_of_range_integer_time_is_logged(self) -> None:
        self.path.write_text(
            "events:\n  - {date: '2023-02-15', time: 930, description: 'Ambiguous'}\n",
            encoding='utf-8'
        )
        log = LogMessages()
        self.assertEqual(load_events(self.path, log), [])
        self.assertTrue(log.contains_error())


if __name__ == '__main__':
    unittest.main()
