import contextlib
import io
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from tcalendar import cli


def run(argv: list[str]) -> tuple[int, str]:
    out = io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(io.StringIO()):
        code = cli.main(argv)
    return code, out.getvalue()


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_dir = Path(self._tmp.name) / 'tcalendar'
        self._env = patch.dict(os.environ)
        self._env.start()
        os.environ.pop('TCALENDAR_EVENTS_FILE', None)

    def tearDown(self) -> None:
        self._env.stop()
        self._tmp.cleanup()

    def test_init_copies_default_config(self) -> None:
        code, output = run(['init', '-c', str(self.config_dir)])
        self.assertEqual(code, 0)
        self.assertTrue((self.config_dir / 'base.yaml').exists())
        self.assertTrue((self.config_dir / 'events.yaml').exists())
        self.assertTrue((self.config_dir / 'calendar.env').exists())
        self.assertIn('Initialization complete.', output)

    def test_init_skips_existing_files_unless_forced(self) -> None:
        run(['init', '-c', str(self.config_dir)])
        (self.config_dir / 'base.yaml').write_text('border_style: box\n', encoding='utf-8')

        _, output = run(['init', '-c', str(self.config_dir)])
        self.assertIn('Skipped (exists): base.yaml', output)
        self.assertEqual((self.config_dir / 'base.yaml').read_text(encoding='utf-8'), 'border_style: box\n')

        run(['init', '-f', '-c', str(self.config_dir)])
        self.assertIn('weekday_labels', (self.config_dir / 'base.yaml').read_text(encoding='utf-8'))

    def test_show_prints_page_with_events(self) -> None:
        run(['init', '-c', str(self.config_dir)])
        code, output = run(['2023', '2', '-c', str(self.config_dir)])
        self.assertEqual(code, 0)
        self.assertTrue(output.startswith('February 2023'))
        self.assertIn('Meeting', output)
        self.assertLess(output.index('Meeting'), output.index('Review'))
        self.assertNotIn('Standup', output)

    def test_show_surrounding_flag(self) -> None:
        run(['init', '-c', str(self.config_dir)])
        code, output = run(['show', '2023', '2', '--surrounding', '-c', str(self.config_dir)])
        self.assertEqual(code, 0)
        self.assertIn('Standup', output)

    def test_show_with_explicit_events_file(self) -> None:
        run(['init', '-c', str(self.config_dir)])
        events_file = Path(self._tmp.name) / 'other.yaml'
        events_file.write_text(
            "events:\n  - {date: '2023-02-03', time: '18:00', description: 'Dinner'}\n",
            encoding='utf-8'
        )
        code, output = run(['2023', '2', '-e', str(events_file), '-c', str(self.config_dir)])
        self.assertEqual(code, 0)
        self.assertIn('Dinner', output)
        self.assertNotIn('Meeting', output)

    def test_show_with_broken_events_file(self) -> None:
        run(['init', '-c', str(self.config_dir)])
        events_file = Path(self._tmp.name) / 'broken.yaml'
        events_file.write_text("events:\n  - {description: 'No date'}\n", encoding='utf-8')
        code, output = run(['2023', '2', '-e', str(events_file), '-c', str(self.config_dir)])
        self.assertEqual(code, 1)
        self.assertIn('Event #0 is missing', output)

    def test_show_without_config(self) -> None:
        code, output = run(['2023', '2', '-c', str(self.config_dir)])
        self.assertEqual(code, 1)
        self.assertIn('tcalendar init', output)

    def test_show_with_invalid_config(self) -> None:
        self.config_dir.mkdir(parents=True)
        (self.config_dir / 'base.yaml').write_text('weekday_labels: [Mo]\n', encoding='utf-8')
        code, output = run(['2023', '2', '-c', str(self.config_dir)])
        self.assertEqual(code, 1)
        self.assertIn('weekday_labels', output)

    def test_options_before_command(self) -> None:
        code, _ = run(['-c', str(self.config_dir), 'init'])
        self.assertEqual(code, 0)
        self.assertTrue((self.config_dir / 'base.yaml').exists())

        code, output = run(['-c', str(self.config_dir), 'show', '2023', '2'])
        self.assertEqual(code, 0)
        self.assertTrue(output.startswith('February 2023'))

    def test_first_positional_index(self) -> None:
        # A config directory called "init" is an option value, not the command
        self.assertEqual(cli.first_positional_index(['-c', 'init', '2023']), 2)
        self.assertEqual(cli.first_positional_index(['-e', 'show', '2023', '2']), 2)
        self.assertEqual(cli.first_positional_index(['--surrounding', 'show']), 1)
        self.assertIsNone(cli.first_positional_index(['-v', '-e', 'events.yaml']))

    def test_show_rejects_invalid_month(self) -> None:
        code, _ = run(['2023', '13', '-c', str(self.config_dir)])
        self.assertEqual(code, 2)


if __name__ == '__main__':
    unittest.main()
