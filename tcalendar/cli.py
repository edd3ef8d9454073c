import argparse
import sys
import shutil
from pathlib import Path
from . import main as app_main
from .core.base import ConfigLoader

from importlib.resources import files, as_file


def init_command(args: argparse.Namespace) -> int:
    """
    Handles the 'tcalendar init' subcommand.
    """

    # 1. Define source and destination paths
    try:
        # 'tcalendar.config' maps to the 'tcalendar/config/' directory
        source_config_dir_traversable = files('tcalendar.config')
    except ModuleNotFoundError:
        print('Error: Could not find the package config files. Is \'tcalendar\' installed correctly?', file=sys.stderr)
        return 1

    dest_config_dir: Path = args.config_dir if args.config_dir else ConfigLoader().CONFIG_DIR

    # 2. Create destination directory
    try:
        dest_config_dir.mkdir(parents=True, exist_ok=True)
        print(f'Created config directory: {dest_config_dir}')
    except OSError as e:
        print(f'Error: Could not create directory {dest_config_dir}. {e}', file=sys.stderr)
        return 1

    # 3. Copy files
    # We must use 'as_file' to get a concrete Path on the filesystem
    with as_file(source_config_dir_traversable) as source_config_path:

        print(f'Copying YAML & ENV files from package config to {dest_config_dir}...')

        yaml_files = list(source_config_path.rglob('*.yaml'))
        yaml_files.extend(list(source_config_path.rglob('*.yml')))
        env_files = list(source_config_path.rglob('*.env'))

        if not yaml_files and not env_files:
            print('Warning: No YAML & ENV files found in the package config.', file=sys.stderr)
            return 0

        for source_file in yaml_files + env_files:
            # Recreate the relative path in the destination
            relative_path = source_file.relative_to(source_config_path)
            dest_file = dest_config_dir / relative_path

            dest_file.parent.mkdir(parents=True, exist_ok=True)

            if not dest_file.exists() or args.force:
                try:
                    shutil.copy2(source_file, dest_file)
                    print(f'  Copied: {relative_path}')
                except OSError as e:
                    print(f'  Error copying {relative_path}: {e}', file=sys.stderr)
            else:
                print(f'  Skipped (exists): {relative_path}')

    print('\nInitialization complete.')
    print(f'Your configuration files are in: {dest_config_dir}')
    return 0


def show_command(args: argparse.Namespace) -> int:
    """
    Handles the 'tcalendar show' subcommand (also the default).
    """
    if args.month is not None and not 1 <= args.month <= 12:
        print(f'Error: month must be between 1 and 12, got {args.month}', file=sys.stderr)
        return 2

    return app_main.main_entry_point(
        year=args.year,
        month=args.month,
        events_file=args.events,
        surrounding=args.surrounding,
        config_dir=args.config_dir,
        verbose=args.verbose
    )


def add_config_dir_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('-c', '--config-dir', type=Path, default=None, help='Configuration directory.')


def add_show_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('year', nargs='?', type=int, default=None, help='Calendar year (default: this year).')
    parser.add_argument('month', nargs='?', type=int, default=None, help='Calendar month 1-12 (default: this month).')
    parser.add_argument('-e', '--events', type=Path, default=None, help='YAML file to read events from.')
    surrounding = parser.add_mutually_exclusive_group()
    surrounding.add_argument(
        '--surrounding', dest='surrounding', action='store_true', default=None,
        help='Draw events of the previous / next month into the leading and trailing cells.'
    )
    surrounding.add_argument(
        '--no-surrounding', dest='surrounding', action='store_false',
        help='Only draw day numbers in the leading and trailing cells.'
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Print config warnings after the page.')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Terminal month calendar.')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    init_parser = subparsers.add_parser('init', help='Initialize user configuration files.')
    init_parser.add_argument(
        '-f', '--force',
        action='store_true',
        help='Overwrite existing configuration files.'
    )
    add_config_dir_argument(init_parser)
    init_parser.set_defaults(func=init_command)

    show_parser = subparsers.add_parser('show', help='Print a calendar page.')
    add_show_arguments(show_parser)
    add_config_dir_argument(show_parser)
    show_parser.set_defaults(func=show_command)

    return parser


COMMANDS: tuple[str, ...] = ('init', 'show')
VALUE_OPTIONS: tuple[str, ...] = ('-c', '--config-dir', '-e', '--events')


def first_positional_index(argv: list[str]) -> int | None:
    skip_value = False
    for index, arg in enumerate(argv):
        if skip_value:
            skip_value = False
            continue
        if arg in VALUE_OPTIONS:
            skip_value = True
            continue
        if arg.startswith('-'):
            continue
        return index
    return None


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the 'tcalendar' command.
    """
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()

    index = first_positional_index(argv)
    if index is not None and argv[index] in COMMANDS:
        # Options given before the command belong to the command
        argv = [argv[index]] + argv[:index] + argv[index + 1:]
    elif index is not None or not any(arg in ('-h', '--help') for arg in argv):
        # 'tcalendar 2023 2' is short for 'tcalendar show 2023 2'
        argv = ['show'] + argv

    args = parser.parse_args(argv)

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print('\nExiting.')
        return 0


if __name__ == '__main__':
    sys.exit(main())
