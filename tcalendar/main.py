import datetime
from pathlib import Path

import tcalendar.core.base as base
import tcalendar.core.events as events_module
import tcalendar.core.page as page


def load_page_events(
        config_loader: base.ConfigLoader,
        config: base.CalendarConfig,
        log_messages: base.LogMessages,
        events_file: Path | None = None
) -> list[events_module.Event]:
    if events_file is None:
        path = config_loader.events_path(config)
        if not path.exists():
            log_messages.add_log_message(base.LogMessage(
                f'Events file "{path}" not found, rendering without events',
                base.LogLevels.WARNING.key
            ))
            return []
    else:
        path = events_file

    current_log: base.LogMessages = base.LogMessages()
    loaded = events_module.load_events(path, current_log)
    for message in current_log.log_messages:
        log_messages.add_log_message(message)
    if current_log.contains_error():
        raise base.EventsFileException(current_log)
    return loaded


def render(
        year: int,
        month: int,
        config_loader: base.ConfigLoader,
        log_messages: base.LogMessages,
        events_file: Path | None = None,
        surrounding: bool | None = None
) -> str:
    # Scan configs
    config_scanner: base.ConfigScanner = base.ConfigScanner(config_loader)
    config_scan_results: base.LogMessages | bool = config_scanner.scan_config()

    if config_scan_results is not True:
        raise base.ConfigScanFoundError(config_scan_results)  # type: ignore[arg-type]

    config: base.CalendarConfig = config_loader.load_base_config(log_messages)
    if surrounding is not None:
        config.show_surrounding_month_events = surrounding

    page_events = load_page_events(config_loader, config, log_messages, events_file)

    return str(page.display_month(year, month, page_events, config))


def main_entry_point(
        year: int | None = None,
        month: int | None = None,
        events_file: Path | None = None,
        surrounding: bool | None = None,
        config_dir: Path | None = None,
        verbose: bool = False
) -> int:
    today = datetime.date.today()
    year = today.year if year is None else year
    month = today.month if month is None else month

    # Logs (e.g. Warnings)
    log_messages: base.LogMessages = base.LogMessages()

    config_loader: base.ConfigLoader = base.ConfigLoader(config_dir)
    config_loader.reload_env()  # needed to pick up calendar.env changes

    try:
        output = render(year, month, config_loader, log_messages, events_file, surrounding)
    except base.ConfigScanFoundError as e:
        e.log_messages.print_log_messages(heading='Config errors & warnings (found by ConfigScanner):\n')
        return 1
    except base.ConfigFileNotFoundError as e:
        print(f'⚠️ Config File Not Found Error: {e}')
        print(f'\nPerhaps you haven\'t initialized the configuration. Please run: tcalendar init')
        return 1
    except base.YAMLParseException as e:
        print(f'⚠️ YAML Parse Error: {e}')
        return 1
    except base.EventsFileException as e:
        e.log_messages.print_log_messages(heading='Events file errors & warnings:\n')
        return 1
    except Exception as e:
        if not log_messages.is_empty():
            log_messages.print_log_messages(heading='Config errors & warnings:\n')
            print('-> which results in:\n')
        print(
            f'⚠️ Unknown errors:\n'
            f'{e}\n'
        )
        raise base.UnknownException(log_messages, str(e)) from e

    print(output)
    if verbose:
        log_messages.print_log_messages(heading='\nConfig warnings & info:\n')
    return 0


if __name__ == '__main__':
    main_entry_point()
