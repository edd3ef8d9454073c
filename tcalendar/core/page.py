"""Calendar page synthesizer.

Builds a fixed 6x7 month grid in the style of a desktop calendar widget:
the target month plus the tail of the previous month and the head of the
next month, with events stacked under their day number.
"""
from __future__ import annotations  # allows forward references in type hints
import typing

from tcalendar.core.base import CalendarConfig
from tcalendar.core.blocks import BlockComposer, TextBlockComposer
from tcalendar.core.dates import DateUtility, date_utility as default_date_utility
from tcalendar.core.events import Event

DAYS_IN_WEEK: int = 7
WEEKS_IN_CALENDAR: int = 6
FAILURE_LABEL: str = 'Failure'


class Spans(typing.NamedTuple):
    leading: range
    trailing: range


def previous_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    if month == 12:
        return year + 1, 1
    return year, month + 1


def resolve_spans(
        year: int,
        month: int,
        first_weekday: int,
        days_in_month: int,
        days_in_previous_month: int
) -> Spans:
    """Day ranges borrowed from the neighbouring months to fill the grid.

    `leading` is the tail of the previous month that fills the first row,
    `trailing` the head of the next month that fills the last one.
    """
    leading_start = days_in_previous_month - first_weekday + 1
    trailing_end = DAYS_IN_WEEK * WEEKS_IN_CALENDAR - days_in_month - first_weekday
    return Spans(
        leading=range(leading_start, days_in_previous_month + 1),
        trailing=range(1, trailing_end + 1)
    )


def minute_of_day(event: Event) -> int:
    return event.time.hour * 60 + event.time.minute


def chronological_key(event: Event) -> tuple[int, int, int, int]:
    return event.date.year, event.date.month, event.date.day, minute_of_day(event)


def select_and_group(
        year: int,
        month: int,
        low_day: int,
        high_day: int,
        events: typing.Iterable[Event]
) -> dict[int, list[Event]]:
    relevant: list[Event] = [
        event for event in events
        if event.date.year == year and event.date.month == month and low_day <= event.date.day <= high_day
    ]

    relevant.sort(key=chronological_key)

    # Grouping keeps the time order within each day
    grouped: dict[int, list[Event]] = {}
    for event in relevant:
        grouped.setdefault(event.date.day, []).append(event)
    return grouped


def render_empty_day(day: int, composer: BlockComposer) -> typing.Any:
    return composer.make_block(str(day))


def render_day(day: int, events_for_day: typing.Sequence[Event], composer: BlockComposer) -> typing.Any:
    if not events_for_day:
        return render_empty_day(day, composer)

    event_blocks = [composer.make_block(event.description) for event in events_for_day]
    combined = event_blocks[0]
    for block in event_blocks[1:]:
        combined = composer.stack_vertical(combined, block)
    return composer.stack_vertical(composer.make_block(str(day)), combined)


def build_month_segment(
        year: int,
        month: int,
        low_day: int,
        high_day: int,
        include_events: bool,
        events: typing.Iterable[Event],
        composer: BlockComposer
) -> list[typing.Any]:
    if not include_events:
        return [render_empty_day(day, composer) for day in range(low_day, high_day + 1)]

    grouped = select_and_group(year, month, low_day, high_day, events)
    return [render_day(day, grouped.get(day, []), composer) for day in range(low_day, high_day + 1)]


def month_title(year: int, month: int, month_names: typing.Mapping[int, str], composer: BlockComposer) -> typing.Any:
    name = composer.make_block(month_names.get(month, FAILURE_LABEL))
    return composer.concat_horizontal(name, composer.make_block(f' {year}'))


def display_month(
        year: int,
        month: int,
        events: typing.Sequence[Event],
        config: CalendarConfig | None = None,
        composer: BlockComposer | None = None,
        date_utility: DateUtility | None = None
) -> typing.Any:
    """Render `month` of `year` as a titled, bordered 6x7 calendar page.

    Events of the neighbouring months are only drawn into the leading and
    trailing cells when `config.show_surrounding_month_events` is set.
    """
    if config is None:
        config = CalendarConfig()
    if composer is None:
        composer = TextBlockComposer(config.border_style)
    if date_utility is None:
        date_utility = default_date_utility

    days_in_current_month = date_utility.days_in_month(year, month)
    this_months_cells = build_month_segment(year, month, 1, days_in_current_month, True, events, composer)

    first_weekday = date_utility.day_of_week(year, month, 1)
    last_year, last_month = previous_month(year, month)
    days_in_last_month = date_utility.days_in_month(last_year, last_month)

    spans = resolve_spans(year, month, first_weekday, days_in_current_month, days_in_last_month)
    include_surrounding = config.show_surrounding_month_events

    last_months_cells = build_month_segment(
        last_year, last_month, spans.leading.start, spans.leading.stop - 1, include_surrounding, events, composer
    )

    following_year, following_month = next_month(year, month)
    next_months_cells = build_month_segment(
        following_year, following_month, spans.trailing.start, spans.trailing.stop - 1, include_surrounding, events,
        composer
    )

    calendar_cells = last_months_cells + this_months_cells + next_months_cells
    header_cells = [composer.make_block(label) for label in config.weekday_labels]

    # Header and day cells share one height
    normalized = composer.normalize_heights(header_cells + calendar_cells)

    rows = [normalized[i:i + DAYS_IN_WEEK] for i in range(0, len(normalized), DAYS_IN_WEEK)]

    title = month_title(year, month, config.month_names, composer)
    return composer.stack_vertical(title, composer.format_as_table(rows))
