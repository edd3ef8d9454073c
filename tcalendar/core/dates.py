import calendar


class DateUtility:
    """Day-of-week and month-length lookups backed by the `calendar` module.

    Weekday indexes are 0 for Monday through 6 for Sunday, the same order as
    the default weekday header. Errors from `calendar` for malformed input
    (e.g. month 13) are not caught.
    """

    @staticmethod
    def day_of_week(year: int, month: int, day: int) -> int:
        return calendar.weekday(year, month, day)

    @staticmethod
    def days_in_month(year: int, month: int) -> int:
        return calendar.monthrange(year, month)[1]


date_utility: DateUtility = DateUtility()
