import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import datetime, timedelta

from finance_tracker.domain.text import normalize_text

MONTHS: dict[str, int] = {
    "enero": 1, "febrero": 2, "marzo": 3, "abril": 4, "mayo": 5, "junio": 6,
    "julio": 7, "agosto": 8, "septiembre": 9, "setiembre": 9, "octubre": 10,
    "noviembre": 11, "diciembre": 12,
    "ene": 1, "feb": 2, "mar": 3, "abr": 4, "may": 5, "jun": 6,
    "jul": 7, "ago": 8, "sep": 9, "oct": 10, "nov": 11, "dic": 12,
}

_RELATIVE_DAYS = {"ayer": 1, "anteayer": 2, "antier": 2}


@dataclass(frozen=True)
class DateMatch:
    value: datetime
    start: int
    end: int


def _calendar_date(year: int, month: int, day: int, now: datetime, *, roll_back: bool) -> datetime | None:
    try:
        candidate = datetime(year, month, day)
    except ValueError:
        return None
    if roll_back and candidate > now:
        # Past dates only: "15 de julio" in March means last July.
        try:
            candidate = candidate.replace(year=year - 1)
        except ValueError:
            return None
    return candidate


def _day_of_month_name(match: re.Match[str], now: datetime) -> datetime | None:
    month = MONTHS.get(match.group("month"))
    if month is None:
        return None
    return _calendar_date(now.year, month, int(match.group("day")), now, roll_back=True)


def _numeric(match: re.Match[str], now: datetime) -> datetime | None:
    day = int(match.group("day"))
    month = int(match.group("month"))
    raw_year = match.group("year")
    if raw_year is None:
        return _calendar_date(now.year, month, day, now, roll_back=True)
    year = int(raw_year)
    if year < 100:
        year += 2000
    return _calendar_date(year, month, day, now, roll_back=False)


def _month_name_and_day(match: re.Match[str], now: datetime) -> datetime | None:
    month_name = match.group("month_first") or match.group("month_last")
    day = match.group("day_last") or match.group("day_first")
    month = MONTHS.get(month_name)
    if month is None:
        return None
    return _calendar_date(now.year, month, int(day), now, roll_back=True)


def _relative_day(match: re.Match[str], now: datetime) -> datetime | None:
    return now - timedelta(days=_RELATIVE_DAYS[match.group("word")])


def _days_or_weeks_ago(match: re.Match[str], now: datetime) -> datetime | None:
    raw_count = match.group("count")
    count = 1 if raw_count in {"un", "una"} else int(raw_count)
    days = count * 7 if match.group("unit").startswith("semana") else count
    try:
        return now - timedelta(days=days)
    except OverflowError:
        return None


@dataclass(frozen=True)
class DateRule:
    name: str
    pattern: re.Pattern[str]
    resolve: Callable[[re.Match[str], datetime], datetime | None]


# Evaluated in order; within a rule, the first occurrence that resolves wins.
DATE_RULES: tuple[DateRule, ...] = (
    DateRule(
        "day_de_month",
        re.compile(r"(?:(?<!\w)el\s+)?(?<!\d)(?P<day>\d{1,2})\s+de\s+(?P<month>[a-z]+)(?!\w)"),
        _day_of_month_name,
    ),
    DateRule(
        "numeric",
        re.compile(
            r"(?:(?<!\w)el\s+)?(?<![\d.,/-])(?P<day>\d{1,2})[-/](?P<month>\d{1,2})"
            r"(?:[-/](?P<year>\d{4}|\d{2}))?(?![\d.,]\d|\d)"
        ),
        _numeric,
    ),
    DateRule(
        "month_and_day",
        re.compile(
            r"(?:(?<!\w)el\s+)?(?:(?<!\w)(?P<month_first>[a-z]+)\s+(?P<day_last>\d{1,2})(?!\d)"
            r"|(?<!\d)(?P<day_first>\d{1,2})\s+(?P<month_last>[a-z]+)(?!\w))"
        ),
        _month_name_and_day,
    ),
    DateRule(
        "relative_day",
        re.compile(r"(?<!\w)(?P<word>anteayer|antier|ayer)(?!\w)"),
        _relative_day,
    ),
    DateRule(
        "days_or_weeks_ago",
        re.compile(r"(?<!\w)hace\s+(?P<count>\d+|una?)\s+(?P<unit>dias?|semanas?)(?!\w)"),
        _days_or_weeks_ago,
    ),
)


def _iter_matches(pattern: re.Pattern[str], text: str) -> Iterator[re.Match[str]]:
    # Overlapping scan: "pague 50 el 3 de mayo" must still reach "3 de mayo".
    position = 0
    while position <= len(text):
        match = pattern.search(text, position)
        if match is None:
            return
        yield match
        position = match.start() + 1


def find_date(text: str, now: datetime | None = None) -> DateMatch | None:
    """Locate the first recognised date expression in ``text``."""
    now = now or datetime.now()
    normalized = normalize_text(text)
    for rule in DATE_RULES:
        for match in _iter_matches(rule.pattern, normalized):
            value = rule.resolve(match, now)
            if value is not None:
                return DateMatch(value, match.start(), match.end())
    return None


def parse_date(text: str, now: datetime | None = None) -> datetime | None:
    """
    Parse a Spanish date expression relative to ``now``.

    Recognises "15 de julio", "15/07", "julio 15", "ayer" and "hace 2 días".
    Day and month forms never land in the future; they roll back one year.
    Returns ``None`` when nothing matches.
    """
    found = find_date(text, now)
    return found.value if found else None
