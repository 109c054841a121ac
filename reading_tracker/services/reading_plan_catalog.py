"""Static 365-day reading plan catalog.

The plan reads the whole Bible in a year along two streams. The primary
stream walks the Old Testament (without Psalms and Proverbs); the secondary
stream walks the New Testament followed by Psalms and Proverbs. Each stream
is spread evenly over the year by chapter count.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from reading_tracker.utils.plan_calendar import PLAN_LENGTH_DAYS

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Non-leap year used only to label plan days with a calendar date.
_LABEL_YEAR = 2023

OLD_TESTAMENT: Tuple[Tuple[str, int], ...] = (
    ("Genesis", 50), ("Exodus", 40), ("Leviticus", 27), ("Numbers", 36),
    ("Deuteronomy", 34), ("Joshua", 24), ("Judges", 21), ("Ruth", 4),
    ("1 Samuel", 31), ("2 Samuel", 24), ("1 Kings", 22), ("2 Kings", 25),
    ("1 Chronicles", 29), ("2 Chronicles", 36), ("Ezra", 10), ("Nehemiah", 13),
    ("Esther", 10), ("Job", 42), ("Psalms", 150), ("Proverbs", 31),
    ("Ecclesiastes", 12), ("Song of Solomon", 8), ("Isaiah", 66), ("Jeremiah", 52),
    ("Lamentations", 5), ("Ezekiel", 48), ("Daniel", 12), ("Hosea", 14),
    ("Joel", 3), ("Amos", 9), ("Obadiah", 1), ("Jonah", 4), ("Micah", 7),
    ("Nahum", 3), ("Habakkuk", 3), ("Zephaniah", 3), ("Haggai", 2),
    ("Zechariah", 14), ("Malachi", 4),
)

NEW_TESTAMENT: Tuple[Tuple[str, int], ...] = (
    ("Matthew", 28), ("Mark", 16), ("Luke", 24), ("John", 21), ("Acts", 28),
    ("Romans", 16), ("1 Corinthians", 16), ("2 Corinthians", 13), ("Galatians", 6),
    ("Ephesians", 6), ("Philippians", 4), ("Colossians", 4), ("1 Thessalonians", 5),
    ("2 Thessalonians", 3), ("1 Timothy", 6), ("2 Timothy", 4), ("Titus", 3),
    ("Philemon", 1), ("Hebrews", 13), ("James", 5), ("1 Peter", 5), ("2 Peter", 3),
    ("1 John", 5), ("2 John", 1), ("3 John", 1), ("Jude", 1), ("Revelation", 22),
)

_WISDOM_BOOKS = ("Psalms", "Proverbs")


@dataclass(frozen=True)
class DayEntry:
    """One day of the reading plan."""

    day_number: int
    date: str
    primary_text: str
    secondary_text: str

    @property
    def month(self) -> int:
        """Calendar month (1-12) of the entry's date label."""
        return MONTH_ABBREVIATIONS.index(self.date.split("-")[1]) + 1

    def to_dict(self) -> Dict[str, object]:
        return {
            "day_number": self.day_number,
            "date": self.date,
            "month": self.month,
            "primary_text": self.primary_text,
            "secondary_text": self.secondary_text,
        }


def _expand(books: Iterable[Tuple[str, int]]) -> List[Tuple[str, int]]:
    return [(book, chapter) for book, count in books for chapter in range(1, count + 1)]


def _format_chapters(chapters: Sequence[Tuple[str, int]]) -> str:
    """Render chapters as "Book a-b; Book c" grouping runs within a book."""
    parts: List[str] = []
    run_book: Optional[str] = None
    run_start = run_end = 0
    for book, chapter in chapters:
        if book == run_book and chapter == run_end + 1:
            run_end = chapter
            continue
        if run_book is not None:
            parts.append(_format_run(run_book, run_start, run_end))
        run_book, run_start, run_end = book, chapter, chapter
    if run_book is not None:
        parts.append(_format_run(run_book, run_start, run_end))
    return "; ".join(parts)


def _format_run(book: str, start: int, end: int) -> str:
    if start == end:
        return f"{book} {start}"
    return f"{book} {start}-{end}"


def _split_evenly(chapters: Sequence[Tuple[str, int]], days: int) -> List[Sequence[Tuple[str, int]]]:
    total = len(chapters)
    return [chapters[(day - 1) * total // days: day * total // days] for day in range(1, days + 1)]


def _date_label(day_number: int) -> str:
    label = date(_LABEL_YEAR, 1, 1) + timedelta(days=day_number - 1)
    return f"{label.day}-{MONTH_ABBREVIATIONS[label.month - 1]}"


def build_reading_plan(days: int = PLAN_LENGTH_DAYS) -> Tuple[DayEntry, ...]:
    """Build the ordered catalog of plan days."""
    primary = _expand((book, count) for book, count in OLD_TESTAMENT if book not in _WISDOM_BOOKS)
    secondary = _expand(NEW_TESTAMENT) + _expand(
        (book, count) for book, count in OLD_TESTAMENT if book in _WISDOM_BOOKS
    )
    primary_days = _split_evenly(primary, days)
    secondary_days = _split_evenly(secondary, days)

    return tuple(
        DayEntry(
            day_number=index + 1,
            date=_date_label(index + 1),
            primary_text=_format_chapters(primary_days[index]),
            secondary_text=_format_chapters(secondary_days[index]),
        )
        for index in range(days)
    )


READING_PLAN: Tuple[DayEntry, ...] = build_reading_plan()


def get_entry(day_number: int) -> Optional[DayEntry]:
    if 1 <= day_number <= len(READING_PLAN):
        return READING_PLAN[day_number - 1]
    return None


def entries_for_month(month: int) -> List[DayEntry]:
    """Return the plan days whose date label falls in ``month`` (1-12)."""
    if month < 1 or month > 12:
        raise ValueError("month must be between 1 and 12")
    return [entry for entry in READING_PLAN if entry.month == month]


def entries_for_days(day_numbers: Iterable[int]) -> List[DayEntry]:
    """Return catalog entries for the given day numbers, in plan order."""
    wanted = set(day_numbers)
    return [entry for entry in READING_PLAN if entry.day_number in wanted]
