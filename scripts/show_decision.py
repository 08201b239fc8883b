"""Show what the display would select at a given moment.

Loads the admin data, runs the content selector once and prints the
decision as JSON, or a human-readable week overview with --table.

Run with: python scripts/show_decision.py
At time:  python scripts/show_decision.py --at "2026-10-20 11:30"
Today:    python scripts/show_decision.py --at 10:07
Table:    python scripts/show_decision.py --table
Data:     python scripts/show_decision.py --data backups/signage-backup-2026-10-19.json

Exit codes:
  0 = success (JSON or table on stdout)
  1 = error (message on stderr)
"""

import argparse
import json
import sys

from config import init_logging, make_store, parse_at

from src.signage.models import TimePoint
from src.signage.schedule import DayOverview, today_and_tomorrow, week_overview
from src.signage.selector import select_content
from src.signage.timeutils import greeting_for


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Show the display's content decision as JSON or table.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--at",
        type=str,
        default=None,
        help='Moment to evaluate, "YYYY-MM-DD HH:MM" or "HH:MM" (default: now).',
    )
    parser.add_argument(
        "--data",
        type=str,
        default=None,
        help="Admin data file (default: SIGNAGE_DATA_FILE).",
    )
    parser.add_argument(
        "--url",
        type=str,
        default=None,
        help="Snapshot URL instead of a data file (default: SIGNAGE_SNAPSHOT_URL).",
    )
    parser.add_argument(
        "--table",
        action="store_true",
        help="Print the decision plus the week overview as a table.",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging.")
    return parser.parse_args()


def _format_week(rows: list[DayOverview]) -> str:
    """Format the week overview as a table.

    Columns: Day | Date | Time | Event | Location
    """
    headers = ["Day", "Date", "Time", "Event", "Location"]
    table: list[list[str]] = []
    for row in rows:
        marker = "*" if row.is_today else " "
        day = f"{marker}{row.short_label}"
        date_label = row.calendar_date.strftime("%d.%m.")
        if not row.events:
            table.append([day, date_label, "", "Keine Termine", ""])
            continue
        for i, event in enumerate(row.events):
            table.append(
                [
                    day if i == 0 else "",
                    date_label if i == 0 else "",
                    event.time,
                    event.title,
                    event.location or "-",
                ]
            )

    widths = [len(h) for h in headers]
    for line in table:
        for i, cell in enumerate(line):
            widths[i] = max(widths[i], len(cell))

    header_line = " | ".join(h.ljust(widths[i]) for i, h in enumerate(headers))
    separator = "-+-".join("-" * w for w in widths)
    row_lines = [
        " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(line))
        for line in table
    ]
    return "\n".join([header_line, separator, *row_lines])


def main(args: argparse.Namespace) -> None:
    init_logging(args.verbose)

    moment = parse_at(args.at)
    time = TimePoint.from_datetime(moment)
    snapshot = make_store(args.data, args.url).current()
    decision = select_content(time, snapshot)

    if not args.table:
        print(json.dumps(decision.model_dump(mode="json"), indent=2, ensure_ascii=False))
        return

    today, tomorrow = today_and_tomorrow(time, snapshot.weekly_schedule)
    print(f"{moment:%d.%m.%Y %H:%M}  KW {time.week_number}  {greeting_for(time.hour)}")
    print(f"Showing: {decision.kind}")
    print(f"Today:    {today.time + ' ' + today.title if today else '-'}")
    print(f"Tomorrow: {tomorrow.time + ' ' + tomorrow.title if tomorrow else '-'}")
    print()
    print(_format_week(week_overview(time, snapshot.weekly_schedule)))


if __name__ == "__main__":
    args = _parse_args()
    try:
        main(args)
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
