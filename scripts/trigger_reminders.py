"""CLI script to manually trigger the care reminder sweep."""
from __future__ import annotations

import argparse

from app.tasks.notifications import send_care_reminders


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Manually trigger the plant care reminder sweep",
    )
    parser.add_argument(
        "--date",
        type=str,
        help="Evaluate care as of this date, YYYY-MM-DD (default: today)",
    )
    parser.add_argument(
        "--all-users",
        action="store_true",
        help="Ignore each user's preferred notification hour",
    )
    parser.add_argument(
        "--async",
        action="store_true",
        dest="use_async",
        help="Queue task asynchronously instead of running immediately",
    )

    args = parser.parse_args()
    respect_notification_time = not args.all_users

    if args.use_async:
        task = send_care_reminders.apply_async(args=(args.date, respect_notification_time))
        print(f"Task queued: {task.id}")
    else:
        result = send_care_reminders.run(args.date, respect_notification_time)
        print(f"Result: {result}")


if __name__ == "__main__":
    main()
