"""
Command-line interface for LinkScout.

Usage:
    python -m linkscout search "backend engineer" --location Berlin
    python -m linkscout detail https://www.linkedin.com/jobs/view/123
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from linkscout.config import get_settings
from linkscout.errors import ScrapeError
from linkscout.extract.html import plain_text_from_description
from linkscout.models import JobRecord, SearchResultSet

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_RECORD = 2
EXIT_INTERRUPTED = 130


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="linkscout",
        description="Fetch and extract LinkedIn job listings through a remote browser",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Search listings (requires LINKSCOUT_BROWSERLESS_TOKEN)
  python -m linkscout search "data engineer" --location "Amsterdam"

  # One job, as JSON
  python -m linkscout detail https://www.linkedin.com/jobs/view/123 --json
""",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print debug messages",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress all output except errors",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Search job listings")
    search.add_argument("title", help="Job title to search for")
    search.add_argument(
        "--location", "-l",
        default="",
        help="Location filter (e.g., 'Berlin', 'Remote')",
    )
    search.add_argument("--json", action="store_true", help="Print results as JSON")

    detail = sub.add_parser("detail", help="Extract a single job posting")
    detail.add_argument("url", help="Job posting URL")
    detail.add_argument("--json", action="store_true", help="Print the job as JSON")

    return parser.parse_args(argv)


def configure_logging(args: argparse.Namespace) -> None:
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = getattr(logging, get_settings().log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def print_results(results: SearchResultSet) -> None:
    total = f" of {results.total_results}" if results.total_results else ""
    print(f"{len(results)} jobs{total}")
    print()
    for i, item in enumerate(results, 1):
        print(f"{i:3}. {item.title} - {item.company} ({item.location})")
        if item.posted_time:
            print(f"     Posted: {item.posted_time}")
        if item.salary_range:
            print(f"     Salary: {item.salary_range}")
        if item.job_url:
            print(f"     {item.job_url}")


def print_record(record: JobRecord) -> None:
    print(record.title)
    print(f"  Company:   {record.company}")
    print(f"  Location:  {record.location}")
    if record.salary_range:
        print(f"  Salary:    {record.salary_range}")
    if record.posted_time:
        print(f"  Posted:    {record.posted_time}")
    if record.applicants:
        print(f"  Applicants: {record.applicants}")
    if record.job_url:
        print(f"  URL:       {record.job_url}")
    description = plain_text_from_description(record.description_html)
    if description:
        print()
        print(description)


async def async_main(args: argparse.Namespace) -> int:
    """Async entry point."""
    from linkscout.pipeline import Pipeline

    try:
        async with Pipeline() as pipeline:
            pipeline.install_signal_handlers()

            if args.command == "search":
                results = await pipeline.search(args.title, args.location or None)
                if args.json:
                    print(json.dumps(results.to_dict(), indent=2, ensure_ascii=False))
                elif not args.quiet:
                    print_results(results)
                return EXIT_OK

            record = await pipeline.fetch_detail(args.url)
            if record is None:
                print(
                    "Error: Unable to extract job details. This might be due to "
                    "LinkedIn's anti-bot measures or an invalid URL.",
                    file=sys.stderr,
                )
                return EXIT_NO_RECORD
            if args.json:
                print(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))
            elif not args.quiet:
                print_record(record)
            return EXIT_OK

    except (ScrapeError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    configure_logging(args)
    try:
        return asyncio.run(async_main(args))
    except (KeyboardInterrupt, asyncio.CancelledError):
        if not args.quiet:
            print("\nInterrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
