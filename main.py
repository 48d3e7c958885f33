import argparse
import socket
import sys

from rich.console import Console
from rich.markup import escape

from module.recon.dns_resolver import Query, ResolutionError, forward_resolve
from reporting.text_report import report_lines
from utils.logger import log_message

console = Console()
err_console = Console(stderr=True)


# ======================================================
# ARGUMENT PARSING
# ======================================================

class UsageError(Exception):
    """Bad command line; carries the usage text to show the user."""

    def __init__(self, message, usage=""):
        super().__init__(message)
        self.usage = usage


class QueryParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(message, self.format_usage())


class _StderrHelpAction(argparse.Action):
    """-h writes usage and options to stderr, then exits 0"""

    def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, help=None):
        super().__init__(option_strings=option_strings, dest=dest, default=default, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        parser.print_help(sys.stderr)
        parser.exit(0)


def build_parser():
    parser = QueryParser(
        prog="hostlookup",
        description="Forward and reverse lookups through the system name resolver.",
        add_help=False,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  hostlookup example.com
  hostlookup -4 -t example.com http
  hostlookup ::1 53
        """,
    )

    parser.add_argument("-h", action=_StderrHelpAction, help="Show this help message and exit")
    parser.add_argument("-4", dest="family", action="store_const", const=socket.AF_INET,
                        default=socket.AF_UNSPEC, help="Only IPv4 addresses")
    parser.add_argument("-6", dest="family", action="store_const", const=socket.AF_INET6,
                        help="Only IPv6 addresses")
    parser.add_argument("-t", dest="socktype", action="store_const", const=socket.SOCK_STREAM,
                        default=0, help="Only stream (TCP) sockets")
    parser.add_argument("-u", dest="socktype", action="store_const", const=socket.SOCK_DGRAM,
                        help="Only datagram (UDP) sockets")
    parser.add_argument("host", metavar="host-or-address", help="Host name or literal address")
    parser.add_argument("service", nargs="?", help="Service name or port number")
    return parser


def parse_query(argv=None):
    """Build a Query from the command line. Raises UsageError on bad input."""
    args = build_parser().parse_args(argv)
    return Query(
        host=args.host,
        service=args.service,
        family=args.family,
        socktype=args.socktype,
    )


# ======================================================
# LOGGING
# ======================================================

def append_log(text):
    """Append to log file"""
    try:
        log_message(text)
    except (OSError, UnicodeError) as e:
        err_console.print(f"[yellow]Warning: Logging error: {escape(str(e))}[/]", soft_wrap=True)


# ======================================================
# Main Function
# ======================================================

def main(argv=None):
    """Main entry point"""
    try:
        query = parse_query(argv)
    except UsageError as e:
        err_console.print(e.usage, end="", markup=False, emoji=False, highlight=False, soft_wrap=True)
        err_console.print(f"[red]hostlookup: error: {escape(str(e))}[/]", soft_wrap=True)
        return 2

    append_log(f"Query: host={query.host} service={query.service} "
               f"family={query.family} socktype={query.socktype}")

    try:
        endpoints = forward_resolve(query)
    except ResolutionError as e:
        err_console.print(f"[red]getaddrinfo: {escape(str(e))}[/]", soft_wrap=True)
        append_log(f"Resolution failed for {query.host}: {e}")
        return 1
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted.[/]")
        return 130

    append_log(f"Resolved {len(endpoints)} endpoint(s) for {query.host}")

    try:
        for line in report_lines(query, endpoints):
            console.print(line, markup=False, emoji=False, highlight=False, soft_wrap=True)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted.[/]")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
