"""
Command-line interface for osutil.
"""

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .config import ConfigError, config_path, load_credentials
from .obs import DEFAULT_API_URL, BuildServiceError, OBSClient
from .outdated import DEFAULT_REPO, OutdatedChecker
from .reporting import export_reports_csv, print_reports, print_reports_json
from .repology import RepologyClient


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="osutil",
        description="Workflow helpers for openSUSE package maintainers"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Show progress messages (-vv for debug output)"
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Credentials file. Default: {config_path()}"
    )

    subparsers = parser.add_subparsers(dest="command", title="commands", metavar="<command>")

    outdated = subparsers.add_parser(
        "outdated",
        help="List maintained packages that are outdated in Tumbleweed",
        description="List maintained packages whose version lags behind other "
                    "distributions according to repology.org"
    )

    outdated.add_argument(
        "-n", "--show-packages-not-found",
        action="store_true",
        help="Also list packages repology does not know about"
    )

    outdated.add_argument(
        "--repo",
        default=DEFAULT_REPO,
        help=f"Repology repository to compare. Default: {DEFAULT_REPO}"
    )

    outdated.add_argument(
        "-j", "--jobs",
        type=int,
        default=1,
        help="Number of parallel repology requests. Default: 1"
    )

    outdated.add_argument(
        "--api-url",
        default=DEFAULT_API_URL,
        help=f"Build service API URL. Default: {DEFAULT_API_URL}"
    )

    outdated.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON"
    )

    outdated.add_argument(
        "--csv",
        type=Path,
        default=None,
        help="Also write all results to this CSV file"
    )

    outdated.set_defaults(func=run_outdated)
    return parser


def configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def run_outdated(args: argparse.Namespace) -> int:
    """Report maintained packages that are outdated."""
    credentials = load_credentials(args.config)

    obs = OBSClient(credentials, api_url=args.api_url)
    names = obs.maintained_package_names()

    checker = OutdatedChecker(RepologyClient(), repo=args.repo, jobs=args.jobs)
    reports = checker.check_packages(names)

    if args.json:
        print_reports_json(reports, sys.stdout, args.show_packages_not_found)
    else:
        print_reports(reports, sys.stdout, args.show_packages_not_found)

    if args.csv:
        csv_file = export_reports_csv(reports, args.csv)
        logger.info("Results saved to: %s", csv_file)
    return 0


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help(sys.stdout)
        return 0

    if getattr(args, "jobs", 1) < 1:
        parser.error("--jobs must be at least 1")

    configure_logging(args.verbose)

    try:
        return args.func(args)
    except (ConfigError, BuildServiceError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
