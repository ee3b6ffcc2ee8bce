"""
cli/app.py - Main CLI entry point

Click based command line for the inventory reports.

Command structure:
    awstools zone list                          # hosted zones as a table
    awstools zone export -z Z1 -z Z2 -o out.csv # records of one or more zones
    awstools zone compare Z1 Z2                 # A/CNAME diff of two zones
    awstools volume export -f excel -o vol.xlsx # EBS volumes with instances
    awstools --version

Reports go to stdout when ``-o`` is omitted (CSV only). Errors are printed on
stderr and exit with status 1.
"""

import functools
import logging
import sys

import click

from cli.ui import print_error, print_success, print_table, setup_logging
from core.aws import create_session, get_client
from core.config import Settings, get_version
from core.exceptions import AWSToolsError, WriteError, format_error_for_user
from core.inventory import compare_zones, export_volumes, export_zone, list_zones
from core.io import RowSet, write_csv, write_excel

logger = logging.getLogger(__name__)

VERSION = get_version()

FORMATS = ("csv", "excel")


class AppContext:
    """Settings plus lazily created AWS clients, one per invocation"""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._session = None
        self._clients: dict[str, object] = {}

    def client(self, service_name: str):
        if service_name not in self._clients:
            if self._session is None:
                self._session = create_session(self.settings)
            self._clients[service_name] = get_client(self._session, service_name, self.settings)
        return self._clients[service_name]


def handle_errors(func):
    """Print AWSToolsError on stderr and exit with status 1"""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except AWSToolsError as e:
            logger.debug("Command failed", exc_info=True)
            print_error(format_error_for_user(e))
            sys.exit(1)

    return wrapper


def check_output(output: str | None, fmt: str) -> None:
    """Reject option combinations that cannot be written"""
    if fmt == "excel" and not output:
        raise click.UsageError("--format excel requires --output")


def output_options(func):
    """-o/--output and -f/--format options shared by the export commands

    The combination is validated before the command runs any AWS query.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        check_output(kwargs.get("output"), kwargs.get("fmt", "csv"))
        return func(*args, **kwargs)

    wrapper = click.option("-f", "--format", "fmt", type=click.Choice(FORMATS), default="csv", help="Output format")(
        wrapper
    )
    wrapper = click.option("-o", "--output", default=None, help="Output file, stdout if omitted")(wrapper)
    return wrapper


def write_report(data: RowSet, output: str | None, fmt: str, sheet_name: str) -> None:
    """Write a RowSet to a file or stdout in the requested format"""
    check_output(output, fmt)
    if fmt == "excel":
        write_excel(output, data, sheet_name=sheet_name)
    elif output:
        try:
            with open(output, "w", encoding="utf-8", newline="") as f:
                write_csv(f, data)
        except OSError as e:
            raise WriteError(output, "could not open file", e) from e
    else:
        write_csv(sys.stdout, data)

    if output:
        print_success(f"{len(data)} rows written to {output}")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(VERSION, prog_name="awstools")
@click.option("--profile", default=None, help="AWS profile (default: AWS_PROFILE)")
@click.option("--region", default=None, help="AWS region (default: AWS_REGION)")
@click.option("-v", "--verbose", count=True, help="-v for progress, -vv for debug output")
@click.pass_context
def cli(ctx: click.Context, profile: str | None, region: str | None, verbose: int) -> None:
    """Various high-level tools to work with the AWS API"""
    setup_logging(verbose)
    try:
        settings = Settings.from_env().override(profile=profile, region=region)
    except AWSToolsError as e:
        raise click.UsageError(str(e)) from e
    ctx.obj = AppContext(settings)


@cli.group()
def zone() -> None:
    """Work with Route53 hosted zones"""


@zone.command("list")
@click.pass_obj
@handle_errors
def zone_list(app: AppContext) -> None:
    """List all hosted zones visible to the current user"""
    zones = list_zones(app.client("route53"))
    print_table("Hosted Zones", ["ZoneID", "Name"], [[z.id, z.name] for z in zones])


@zone.command("export")
@click.option("-z", "--zone-id", "zone_ids", multiple=True, required=True, help="Zone ID to export (repeatable)")
@output_options
@click.pass_obj
@handle_errors
def zone_export(app: AppContext, zone_ids: tuple[str, ...], output: str | None, fmt: str) -> None:
    """Export one or multiple zones to CSV or Excel"""
    data = export_zone(app.client("route53"), *zone_ids)
    write_report(data, output, fmt, sheet_name="Records")


@zone.command("compare")
@click.argument("left_zone_id")
@click.argument("right_zone_id")
@output_options
@click.pass_obj
@handle_errors
def zone_compare(app: AppContext, left_zone_id: str, right_zone_id: str, output: str | None, fmt: str) -> None:
    """Compare the A and CNAME records of two zones"""
    data = compare_zones(app.client("route53"), left_zone_id, right_zone_id)
    write_report(data, output, fmt, sheet_name="Comparison")


@cli.group()
def volume() -> None:
    """Work with EBS volumes"""


@volume.command("export")
@output_options
@click.pass_obj
@handle_errors
def volume_export(app: AppContext, output: str | None, fmt: str) -> None:
    """Export EBS volumes with their attached instances"""
    data = export_volumes(app.client("ec2"))
    write_report(data, output, fmt, sheet_name="Volumes")


if __name__ == "__main__":
    cli()
