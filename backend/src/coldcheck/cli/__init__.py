"""Command-line interface for coldcheck."""

import click

from .. import __version__
from ..logging import setup_logging
from .dev import db_group, dev_group
from .hierarchy import contact_group, section_group, unit_group
from .reports import report_group


@click.group()
@click.version_option(version=__version__, prog_name="coldcheck")
@click.option("--verbose", "-v", is_flag=True, help="Print debug logs")
def main(verbose: bool):
    """Coldcheck - refrigeration temperature compliance logging."""
    if verbose:
        setup_logging(level="DEBUG", log_format="text")


main.add_command(db_group)
main.add_command(dev_group)
main.add_command(section_group)
main.add_command(unit_group)
main.add_command(contact_group)
main.add_command(report_group)


if __name__ == "__main__":
    main()
