"""
Commandline interface for psmio: converts search engine synopsis files into PSM parquet files.
"""

import logging
import os

import click

from psmio import __version__ as __version__
from psmio.commands.convert.diann import convert_diann_syn_cmd
from psmio.commands.utils.params import show_search_params_cmd
from psmio.utils.logger import configure_from_env, setup_logging

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


@click.version_option(
    version=__version__, package_name="psmio", message="%(package)s %(version)s"
)
@click.group(context_settings=CONTEXT_SETTINGS)
def cli() -> None:
    """
    psmio - A tool for reading search engine results into a uniform PSM model
    """
    logging.basicConfig(
        level=logging.INFO,
        datefmt="%H:%M:%S",
        format="[%(asctime)s] %(levelname).1s | %(name)s | %(message)s",
    )
    env_config = configure_from_env()
    if "log_file" in env_config or os.environ.get("PSMIO_LOG_LEVEL"):
        setup_logging(**env_config)


@cli.group()
def convert():
    """Convert synopsis files to PSM parquet files."""
    pass


@cli.group()
def utils():
    """Utility commands."""
    pass


convert.add_command(convert_diann_syn_cmd, name="diann-syn")

utils.add_command(show_search_params_cmd, name="params")


def psmio_main() -> None:
    """
    Main function to run the psmio command line interface
    :return: none
    """
    cli()


if __name__ == "__main__":
    psmio_main()
