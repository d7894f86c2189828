"""
Command to show the interpreted search engine parameters.
"""

import json
import logging
from pathlib import Path

import click

from psmio.core.reader_factory import READERS, get_reader
from psmio.utils.logger import get_logger


def show_search_params(result_type: str, param_file: Path, verbose: bool = False) -> dict:
    """
    Interpret a parameter file and echo the result as JSON.

    Args:
        result_type: Search engine result type, e.g. diann
        param_file: Search engine parameter file
        verbose: Enable verbose logging
    """
    logger = get_logger("psmio.commands.params")
    if verbose:
        logger.setLevel(logging.DEBUG)

    param_file = Path(param_file).resolve()
    reader = get_reader(
        result_type, param_file.stem, param_file, load_mods_and_seq_info=False
    )
    params, success = reader.load_search_engine_parameters(param_file)
    if not success:
        raise click.ClickException(
            f"Unable to read parameter file {param_file}: {'; '.join(reader.error_messages)}"
        )

    summary = {
        "search_engine": params.search_engine_name,
        "enzyme": params.enzyme,
        "min_number_termini": params.min_number_termini,
        "max_number_internal_cleavages": params.max_number_internal_cleavages,
        "precursor_mass_tolerance_da": params.precursor_mass_tolerance_da,
        "precursor_mass_tolerance_ppm": params.precursor_mass_tolerance_ppm,
        "warnings": reader.warning_messages,
    }
    click.echo(json.dumps(summary, indent=2))
    return summary


@click.command("params", short_help="Show the interpreted search engine parameters")
@click.option(
    "--result-type",
    help="Search engine result type",
    default="diann",
    type=click.Choice(sorted(READERS), case_sensitive=False),
)
@click.option(
    "--param-file",
    help="Search engine parameter file (key=value)",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--verbose", help="Enable verbose logging", is_flag=True)
def show_search_params_cmd(**kwargs):
    """
    Interpret a search engine parameter file and print the enzyme, cleavage
    specificity and precursor tolerance as JSON.

    Example:
        psmio utils params --param-file diann.params
    """
    show_search_params(**kwargs)
