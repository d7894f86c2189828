"""
Command to convert DIA-NN synopsis files to PSM parquet files.
"""

import logging
from pathlib import Path
from typing import Optional

import click

from psmio.core.diann.diann import DiaNNSynFileReader
from psmio.core.psm import write_psms_to_parquet
from psmio.core.reader_factory import get_reader
from psmio.utils.file_utils import create_uuid_filename, validate_file
from psmio.utils.logger import get_logger


def _dataset_name_from_path(syn_file: Path) -> str:
    name = syn_file.name
    suffix = DiaNNSynFileReader.get_phrp_synopsis_file_name("")
    if name.lower().endswith(suffix):
        return name[: -len(suffix)]
    return syn_file.stem


def convert_diann_syn(
    syn_file: Path,
    output_folder: Path,
    param_file: Optional[Path] = None,
    dataset_name: Optional[str] = None,
    output_prefix: Optional[str] = None,
    fast_read: bool = False,
    skip_seq_info: bool = False,
    batch_size: int = 10000,
    verbose: bool = False,
) -> Path:
    """
    Convert a DIA-NN synopsis file to a PSM parquet file.

    Args:
        syn_file: DIA-NN synopsis file (_diann_syn.txt)
        output_folder: Output directory for generated files
        param_file: Optional DIA-NN parameter file; its precursor tolerance is logged
        dataset_name: Dataset name; defaults to the synopsis file name without its suffix
        output_prefix: Optional prefix for output files
        fast_read: Skip the cleavage state and sequence info
        skip_seq_info: Do not load the ResultToSeqMap and SeqInfo files
        batch_size: Number of PSMs written per parquet batch
        verbose: Enable verbose logging

    Returns:
        Path of the parquet file
    """
    logger = get_logger("psmio.commands.diann")
    if verbose:
        logger.setLevel(logging.DEBUG)

    try:
        validate_file(syn_file)
        output_folder = Path(output_folder)
        output_folder.mkdir(parents=True, exist_ok=True)

        dataset_name = dataset_name or _dataset_name_from_path(Path(syn_file))
        reader = get_reader(
            "diann", dataset_name, syn_file, load_mods_and_seq_info=not skip_seq_info
        )

        if param_file:
            params, success = reader.load_search_engine_parameters(Path(param_file).resolve())
            if not success:
                raise click.ClickException(f"Unable to read parameter file {param_file}")
            logger.info(
                f"Enzyme: {params.enzyme or 'undefined'}; "
                f"precursor tolerance: {params.precursor_mass_tolerance_da:.4f} Da, "
                f"{params.precursor_mass_tolerance_ppm:.2f} ppm"
            )

        prefix = output_prefix or "psm"
        output_path = output_folder / create_uuid_filename(prefix, ".psm.parquet")
        logger.info(f"Will save PSM file to: {output_path}")

        count = write_psms_to_parquet(
            reader.read_psms(fast_read_mode=fast_read),
            str(output_path),
            batch_size=batch_size,
        )

        if reader.error_messages:
            logger.warning(
                f"{len(reader.error_messages)} errors while reading {Path(syn_file).name}"
            )
        logger.info(f"PSM file with {count} PSMs saved to: {output_path}")
        return output_path

    except click.ClickException:
        raise
    except Exception as e:
        logger.exception(f"Error in DIA-NN synopsis conversion: {str(e)}")
        raise click.ClickException(f"Error: {str(e)}\nCheck the logs for more details.")


@click.command(
    "diann-syn",
    short_help="Convert a DIA-NN synopsis file to PSM parquet format",
)
@click.option(
    "--syn-file",
    help="DIA-NN synopsis file (_diann_syn.txt)",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--output-folder",
    help="Output directory for generated files",
    required=True,
    type=click.Path(file_okay=False, path_type=Path),
)
@click.option(
    "--param-file",
    help="DIA-NN parameter file (key=value)",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--dataset-name", help="Dataset name (default: derived from the file name)")
@click.option("--output-prefix", help="Prefix for output files")
@click.option(
    "--fast-read",
    help="Skip the cleavage state and sequence info",
    is_flag=True,
)
@click.option(
    "--skip-seq-info",
    help="Do not load the ResultToSeqMap and SeqInfo files",
    is_flag=True,
)
@click.option(
    "--batch-size",
    help="Number of PSMs written per parquet batch",
    default=10000,
    type=int,
)
@click.option("--verbose", help="Enable verbose logging", is_flag=True)
def convert_diann_syn_cmd(**kwargs):
    """
    Convert a DIA-NN synopsis file to PSM parquet format.

    Example:
        psmio convert diann-syn \\
            --syn-file Dataset_diann_syn.txt \\
            --param-file diann.params \\
            --output-folder ./output
    """
    convert_diann_syn(**kwargs)
