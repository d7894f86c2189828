"""
Selects the synopsis file reader for a search engine.
"""

import logging
from pathlib import Path
from typing import Dict, Type, Union

from psmio.core.common import DIANN_FILENAME_SUFFIX_SYN
from psmio.core.diann.diann import DiaNNSynFileReader
from psmio.core.reader import SynFileReader

logger = logging.getLogger(__name__)

READERS: Dict[str, Type[SynFileReader]] = {
    "diann": DiaNNSynFileReader,
}

SYNOPSIS_SUFFIXES: Dict[str, str] = {
    DIANN_FILENAME_SUFFIX_SYN: "diann",
}


def get_reader(
    result_type: str,
    dataset_name: str,
    input_file_path: Union[str, Path],
    load_mods_and_seq_info: bool = True,
) -> SynFileReader:
    """
    Create the reader for the given result type (e.g. "diann").

    Raises:
        ValueError: If the result type is not supported
    """
    reader_class = READERS.get(result_type.lower())
    if reader_class is None:
        raise ValueError(
            f"Unsupported result type: {result_type}; expected one of {', '.join(READERS)}"
        )

    logger.debug(f"Using {reader_class.__name__} for {input_file_path}")
    return reader_class(dataset_name, input_file_path, load_mods_and_seq_info)


def get_reader_for_file(
    input_file_path: Union[str, Path], load_mods_and_seq_info: bool = True
) -> SynFileReader:
    """
    Create the reader matching the suffix of a synopsis file, e.g. ``Dataset_diann_syn.txt``.

    Raises:
        ValueError: If the file name does not end with a known synopsis suffix
    """
    file_name = Path(input_file_path).name
    for suffix, result_type in SYNOPSIS_SUFFIXES.items():
        if file_name.lower().endswith(suffix):
            dataset_name = file_name[: -len(suffix)]
            return get_reader(result_type, dataset_name, input_file_path, load_mods_and_seq_info)

    raise ValueError(f"Unable to determine the search engine of {file_name}")
