"""
Search engine parameters and the key=value parameter file loader.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

logger = logging.getLogger(__name__)


@dataclass
class SearchEngineParameters:
    """
    Settings of one search, read from the search engine parameter file.

    ``min_number_termini`` is None until the parameter file defines a valid
    value; this keeps "unresolved" distinct from non-specific (0).
    """

    search_engine_name: str
    parameters: Dict[str, str] = field(default_factory=dict)
    enzyme: str = ""
    min_number_termini: Optional[int] = None
    max_number_internal_cleavages: int = 4
    precursor_mass_tolerance_da: float = 0.0
    precursor_mass_tolerance_ppm: float = 0.0
    search_engine_param_file_path: str = ""

    def add_update_parameter(self, name: str, value: str) -> None:
        self.parameters[name] = value

    def get_parameter(self, name: str, prefix: str = "") -> Optional[str]:
        return self.parameters.get(f"{prefix}{name}")


def parse_key_value_setting(
    text: str, delimiter: str = "=", comment_char: str = "#"
) -> Tuple[str, str]:
    """
    Split ``key = value  # comment`` at the first delimiter.

    Key and value are trimmed and a trailing comment is removed from the value.
    Both are empty when the delimiter is missing or the key would be empty.
    """
    if not text:
        return "", ""

    char_index = text.find(delimiter)
    if char_index <= 0:
        return "", ""

    key = text[:char_index].strip()
    value = text[char_index + 1 :].strip()

    if comment_char:
        comment_index = value.find(comment_char)
        if comment_index > 0:
            value = value[:comment_index].strip()

    return key, value


def read_key_value_param_file(
    param_file_path: Union[str, Path],
    search_engine_params: SearchEngineParameters,
    delimiter: str = "=",
) -> None:
    """
    Load the settings of a key=value parameter file into search_engine_params.

    Blank lines, comment lines (starting with #) and lines without the delimiter
    are skipped. Later keys overwrite earlier ones.

    Raises:
        FileNotFoundError: If the parameter file does not exist
    """
    path = Path(param_file_path)
    if not path.is_file():
        raise FileNotFoundError(
            f"{search_engine_params.search_engine_name or '?? Unknown tool ??'} param file not found: {path}"
        )

    search_engine_params.search_engine_param_file_path = str(path)

    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            data_line = line.strip()
            if not data_line or data_line.startswith("#") or delimiter not in data_line:
                continue

            key, value = parse_key_value_setting(data_line, delimiter)
            if not key:
                continue

            search_engine_params.add_update_parameter(key, value)

    logger.debug(
        f"Loaded {len(search_engine_params.parameters)} parameters from {path.name}"
    )
