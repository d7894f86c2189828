"""
Base class for the synopsis file readers.

A reader knows the column schema of one search engine's synopsis file, parses
its data lines into PSM objects and interprets the search engine parameter
file. Problems with the data are never raised to the caller: they are
collected in ``error_messages`` / ``warning_messages`` (and logged) and the
affected operation returns False.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from psmio.core.cleavage import PeptideCleavageStateCalculator
from psmio.core.common import SCORE_NOT_FOUND
from psmio.core.mass import PeptideMassCalculator
from psmio.core.psm import PSM
from psmio.core.search_params import SearchEngineParameters
from psmio.core.seq_info import SequenceInfo, load_result_to_seq_map, load_seq_info


def try_parse_int(text: Optional[str]) -> Optional[int]:
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def try_parse_float(text: Optional[str]) -> Optional[float]:
    if text is None:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def lookup_column_value(
    columns: Sequence[str],
    column: Enum,
    column_map: Mapping[Enum, int],
    value_if_missing: Union[str, int, float] = "",
) -> Union[str, int, float]:
    """
    Value of the given column in a split data line.

    The type of value_if_missing selects the return type. value_if_missing is
    returned when the column is not in column_map, when the line has too few
    fields, or when the text does not parse as int / float. Blank text is
    returned as "" for string lookups.
    """
    col_index = column_map.get(column, -1)
    if columns is None or col_index < 0 or col_index >= len(columns):
        return value_if_missing

    text = columns[col_index]
    if not text.strip():
        text = ""

    if isinstance(value_if_missing, str):
        return text

    if isinstance(value_if_missing, int):
        value = try_parse_int(text)
    else:
        value = try_parse_float(text)

    return value_if_missing if value is None else value


class SynFileReader(ABC):
    """Common functionality of the search engine specific synopsis file readers."""

    def __init__(
        self,
        dataset_name: str,
        input_file_path: Union[str, Path],
        load_mods_and_seq_info: bool = True,
    ):
        self.dataset_name = dataset_name
        self.input_file_path = Path(input_file_path)
        self.input_directory_path = self.input_file_path.parent
        self.load_mods_and_seq_info = load_mods_and_seq_info

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.error_messages: List[str] = []
        self.warning_messages: List[str] = []

        self.column_map: Dict[Enum, int] = {}

        self.cleavage_state_calculator = PeptideCleavageStateCalculator()
        self.peptide_mass_calculator = PeptideMassCalculator()

        self.result_to_seq_map: Dict[int, int] = {}
        self.seq_info: Dict[int, SequenceInfo] = {}

        if load_mods_and_seq_info:
            self._load_seq_info_files()

    # ============================================================================
    # Search engine specific
    # ============================================================================

    @property
    @abstractmethod
    def search_engine_name(self) -> str:
        """Name of the search engine, e.g. DIA-NN."""

    @classmethod
    @abstractmethod
    def get_column_header_names_and_ids(cls) -> Mapping[Enum, str]:
        """Column to header name table of the synopsis file."""

    @classmethod
    @abstractmethod
    def get_column_map_from_header_line(cls, header_names: Sequence[str]) -> Dict[Enum, int]:
        """Map the known columns to their positions in header_names."""

    @abstractmethod
    def parse_data_line(
        self,
        line: str,
        lines_read: int,
        fast_read_mode: bool = False,
        column_map: Optional[Mapping[Enum, int]] = None,
    ) -> Tuple[PSM, bool]:
        """Parse one data line; returns the PSM and whether the line was valid."""

    @abstractmethod
    def load_search_engine_parameters(
        self, search_engine_param_file_name: Union[str, Path]
    ) -> Tuple[SearchEngineParameters, bool]:
        """Interpret the search engine parameter file."""

    @classmethod
    @abstractmethod
    def get_phrp_synopsis_file_name(cls, dataset_name: str) -> str:
        pass

    @classmethod
    @abstractmethod
    def get_phrp_first_hits_file_name(cls, dataset_name: str) -> str:
        pass

    @classmethod
    @abstractmethod
    def get_phrp_mod_summary_file_name(cls, dataset_name: str) -> str:
        pass

    @classmethod
    @abstractmethod
    def get_phrp_pep_to_protein_map_file_name(cls, dataset_name: str) -> str:
        pass

    @classmethod
    @abstractmethod
    def get_phrp_protein_mods_file_name(cls, dataset_name: str) -> str:
        pass

    @classmethod
    @abstractmethod
    def get_phrp_result_to_seq_map_file_name(cls, dataset_name: str) -> str:
        pass

    @classmethod
    @abstractmethod
    def get_phrp_seq_info_file_name(cls, dataset_name: str) -> str:
        pass

    @classmethod
    @abstractmethod
    def get_phrp_seq_to_protein_map_file_name(cls, dataset_name: str) -> str:
        pass

    # ============================================================================
    # Diagnostics
    # ============================================================================

    def report_error(self, message: str) -> None:
        self.error_messages.append(message)
        self.logger.error(message)

    def report_warning(self, message: str) -> None:
        self.warning_messages.append(message)
        self.logger.warning(message)

    def clear_errors(self) -> None:
        self.error_messages.clear()

    def clear_warnings(self) -> None:
        self.warning_messages.clear()

    # ============================================================================
    # Column handling
    # ============================================================================

    def read_header_line(self, header_line: str) -> Dict[Enum, int]:
        """Resolve a header line and keep the column map for the following data lines."""
        header_names = header_line.rstrip("\r\n").split("\t")
        self.set_column_map(self.get_column_map_from_header_line(header_names))
        return self.column_map

    def set_column_map(self, column_map: Mapping[Enum, int]) -> None:
        self.column_map = dict(column_map)

    def add_score(
        self,
        psm: PSM,
        columns: Sequence[str],
        column: Enum,
        column_map: Mapping[Enum, int],
    ) -> None:
        """Copy a column into psm.additional_scores when the file has it."""
        value = lookup_column_value(columns, column, column_map, SCORE_NOT_FOUND)
        if value != SCORE_NOT_FOUND:
            psm.set_score(self.get_column_header_names_and_ids()[column], value)

    # ============================================================================
    # Sequence info
    # ============================================================================

    def _load_seq_info_files(self) -> None:
        result_to_seq_path = self.input_directory_path / self.get_phrp_result_to_seq_map_file_name(
            self.dataset_name
        )
        seq_info_path = self.input_directory_path / self.get_phrp_seq_info_file_name(
            self.dataset_name
        )

        if not result_to_seq_path.is_file() or not seq_info_path.is_file():
            self.logger.debug(
                f"Sequence info files not found for {self.dataset_name}; skipping"
            )
            return

        try:
            self.result_to_seq_map = load_result_to_seq_map(result_to_seq_path)
            self.seq_info = load_seq_info(seq_info_path)
        except Exception as e:
            self.report_error(f"Error loading sequence info for {self.dataset_name}: {e}")
            self.result_to_seq_map = {}
            self.seq_info = {}

    def update_psm_using_seq_info(self, psm: PSM) -> bool:
        """
        Add the sequence ID, modification description and theoretical mass.

        Returns:
            False if no sequence info is loaded or psm.result_id is unknown
        """
        if not self.result_to_seq_map:
            return False

        seq_id = self.result_to_seq_map.get(psm.result_id)
        if seq_id is None:
            return False

        psm.seq_id = seq_id
        seq_info = self.seq_info.get(seq_id)
        if seq_info is not None:
            psm.mod_description = seq_info.mod_description
            psm.peptide_monoisotopic_mass = seq_info.monoisotopic_mass

        return True

    def finalize_psm(self, psm: PSM) -> None:
        """Complete a PSM parsed in fast read mode."""
        psm.update_clean_sequence()
        psm.update_cleavage_info(self.cleavage_state_calculator)
        self.update_psm_using_seq_info(psm)

    # ============================================================================
    # File access
    # ============================================================================

    @property
    def phrp_synopsis_file_name(self) -> str:
        return self.get_phrp_synopsis_file_name(self.dataset_name)

    @property
    def phrp_first_hits_file_name(self) -> str:
        return self.get_phrp_first_hits_file_name(self.dataset_name)

    @property
    def phrp_mod_summary_file_name(self) -> str:
        return self.get_phrp_mod_summary_file_name(self.dataset_name)

    @property
    def phrp_pep_to_protein_map_file_name(self) -> str:
        return self.get_phrp_pep_to_protein_map_file_name(self.dataset_name)

    @property
    def phrp_protein_mods_file_name(self) -> str:
        return self.get_phrp_protein_mods_file_name(self.dataset_name)

    @property
    def phrp_result_to_seq_map_file_name(self) -> str:
        return self.get_phrp_result_to_seq_map_file_name(self.dataset_name)

    @property
    def phrp_seq_info_file_name(self) -> str:
        return self.get_phrp_seq_info_file_name(self.dataset_name)

    @property
    def phrp_seq_to_protein_map_file_name(self) -> str:
        return self.get_phrp_seq_to_protein_map_file_name(self.dataset_name)

    def read_psms(self, fast_read_mode: bool = False) -> Iterator[PSM]:
        """
        Yield the PSMs of the input file.

        The first line is the header. Blank lines are skipped and invalid lines,
        including lines that are not valid UTF-8, are reported and skipped.
        """
        lines_read = 0
        rejected = 0
        accepted = 0

        with open(self.input_file_path, "rb") as f:
            for raw_line in f:
                lines_read += 1
                try:
                    line = raw_line.decode("utf-8")
                except UnicodeDecodeError as e:
                    self.report_error(
                        f"Line {lines_read} in {self.input_file_path.name} is not valid UTF-8: {e}"
                    )
                    rejected += 1
                    continue
                line = line.rstrip("\r\n")

                if lines_read == 1:
                    self.read_header_line(line)
                    continue

                if not line.strip():
                    continue

                psm, success = self.parse_data_line(line, lines_read, fast_read_mode)
                if not success:
                    rejected += 1
                    continue

                accepted += 1
                yield psm

        self.logger.info(
            f"Read {accepted} PSMs from {self.input_file_path.name}; {rejected} lines rejected"
        )
