"""Reader for DIA-NN synopsis files and parameter files."""

from enum import Enum
from pathlib import Path
from typing import Dict, Mapping, NamedTuple, Optional, Sequence, Tuple, Union

from psmio.core.common import (
    DA_TO_PPM_REFERENCE_MASS,
    DIANN_FILENAME_SUFFIX_SYN,
    DIANN_SEARCH_ENGINE_NAME,
    ENZYME_TERMINI_MAP,
    FLOAT_EPSILON,
    FRAGPIPE_PARAMETER_PREFIX,
    KNOWN_ENZYMES,
    MASS_TOLERANCE_UNITS_DA,
    MASS_TOLERANCE_UNITS_PPM,
    PARAM_ENZYME_NAME,
    PARAM_ENZYME_NAME_LEGACY,
    PARAM_NUM_ENZYME_TERMINI,
    PARAM_PRECURSOR_MASS_LOWER,
    PARAM_PRECURSOR_MASS_UNITS,
    PARAM_PRECURSOR_MASS_UPPER,
    PARAM_PRECURSOR_TRUE_TOLERANCE,
    PARAM_PRECURSOR_TRUE_UNITS,
    PPM_TO_DA_REFERENCE_MASS,
    SCAN_NOT_FOUND_FLAG,
)
from psmio.core.diann.columns import (
    DIANN_SCORE_COLUMNS,
    DiaNNSynFileColumns,
    default_schema,
    resolve_header,
)
from psmio.core.mass import mass_to_ppm, ppm_to_mass
from psmio.core.psm import PSM
from psmio.core.reader import (
    SynFileReader,
    lookup_column_value,
    try_parse_float,
    try_parse_int,
)
from psmio.core.search_params import SearchEngineParameters, read_key_value_param_file


class PrecursorSearchTolerance(NamedTuple):
    lower: float
    upper: float
    ppm_based: bool
    single_tolerance: bool
    valid: bool


class DiaNNSynFileReader(SynFileReader):
    """DIA-NN synopsis file reader."""

    # ============================================================================
    # Column schema and file names
    # ============================================================================

    @property
    def search_engine_name(self) -> str:
        return DIANN_SEARCH_ENGINE_NAME

    @classmethod
    def get_column_header_names_and_ids(cls) -> Mapping[DiaNNSynFileColumns, str]:
        return default_schema()

    @classmethod
    def get_column_map_from_header_line(
        cls, header_names: Sequence[str]
    ) -> Dict[DiaNNSynFileColumns, int]:
        return resolve_header(header_names)

    @classmethod
    def get_phrp_synopsis_file_name(cls, dataset_name: str) -> str:
        return dataset_name + DIANN_FILENAME_SUFFIX_SYN

    @classmethod
    def get_phrp_first_hits_file_name(cls, dataset_name: str) -> str:
        # DIA-NN only has a synopsis file
        return ""

    @classmethod
    def get_phrp_mod_summary_file_name(cls, dataset_name: str) -> str:
        return dataset_name + "_diann_syn_ModSummary.txt"

    @classmethod
    def get_phrp_pep_to_protein_map_file_name(cls, dataset_name: str) -> str:
        return dataset_name + "_diann_PepToProtMapMTS.txt"

    @classmethod
    def get_phrp_protein_mods_file_name(cls, dataset_name: str) -> str:
        return dataset_name + "_diann_syn_ProteinMods.txt"

    @classmethod
    def get_phrp_result_to_seq_map_file_name(cls, dataset_name: str) -> str:
        return dataset_name + "_diann_syn_ResultToSeqMap.txt"

    @classmethod
    def get_phrp_seq_info_file_name(cls, dataset_name: str) -> str:
        return dataset_name + "_diann_syn_SeqInfo.txt"

    @classmethod
    def get_phrp_seq_to_protein_map_file_name(cls, dataset_name: str) -> str:
        return dataset_name + "_diann_syn_SeqToProteinMap.txt"

    # ============================================================================
    # Data lines
    # ============================================================================

    def parse_data_line(
        self,
        line: str,
        lines_read: int,
        fast_read_mode: bool = False,
        column_map: Optional[Mapping[Enum, int]] = None,
    ) -> Tuple[PSM, bool]:
        """
        Parse a data line of the synopsis file.

        In fast read mode the cleavage state and sequence info are not computed;
        call finalize_psm later to populate them.

        Args:
            line: Data line
            lines_read: Number of lines read so far, used in error messages
            fast_read_mode: Skip the cleavage state and sequence info
            column_map: Column positions; defaults to the map of the last header line read

        Returns:
            The PSM and True if the line is valid, False otherwise
        """
        if column_map is None:
            column_map = self.column_map

        psm = PSM()

        try:
            columns = line.split("\t")
            psm.data_line_text = line

            psm.scan_number = lookup_column_value(
                columns, DiaNNSynFileColumns.Scan, column_map, SCAN_NOT_FOUND_FLAG
            )
            if psm.scan_number == SCAN_NOT_FOUND_FLAG:
                self.report_error(
                    f"Line {lines_read} in the DIA-NN data file does not have a valid scan number"
                )
                return psm, False

            psm.result_id = lookup_column_value(
                columns, DiaNNSynFileColumns.ResultID, column_map, 0
            )
            psm.score_rank = lookup_column_value(
                columns, DiaNNSynFileColumns.RankEValue, column_map, 0
            )

            peptide = lookup_column_value(columns, DiaNNSynFileColumns.Peptide, column_map)
            if fast_read_mode:
                psm.set_peptide(peptide, update_clean_sequence=False)
            else:
                psm.set_peptide_with_cleavage_info(peptide, self.cleavage_state_calculator)

            psm.charge = lookup_column_value(columns, DiaNNSynFileColumns.Charge, column_map, 0)

            protein_name = lookup_column_value(columns, DiaNNSynFileColumns.Protein, column_map)
            if protein_name.strip():
                psm.add_protein(protein_name.strip())

            additional_proteins = lookup_column_value(
                columns, DiaNNSynFileColumns.AdditionalProteins, column_map
            )
            for protein in additional_proteins.split(";"):
                if protein.strip():
                    psm.add_protein(protein.strip())

            precursor_mz = lookup_column_value(
                columns, DiaNNSynFileColumns.PrecursorMZ, column_map, 0.0
            )
            if abs(precursor_mz) > FLOAT_EPSILON:
                psm.precursor_neutral_mass = self.peptide_mass_calculator.convolute_mass(
                    precursor_mz, psm.charge, 0
                )

            psm.mass_error_da = lookup_column_value(
                columns, DiaNNSynFileColumns.DelM, column_map, 0.0
            )
            psm.mass_error_ppm = lookup_column_value(
                columns, DiaNNSynFileColumns.DelM_PPM, column_map, 0.0
            )

            if not fast_read_mode:
                self.update_psm_using_seq_info(psm)

            for score_column in DIANN_SCORE_COLUMNS:
                self.add_score(psm, columns, score_column, column_map)

            return psm, True

        except Exception as e:
            self.report_error(f"Error parsing line {lines_read} in the DIA-NN data file: {e}")
            return psm, False

    # ============================================================================
    # Parameter file
    # ============================================================================

    @staticmethod
    def get_search_engine_parameter_prefix(search_engine_params: SearchEngineParameters) -> str:
        """Parameter names of a FragPipe workflow file start with "msfragger."."""
        parameters = search_engine_params.parameters
        if (
            FRAGPIPE_PARAMETER_PREFIX + PARAM_PRECURSOR_MASS_LOWER in parameters
            or FRAGPIPE_PARAMETER_PREFIX + PARAM_PRECURSOR_MASS_UNITS in parameters
        ):
            return FRAGPIPE_PARAMETER_PREFIX
        return ""

    def load_search_engine_parameters(
        self, search_engine_param_file_name: Union[str, Path]
    ) -> Tuple[SearchEngineParameters, bool]:
        """
        Interpret the DIA-NN parameter file.

        Relative paths are resolved against the directory of the synopsis file.

        Returns:
            The parameters and False if the file could not be read
        """
        search_engine_params = SearchEngineParameters(DIANN_SEARCH_ENGINE_NAME)

        param_file_path = Path(search_engine_param_file_name)
        if not param_file_path.is_absolute():
            param_file_path = self.input_directory_path / param_file_path

        try:
            try:
                read_key_value_param_file(param_file_path, search_engine_params)
            except (OSError, UnicodeDecodeError) as e:
                self.report_error(
                    f"Error reading the {DIANN_SEARCH_ENGINE_NAME} param file {param_file_path.name}: {e}"
                )
                return search_engine_params, False

            prefix = self.get_search_engine_parameter_prefix(search_engine_params)

            self._update_enzyme(search_engine_params, prefix)
            self._update_enzyme_termini(search_engine_params, prefix)

            missed_cleavages = try_parse_int(
                search_engine_params.get_parameter("MissedCleavages", prefix)
            )
            if missed_cleavages is not None:
                search_engine_params.max_number_internal_cleavages = missed_cleavages

            # Stores 0 for both tolerances when they are missing or invalid
            tolerance = self.get_precursor_search_tolerances(search_engine_params, prefix)
            if not tolerance.valid:
                search_engine_params.precursor_mass_tolerance_da = 0.0
                search_engine_params.precursor_mass_tolerance_ppm = 0.0
                return search_engine_params, True

            self.update_precursor_mass_tolerance(
                search_engine_params, tolerance.lower, tolerance.upper, tolerance.ppm_based
            )
            return search_engine_params, True

        except Exception as e:
            self.report_error(f"Error in load_search_engine_parameters: {e}")
            return search_engine_params, False

    def _update_enzyme(self, search_engine_params: SearchEngineParameters, prefix: str) -> None:
        # search_enzyme_name_1 replaced search_enzyme_name in newer versions; both are supported
        enzyme_name = search_engine_params.get_parameter(PARAM_ENZYME_NAME, prefix)
        if enzyme_name is None:
            enzyme_name = search_engine_params.get_parameter(PARAM_ENZYME_NAME_LEGACY, prefix)

        if enzyme_name is None:
            self.report_warning(
                f"The DIA-NN parameter file does not have parameter "
                f"'{PARAM_ENZYME_NAME_LEGACY}' or '{PARAM_ENZYME_NAME}'"
            )
            return

        if not enzyme_name.strip():
            return

        search_engine_params.enzyme = enzyme_name
        if enzyme_name not in KNOWN_ENZYMES:
            self.report_warning(
                f"Unrecognized enzyme '{enzyme_name}' in the DIA-NN parameter file"
            )

    def _update_enzyme_termini(
        self, search_engine_params: SearchEngineParameters, prefix: str
    ) -> None:
        num_termini = search_engine_params.get_parameter(PARAM_NUM_ENZYME_TERMINI, prefix)
        if num_termini is None:
            self.report_warning(
                f"'{PARAM_NUM_ENZYME_TERMINI}' parameter not found in the DIA-NN parameter file"
            )
            return

        if num_termini not in ENZYME_TERMINI_MAP:
            self.report_warning(
                f"Unrecognized value for {PARAM_NUM_ENZYME_TERMINI} in the DIA-NN parameter file: {num_termini}"
            )
            return

        search_engine_params.min_number_termini = ENZYME_TERMINI_MAP[num_termini]

    def get_precursor_search_tolerances(
        self, search_engine_params: SearchEngineParameters, parameter_prefix: str = ""
    ) -> PrecursorSearchTolerance:
        """
        Determine the precursor mass tolerance(s).

        precursor_mass_lower / precursor_mass_upper / precursor_mass_units take
        priority over the legacy precursor_true_tolerance / precursor_true_units.

        Returns:
            Lower and upper tolerance (e.g. -20 and 20), whether they are ppm
            based, whether a single tolerance was defined, and whether the
            parameters were found
        """
        mass_units = try_parse_int(
            search_engine_params.get_parameter(PARAM_PRECURSOR_MASS_UNITS, parameter_prefix)
        )
        mass_lower = try_parse_float(
            search_engine_params.get_parameter(PARAM_PRECURSOR_MASS_LOWER, parameter_prefix)
        )
        mass_upper = try_parse_float(
            search_engine_params.get_parameter(PARAM_PRECURSOR_MASS_UPPER, parameter_prefix)
        )

        if mass_units is not None and mass_lower is not None and mass_upper is not None:
            # Two tolerances, though they may be equivalent
            return PrecursorSearchTolerance(
                lower=mass_lower,
                upper=mass_upper,
                ppm_based=self.mass_tolerance_units_are_ppm(mass_units, PARAM_PRECURSOR_MASS_UNITS),
                single_tolerance=False,
                valid=True,
            )

        true_units = try_parse_int(
            search_engine_params.get_parameter(PARAM_PRECURSOR_TRUE_UNITS, parameter_prefix)
        )
        true_tolerance = try_parse_float(
            search_engine_params.get_parameter(PARAM_PRECURSOR_TRUE_TOLERANCE, parameter_prefix)
        )

        if true_units is not None and true_tolerance is not None:
            return PrecursorSearchTolerance(
                lower=true_tolerance,
                upper=true_tolerance,
                ppm_based=self.mass_tolerance_units_are_ppm(true_units, PARAM_PRECURSOR_TRUE_UNITS),
                single_tolerance=True,
                valid=True,
            )

        return PrecursorSearchTolerance(
            lower=0.0, upper=0.0, ppm_based=False, single_tolerance=True, valid=False
        )

    def mass_tolerance_units_are_ppm(self, mass_tolerance_units: int, parameter_name: str) -> bool:
        if mass_tolerance_units == MASS_TOLERANCE_UNITS_DA:
            return False
        if mass_tolerance_units == MASS_TOLERANCE_UNITS_PPM:
            return True

        self.report_warning(
            f"Unrecognized value for parameter {parameter_name} in the DIA-NN parameter file: {mass_tolerance_units}"
        )
        return False

    @staticmethod
    def update_precursor_mass_tolerance(
        search_engine_params: SearchEngineParameters,
        mass_tolerance_lower: float,
        mass_tolerance_upper: float,
        ppm_based: bool,
    ) -> None:
        """
        Store the precursor tolerance in both Da and ppm.

        Asymmetric tolerances are stored as the mean of their magnitudes. The
        other unit is derived at 2000 Da (ppm to Da) or 1000 Da (Da to ppm).
        """
        if abs(abs(mass_tolerance_lower) - abs(mass_tolerance_upper)) < FLOAT_EPSILON:
            tolerance = abs(mass_tolerance_upper)
        else:
            tolerance = (abs(mass_tolerance_lower) + abs(mass_tolerance_upper)) / 2.0

        if ppm_based:
            search_engine_params.precursor_mass_tolerance_da = ppm_to_mass(
                tolerance, PPM_TO_DA_REFERENCE_MASS
            )
            search_engine_params.precursor_mass_tolerance_ppm = tolerance
        else:
            search_engine_params.precursor_mass_tolerance_da = tolerance
            search_engine_params.precursor_mass_tolerance_ppm = mass_to_ppm(
                tolerance, DA_TO_PPM_REFERENCE_MASS
            )
