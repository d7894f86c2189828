"""
Common constants for psmio.
This module provides the file suffixes, sentinel values and known parameter values shared by the readers.
"""

from typing import FrozenSet

import numpy as np

# Smallest positive single-precision value; used for "is non-zero" and symmetry tests
FLOAT_EPSILON = float(np.finfo(np.float32).smallest_subnormal)

DIANN_SEARCH_ENGINE_NAME = "DIA-NN"

DIANN_FILENAME_SUFFIX_SYN = "_diann_syn.txt"

SCAN_NOT_FOUND_FLAG = -100

# Placeholder returned when a score column is not present in the synopsis file
SCORE_NOT_FOUND = "==SCORE_NOT_FOUND=="

# Reference masses used to express a precursor tolerance in the other unit
PPM_TO_DA_REFERENCE_MASS = 2000.0
DA_TO_PPM_REFERENCE_MASS = 1000.0

MASS_TOLERANCE_UNITS_DA = 0
MASS_TOLERANCE_UNITS_PPM = 1

# Parameter names are prefixed when the parameter file is a FragPipe workflow file
FRAGPIPE_PARAMETER_PREFIX = "msfragger."

PARAM_ENZYME_NAME = "search_enzyme_name_1"
PARAM_ENZYME_NAME_LEGACY = "search_enzyme_name"
PARAM_NUM_ENZYME_TERMINI = "num_enzyme_termini"
PARAM_PRECURSOR_MASS_LOWER = "precursor_mass_lower"
PARAM_PRECURSOR_MASS_UPPER = "precursor_mass_upper"
PARAM_PRECURSOR_MASS_UNITS = "precursor_mass_units"
PARAM_PRECURSOR_TRUE_TOLERANCE = "precursor_true_tolerance"
PARAM_PRECURSOR_TRUE_UNITS = "precursor_true_units"

ENZYME_TERMINI_MAP = {
    "2": 2,  # fully enzymatic
    "1": 1,  # semi enzymatic
    "0": 0,  # non enzymatic
}

KNOWN_ENZYMES: FrozenSet[str] = frozenset(
    [
        "argc",
        "aspn",
        "chymotrypsin",
        "cnbr",
        "elastase",
        "formicacid",
        "gluc",
        "gluc_bicarb",
        "lysc",
        "lysc-p",
        "lysn",
        "lysn_promisc",
        "nonspecific",
        "null",
        "stricttrypsin",
        "thermolysin",
        "trypsin",
        "trypsin/chymotrypsin",
        "trypsin/cnbr",
        "trypsin_gluc",
        "trypsin_k",
        "trypsin_r",
    ]
)

# Sequence info files written next to the synopsis file
SEQ_INFO_COLUMN_UNIQUE_SEQ_ID = "Unique_Seq_ID"
SEQ_INFO_COLUMN_MOD_COUNT = "Mod_Count"
SEQ_INFO_COLUMN_MOD_DESCRIPTION = "Mod_Description"
SEQ_INFO_COLUMN_MONOISOTOPIC_MASS = "Monoisotopic_Mass"
RESULT_TO_SEQ_MAP_COLUMN_RESULT_ID = "Result_ID"
