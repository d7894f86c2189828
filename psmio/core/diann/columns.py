"""
Columns of the DIA-NN synopsis file.

The header names are a published contract with downstream tools: never rename
an existing entry.
"""

from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Sequence


class DiaNNSynFileColumns(Enum):
    ResultID = 0
    Dataset = 1
    DatasetID = 2
    Scan = 3
    Charge = 4
    PrecursorMZ = 5
    DelM = 6
    DelM_PPM = 7
    DelM_DiaNN = 8
    MH = 9
    Mass = 10
    Peptide = 11
    Modifications = 12
    Protein = 13
    AdditionalProteins = 14
    NTT = 15
    EValue = 16
    RankEValue = 17
    Hyperscore = 18
    Nextscore = 19
    PeptideProphetProbability = 20
    ElutionTime = 21
    ElutionTimeAverage = 22
    MissedCleavages = 23
    NumberOfMatchedIons = 24
    TotalNumberOfIons = 25
    QValue = 26


DIANN_SYN_COLUMNS: Mapping[DiaNNSynFileColumns, str] = MappingProxyType(
    {
        DiaNNSynFileColumns.ResultID: "ResultID",
        DiaNNSynFileColumns.Dataset: "Dataset",
        DiaNNSynFileColumns.DatasetID: "DatasetID",
        DiaNNSynFileColumns.Scan: "Scan",
        DiaNNSynFileColumns.Charge: "Charge",
        DiaNNSynFileColumns.PrecursorMZ: "PrecursorMZ",
        DiaNNSynFileColumns.DelM: "DelM",
        DiaNNSynFileColumns.DelM_PPM: "DelM_PPM",
        DiaNNSynFileColumns.DelM_DiaNN: "DelM_DiaNN",
        DiaNNSynFileColumns.MH: "MH",
        DiaNNSynFileColumns.Mass: "Mass",
        DiaNNSynFileColumns.Peptide: "Peptide",
        DiaNNSynFileColumns.Modifications: "Modifications",
        DiaNNSynFileColumns.Protein: "Protein",
        DiaNNSynFileColumns.AdditionalProteins: "AdditionalProteins",
        DiaNNSynFileColumns.NTT: "NTT",
        DiaNNSynFileColumns.EValue: "EValue",
        DiaNNSynFileColumns.RankEValue: "Rank_EValue",
        DiaNNSynFileColumns.Hyperscore: "Hyperscore",
        DiaNNSynFileColumns.Nextscore: "Nextscore",
        DiaNNSynFileColumns.PeptideProphetProbability: "PeptideProphetProbability",
        DiaNNSynFileColumns.ElutionTime: "ElutionTime",
        DiaNNSynFileColumns.ElutionTimeAverage: "ElutionTimeAverage",
        DiaNNSynFileColumns.MissedCleavages: "MissedCleavages",
        DiaNNSynFileColumns.NumberOfMatchedIons: "MatchedIons",
        DiaNNSynFileColumns.TotalNumberOfIons: "TotalIons",
        DiaNNSynFileColumns.QValue: "QValue",
    }
)

# Lower-cased header name to column, for case-insensitive header matching
_HEADER_LOOKUP: Mapping[str, DiaNNSynFileColumns] = MappingProxyType(
    {header.lower(): column for column, header in DIANN_SYN_COLUMNS.items()}
)

# Columns copied verbatim into PSM.additional_scores, in output order
DIANN_SCORE_COLUMNS = (
    DiaNNSynFileColumns.Dataset,
    DiaNNSynFileColumns.DatasetID,
    DiaNNSynFileColumns.DelM_DiaNN,
    DiaNNSynFileColumns.MH,
    DiaNNSynFileColumns.Mass,
    DiaNNSynFileColumns.Modifications,
    DiaNNSynFileColumns.NTT,
    DiaNNSynFileColumns.EValue,
    DiaNNSynFileColumns.Hyperscore,
    DiaNNSynFileColumns.Nextscore,
    DiaNNSynFileColumns.PeptideProphetProbability,
    DiaNNSynFileColumns.ElutionTime,
    DiaNNSynFileColumns.ElutionTimeAverage,
    DiaNNSynFileColumns.MissedCleavages,
    DiaNNSynFileColumns.NumberOfMatchedIons,
    DiaNNSynFileColumns.TotalNumberOfIons,
    DiaNNSynFileColumns.QValue,
)


def default_schema() -> Mapping[DiaNNSynFileColumns, str]:
    """Canonical column to header name table, in file order."""
    return DIANN_SYN_COLUMNS


def header_string_for(column: DiaNNSynFileColumns) -> str:
    """
    Header name of the given column.

    Raises:
        KeyError: If the column is not part of the schema
    """
    return DIANN_SYN_COLUMNS[column]


def resolve_header(header_fields: Sequence[str]) -> Dict[DiaNNSynFileColumns, int]:
    """
    Map each known column to its 0-based position in header_fields.

    Names are compared case-insensitively. Unknown header names are ignored,
    columns missing from the header are absent from the result, and a header
    name present more than once keeps its first position.
    """
    column_map = {}
    for index, header_name in enumerate(header_fields):
        column = _HEADER_LOOKUP.get(header_name.strip().lower())
        if column is None or column in column_map:
            continue
        column_map[column] = index
    return column_map
