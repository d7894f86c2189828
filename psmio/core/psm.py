"""PSM (peptide-spectrum match) record and its tabular exports."""

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

import pandas as pd

from psmio.core.cleavage import (
    PeptideCleavageState,
    PeptideCleavageStateCalculator,
    extract_clean_sequence,
)
from psmio.core.format import PSM_SCHEMA
from psmio.utils.file_utils import ParquetBatchWriter

logger = logging.getLogger(__name__)


@dataclass
class PSM:
    """One parsed line of a synopsis file."""

    result_id: int = 0
    scan_number: int = 0
    charge: int = 0
    score_rank: int = 0
    peptide: str = ""
    peptide_clean_sequence: str = ""
    proteins: List[str] = field(default_factory=list)
    precursor_neutral_mass: float = 0.0
    mass_error_da: float = 0.0
    mass_error_ppm: float = 0.0
    cleavage_state: PeptideCleavageState = PeptideCleavageState.UNKNOWN
    num_missed_cleavages: int = 0
    num_tryptic_termini: int = 0
    seq_id: Optional[int] = None
    mod_description: str = ""
    peptide_monoisotopic_mass: float = 0.0
    data_line_text: str = ""
    additional_scores: "OrderedDict[str, str]" = field(default_factory=OrderedDict)

    def add_protein(self, protein_name: str) -> None:
        """Append a protein; blank names are ignored and duplicates are kept."""
        if protein_name and protein_name.strip():
            self.proteins.append(protein_name)

    @property
    def protein_first(self) -> str:
        return self.proteins[0] if self.proteins else ""

    def set_peptide(self, peptide: str, update_clean_sequence: bool = True) -> None:
        """Store the peptide; when requested also derive the clean sequence."""
        self.peptide = peptide or ""
        if update_clean_sequence:
            self.update_clean_sequence()

    def set_peptide_with_cleavage_info(
        self, peptide: str, cleavage_state_calculator: PeptideCleavageStateCalculator
    ) -> None:
        self.set_peptide(peptide)
        self.update_cleavage_info(cleavage_state_calculator)

    def update_clean_sequence(self) -> None:
        self.peptide_clean_sequence = (
            extract_clean_sequence(self.peptide, True) if self.peptide else ""
        )

    def update_cleavage_info(
        self, cleavage_state_calculator: PeptideCleavageStateCalculator
    ) -> None:
        self.num_missed_cleavages = (
            cleavage_state_calculator.compute_number_of_missed_cleavages(self.peptide)
        )
        self.cleavage_state = cleavage_state_calculator.compute_cleavage_state(
            self.peptide
        )

        if self.cleavage_state == PeptideCleavageState.FULL:
            self.num_tryptic_termini = 2
        elif self.cleavage_state == PeptideCleavageState.PARTIAL:
            self.num_tryptic_termini = 1
        else:
            self.num_tryptic_termini = 0

    def set_score(self, score_name: str, score_value: str) -> None:
        self.additional_scores[score_name] = score_value

    def get_score(self, score_name: str, default: Optional[str] = None) -> Optional[str]:
        return self.additional_scores.get(score_name, default)

    def to_record(self) -> dict:
        """Flatten the PSM into a dictionary matching PSM_SCHEMA."""
        return {
            "result_id": self.result_id,
            "scan_number": self.scan_number,
            "charge": self.charge,
            "peptide": self.peptide,
            "peptide_clean_sequence": self.peptide_clean_sequence,
            "proteins": list(self.proteins),
            "precursor_neutral_mass": self.precursor_neutral_mass,
            "mass_error_da": self.mass_error_da,
            "mass_error_ppm": self.mass_error_ppm,
            "cleavage_state": self.cleavage_state.name,
            "num_missed_cleavages": self.num_missed_cleavages,
            "num_tryptic_termini": self.num_tryptic_termini,
            "seq_id": self.seq_id,
            "mod_description": self.mod_description,
            "peptide_monoisotopic_mass": self.peptide_monoisotopic_mass,
            "additional_scores": [
                {"score_name": name, "score_value": value}
                for name, value in self.additional_scores.items()
            ],
        }


def psms_to_dataframe(psms: Iterable[PSM]) -> pd.DataFrame:
    """Build a DataFrame with one row per PSM; each additional score becomes a column."""
    rows = []
    for psm in psms:
        row = psm.to_record()
        row.pop("additional_scores")
        for name, value in psm.additional_scores.items():
            row[name] = value
        rows.append(row)

    columns = [f.name for f in PSM_SCHEMA if f.name != "additional_scores"]
    df = pd.DataFrame(rows)
    if df.empty:
        return pd.DataFrame(columns=columns)
    return df


def write_psms_to_parquet(
    psms: Iterable[PSM], output_path: str, batch_size: int = 10000
) -> int:
    """
    Write PSMs to a parquet file using PSM_SCHEMA.

    Returns:
        Number of PSMs written
    """
    writer = ParquetBatchWriter(output_path, PSM_SCHEMA, batch_size=batch_size)
    count = 0
    try:
        for psm in psms:
            writer.write_batch([psm.to_record()])
            count += 1
    finally:
        writer.close()

    logger.info(f"Wrote {count} PSMs to {output_path}")
    return count
