"""
Loaders for the ResultToSeqMap and SeqInfo files written next to a synopsis file.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Union

import pandas as pd

from psmio.core.common import (
    RESULT_TO_SEQ_MAP_COLUMN_RESULT_ID,
    SEQ_INFO_COLUMN_MOD_COUNT,
    SEQ_INFO_COLUMN_MOD_DESCRIPTION,
    SEQ_INFO_COLUMN_MONOISOTOPIC_MASS,
    SEQ_INFO_COLUMN_UNIQUE_SEQ_ID,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SequenceInfo:
    seq_id: int
    monoisotopic_mass: float
    mod_count: int
    mod_description: str


def _read_table(file_path: Union[str, Path]) -> pd.DataFrame:
    df = pd.read_csv(file_path, sep="\t", dtype=str, keep_default_na=False)
    # Header names are matched case-insensitively
    df.columns = [c.strip() for c in df.columns]
    return df.rename(columns={c: c.lower() for c in df.columns})


def load_result_to_seq_map(file_path: Union[str, Path]) -> Dict[int, int]:
    """Load the ResultToSeqMap file as a result ID to unique sequence ID dictionary."""
    df = _read_table(file_path)
    result_col = RESULT_TO_SEQ_MAP_COLUMN_RESULT_ID.lower()
    seq_col = SEQ_INFO_COLUMN_UNIQUE_SEQ_ID.lower()
    if result_col not in df.columns or seq_col not in df.columns:
        raise ValueError(f"Unexpected header in {Path(file_path).name}")

    result_ids = pd.to_numeric(df[result_col], errors="coerce")
    seq_ids = pd.to_numeric(df[seq_col], errors="coerce")
    valid = result_ids.notna() & seq_ids.notna()

    result_to_seq = {}
    for result_id, seq_id in zip(result_ids[valid], seq_ids[valid]):
        result_to_seq.setdefault(int(result_id), int(seq_id))

    logger.debug(f"Loaded {len(result_to_seq)} entries from {Path(file_path).name}")
    return result_to_seq


def load_seq_info(file_path: Union[str, Path]) -> Dict[int, SequenceInfo]:
    """Load the SeqInfo file keyed by unique sequence ID; the first entry of an ID wins."""
    df = _read_table(file_path)
    seq_col = SEQ_INFO_COLUMN_UNIQUE_SEQ_ID.lower()
    if seq_col not in df.columns:
        raise ValueError(f"Unexpected header in {Path(file_path).name}")

    seq_ids = pd.to_numeric(df[seq_col], errors="coerce")
    mod_counts = _numeric_column(df, SEQ_INFO_COLUMN_MOD_COUNT).astype(int)
    masses = _numeric_column(df, SEQ_INFO_COLUMN_MONOISOTOPIC_MASS)
    descriptions = df.get(
        SEQ_INFO_COLUMN_MOD_DESCRIPTION.lower(), pd.Series([""] * len(df), index=df.index)
    )

    seq_info = {}
    for i in df.index[seq_ids.notna()]:
        seq_id = int(seq_ids[i])
        if seq_id in seq_info:
            continue
        seq_info[seq_id] = SequenceInfo(
            seq_id=seq_id,
            monoisotopic_mass=float(masses[i]),
            mod_count=int(mod_counts[i]),
            mod_description=descriptions[i],
        )

    logger.debug(f"Loaded {len(seq_info)} sequences from {Path(file_path).name}")
    return seq_info


def _numeric_column(df: pd.DataFrame, name: str) -> pd.Series:
    if name.lower() not in df.columns:
        return pd.Series([0] * len(df), index=df.index)
    return pd.to_numeric(df[name.lower()], errors="coerce").fillna(0)
