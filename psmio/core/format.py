import pyarrow as pa

PSM_FIELDS = [
    pa.field(
        "result_id",
        pa.int64(),
        metadata={"description": "Result ID of the PSM in the synopsis file"},
    ),
    pa.field(
        "scan_number",
        pa.int64(),
        metadata={"description": "Scan number of the spectrum"},
    ),
    pa.field(
        "charge",
        pa.int32(),
        metadata={"description": "Precursor charge"},
    ),
    pa.field(
        "peptide",
        pa.string(),
        metadata={
            "description": "Peptide sequence as written in the synopsis file, optionally with prefix and suffix residues"
        },
    ),
    pa.field(
        "peptide_clean_sequence",
        pa.string(),
        metadata={"description": "Peptide sequence without modification symbols"},
    ),
    pa.field(
        "proteins",
        pa.list_(pa.string()),
        metadata={"description": "Protein names, the first one is the primary protein"},
    ),
    pa.field(
        "precursor_neutral_mass",
        pa.float64(),
        metadata={"description": "Neutral mass computed from the precursor m/z"},
    ),
    pa.field(
        "mass_error_da",
        pa.float64(),
        metadata={"description": "Precursor mass error in Daltons"},
    ),
    pa.field(
        "mass_error_ppm",
        pa.float64(),
        metadata={"description": "Precursor mass error in ppm"},
    ),
    pa.field(
        "cleavage_state",
        pa.string(),
        metadata={"description": "Cleavage state: UNKNOWN, NON_SPECIFIC, PARTIAL or FULL"},
    ),
    pa.field(
        "num_missed_cleavages",
        pa.int32(),
        metadata={"description": "Number of missed cleavages"},
    ),
    pa.field(
        "num_tryptic_termini",
        pa.int32(),
        metadata={"description": "Number of tryptic termini (0, 1 or 2)"},
    ),
    pa.field(
        "seq_id",
        pa.int64(),
        metadata={"description": "Unique sequence ID from the ResultToSeqMap file"},
    ),
    pa.field(
        "mod_description",
        pa.string(),
        metadata={"description": "Modification description from the SeqInfo file"},
    ),
    pa.field(
        "peptide_monoisotopic_mass",
        pa.float64(),
        metadata={"description": "Theoretical monoisotopic mass from the SeqInfo file"},
    ),
    pa.field(
        "additional_scores",
        pa.list_(
            pa.struct(
                [
                    pa.field("score_name", pa.string()),
                    pa.field("score_value", pa.string()),
                ]
            )
        ),
        metadata={
            "description": "Auxiliary columns of the synopsis file, stored as raw text"
        },
    ),
]

PSM_SCHEMA = pa.schema(
    PSM_FIELDS,
    metadata={"description": "PSMs parsed from a search engine synopsis file"},
)
