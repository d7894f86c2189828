"""
Cleavage state of peptides written as ``prefix.SEQUENCE.suffix``, e.g. ``K.PEPTIDER.A``.
Only the trypsin rule (cleave after K or R, not before P) is implemented.
"""

import re
from enum import Enum
from typing import Tuple

TERMINUS_SYMBOL_SEQUEST = "-"
TERMINUS_SYMBOL_XTANDEM_NTERMINUS = "["
TERMINUS_SYMBOL_XTANDEM_CTERMINUS = "]"

TERMINUS_SYMBOLS = frozenset(
    [
        TERMINUS_SYMBOL_SEQUEST,
        TERMINUS_SYMBOL_XTANDEM_NTERMINUS,
        TERMINUS_SYMBOL_XTANDEM_CTERMINUS,
    ]
)

NOT_LETTER_REGEX = re.compile(r"[^A-Za-z]")


class PeptideCleavageState(Enum):
    UNKNOWN = -1
    NON_SPECIFIC = 0
    PARTIAL = 1
    FULL = 2


class PeptideTerminusState(Enum):
    NONE = 0
    PROTEIN_N_TERMINUS = 1
    PROTEIN_C_TERMINUS = 2
    PROTEIN_N_AND_C_TERMINUS = 3


def _is_letter(ch: str) -> bool:
    return "A" <= ch <= "Z"


def split_prefix_and_suffix_from_sequence(sequence: str) -> Tuple[bool, str, str, str]:
    """
    Split ``K.PEPTIDE.G`` into its primary sequence, prefix and suffix.

    Returns:
        Tuple of (split found, primary sequence, prefix, suffix); when no split
        is found the primary sequence is the input unchanged
    """
    if not sequence:
        return False, "", "", ""

    if sequence.startswith("..") and len(sequence) > 2:
        sequence = "." + sequence[2:]
    if sequence.endswith("..") and len(sequence) > 2:
        sequence = sequence[:-2] + "."

    period_loc1 = sequence.find(".")
    if period_loc1 < 0:
        return False, sequence, "", ""

    period_loc2 = sequence.rfind(".")

    if period_loc2 > period_loc1 + 1:
        # Two periods with residues in between, e.g. R.PEPTIDEK.L or RPEP.TIDESEQK.L
        return (
            True,
            sequence[period_loc1 + 1 : period_loc2],
            sequence[:period_loc1],
            sequence[period_loc2 + 1 :],
        )

    if period_loc2 == period_loc1 + 1:
        if period_loc1 <= 1:
            return True, "", sequence[:period_loc1], sequence[period_loc2 + 1 :]
        return False, sequence, "", ""

    # Only one period
    if period_loc1 == 0:
        return True, sequence[1:], "", ""
    if period_loc1 == len(sequence) - 1:
        return True, sequence[:period_loc1], "", ""
    if period_loc1 == 1 and len(sequence) > 2:
        return True, sequence[period_loc1 + 1 :], sequence[:period_loc1], ""
    if period_loc1 == len(sequence) - 2:
        return True, sequence[:period_loc1], "", sequence[period_loc1 + 1 :]

    return False, sequence, "", ""


def extract_clean_sequence(sequence_with_mods: str, check_for_prefix_and_suffix: bool = True) -> str:
    """Remove modification symbols and, optionally, the prefix and suffix residues."""
    if sequence_with_mods is None:
        return ""

    if check_for_prefix_and_suffix:
        found, primary, _, _ = split_prefix_and_suffix_from_sequence(sequence_with_mods)
        if found:
            return NOT_LETTER_REGEX.sub("", primary)

    return NOT_LETTER_REGEX.sub("", sequence_with_mods)


class PeptideCleavageStateCalculator:
    """Computes the cleavage state and missed cleavages of tryptic peptides."""

    def test_cleavage_rule(self, left_char: str, right_char: str) -> bool:
        return left_char in ("K", "R") and right_char != "P"

    def compute_terminus_state(self, prefix: str, suffix: str) -> PeptideTerminusState:
        if prefix in TERMINUS_SYMBOLS:
            if suffix in TERMINUS_SYMBOLS:
                return PeptideTerminusState.PROTEIN_N_AND_C_TERMINUS
            return PeptideTerminusState.PROTEIN_N_TERMINUS
        if suffix in TERMINUS_SYMBOLS:
            return PeptideTerminusState.PROTEIN_C_TERMINUS
        return PeptideTerminusState.NONE

    def compute_cleavage_state(self, sequence_with_prefix_and_suffix: str) -> PeptideCleavageState:
        found, primary, prefix_residues, suffix_residues = split_prefix_and_suffix_from_sequence(
            sequence_with_prefix_and_suffix
        )
        if not found or not primary:
            return PeptideCleavageState.NON_SPECIFIC

        prefix = self._find_letter_nearest_end(prefix_residues)
        suffix = self._find_letter_nearest_start(suffix_residues)
        sequence_start = self._find_letter_nearest_start(primary)
        sequence_end = self._find_letter_nearest_end(primary)

        terminus_state = self.compute_terminus_state(prefix, suffix)

        if terminus_state == PeptideTerminusState.PROTEIN_N_AND_C_TERMINUS:
            return PeptideCleavageState.FULL

        # Peptides at a protein terminus are either fully tryptic or non-tryptic
        if terminus_state == PeptideTerminusState.PROTEIN_N_TERMINUS:
            if self.test_cleavage_rule(sequence_end, suffix):
                return PeptideCleavageState.FULL
            return PeptideCleavageState.NON_SPECIFIC

        if terminus_state == PeptideTerminusState.PROTEIN_C_TERMINUS:
            if self.test_cleavage_rule(prefix, sequence_start):
                return PeptideCleavageState.FULL
            return PeptideCleavageState.NON_SPECIFIC

        rule_match_start = self.test_cleavage_rule(prefix, sequence_start)
        rule_match_end = self.test_cleavage_rule(sequence_end, suffix)

        if rule_match_start and rule_match_end:
            return PeptideCleavageState.FULL
        if rule_match_start or rule_match_end:
            return PeptideCleavageState.PARTIAL
        return PeptideCleavageState.NON_SPECIFIC

    def compute_number_of_missed_cleavages(self, sequence_with_prefix_and_suffix: str) -> int:
        found, primary, _, _ = split_prefix_and_suffix_from_sequence(sequence_with_prefix_and_suffix)
        if not found or not primary.strip():
            return 0

        missed_cleavages = 0
        previous_letter = ""
        for ch in primary:
            if not _is_letter(ch):
                continue
            if previous_letter and self.test_cleavage_rule(previous_letter, ch):
                missed_cleavages += 1
            previous_letter = ch

        return missed_cleavages

    def _find_letter_nearest_end(self, text: str) -> str:
        if not text:
            return TERMINUS_SYMBOL_SEQUEST

        index = len(text) - 1
        ch = text[index]
        while not (_is_letter(ch) or ch in TERMINUS_SYMBOLS) and index > 0:
            index -= 1
            ch = text[index]
        return ch

    def _find_letter_nearest_start(self, text: str) -> str:
        if not text:
            return TERMINUS_SYMBOL_SEQUEST

        index = 0
        ch = text[index]
        while not (_is_letter(ch) or ch in TERMINUS_SYMBOLS) and index < len(text) - 1:
            index += 1
            ch = text[index]
        return ch
