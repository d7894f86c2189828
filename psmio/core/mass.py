"""Mass conversions used by the synopsis file readers."""

import logging
from typing import Optional

from pyopenms.Constants import PROTON_MASS_U

from psmio.core.common import FLOAT_EPSILON

logger = logging.getLogger(__name__)


def ppm_to_mass(ppm_to_convert: float, current_mass: float) -> float:
    """Convert a ppm tolerance into Daltons at the given mass."""
    return ppm_to_convert / 1000000.0 * current_mass


def mass_to_ppm(mass_to_convert: float, current_mz: float) -> float:
    """Convert a Dalton tolerance into ppm at the given m/z."""
    return mass_to_convert * 1000000.0 / current_mz


class PeptideMassCalculator:
    """Converts m/z values between charge states."""

    def __init__(self, charge_carrier_mass: float = PROTON_MASS_U):
        self.charge_carrier_mass = charge_carrier_mass

    def convolute_mass(
        self,
        mass_mz: float,
        current_charge: int,
        desired_charge: int = 1,
        charge_carrier_mass: Optional[float] = None,
    ) -> float:
        """
        Convert an m/z value from one charge state to another.

        A charge of 0 means an uncharged (neutral) mass, so
        ``convolute_mass(mz, charge, 0)`` returns the neutral monoisotopic mass.
        Negative charges are not supported and give 0.

        Args:
            mass_mz: m/z value
            current_charge: Charge of mass_mz
            desired_charge: Charge to convert to
            charge_carrier_mass: Mass of the charge carrier, defaults to the proton mass

        Returns:
            Converted m/z (or neutral mass when desired_charge is 0)
        """
        if charge_carrier_mass is None:
            charge_carrier_mass = self.charge_carrier_mass
        if abs(charge_carrier_mass) < FLOAT_EPSILON:
            charge_carrier_mass = PROTON_MASS_U

        if current_charge == desired_charge:
            return mass_mz

        # First convert to M+H
        if current_charge == 1:
            new_mz = mass_mz
        elif current_charge > 1:
            new_mz = mass_mz * current_charge - charge_carrier_mass * (current_charge - 1)
        elif current_charge == 0:
            new_mz = mass_mz + charge_carrier_mass
        else:
            logger.debug(f"Negative charge {current_charge} is not supported")
            return 0.0

        if desired_charge > 1:
            return (new_mz + charge_carrier_mass * (desired_charge - 1)) / desired_charge
        if desired_charge == 1:
            return new_mz
        if desired_charge == 0:
            return new_mz - charge_carrier_mass

        return 0.0

    def mh_to_monoisotopic_mass(self, mh: float) -> float:
        """Convert an M+H mass to the neutral mass."""
        return self.convolute_mass(mh, 1, 0)

    def monoisotopic_mass_to_mz(self, monoisotopic_mass: float, desired_charge: int) -> float:
        """Convert a neutral mass to the m/z of the given charge."""
        return self.convolute_mass(monoisotopic_mass, 0, desired_charge)
