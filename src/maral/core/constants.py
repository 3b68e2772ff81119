"""
Constants shared by the data model and the algorithms.

Covalent radii are single-bond radii in Angstroms from
Cordero et al., Dalton Trans. 2008, 2832-2838.
"""

import numpy as np

# Numeric type of stored coordinates
COORD_DTYPE = np.float64

# Proximity bonding (connect)
DEFAULT_BOND_TOLERANCE = 0.45
SORT_AXIS = 2  # z

# Axis names for per-axis access
AXES = {"x": 0, "y": 1, "z": 2}

# Element symbols indexed by atomic number (index 0 is a placeholder)
ELEMENTS = [
    "X",
    "H", "He",
    "Li", "Be", "B", "C", "N", "O", "F", "Ne",
    "Na", "Mg", "Al", "Si", "P", "S", "Cl", "Ar",
    "K", "Ca", "Sc", "Ti", "V", "Cr", "Mn", "Fe", "Co", "Ni", "Cu", "Zn",
    "Ga", "Ge", "As", "Se", "Br", "Kr",
    "Rb", "Sr", "Y", "Zr", "Nb", "Mo", "Tc", "Ru", "Rh", "Pd", "Ag", "Cd",
    "In", "Sn", "Sb", "Te", "I", "Xe",
    "Cs", "Ba", "La", "Ce", "Pr", "Nd", "Pm", "Sm", "Eu", "Gd", "Tb", "Dy",
    "Ho", "Er", "Tm", "Yb", "Lu", "Hf", "Ta", "W", "Re", "Os", "Ir", "Pt",
    "Au", "Hg", "Tl", "Pb", "Bi", "Po", "At", "Rn",
]

ATOMIC_NUMBERS = {symbol.upper(): z for z, symbol in enumerate(ELEMENTS) if z > 0}

COVALENT_RADII = {
    1: 0.31, 2: 0.28,
    3: 1.28, 4: 0.96, 5: 0.84, 6: 0.76, 7: 0.71, 8: 0.66, 9: 0.57, 10: 0.58,
    11: 1.66, 12: 1.41, 13: 1.21, 14: 1.11, 15: 1.07, 16: 1.05, 17: 1.02, 18: 1.06,
    19: 2.03, 20: 1.76, 21: 1.70, 22: 1.60, 23: 1.53, 24: 1.39, 25: 1.39,
    26: 1.32, 27: 1.26, 28: 1.24, 29: 1.32, 30: 1.22,
    31: 1.22, 32: 1.20, 33: 1.19, 34: 1.20, 35: 1.20, 36: 1.16,
    37: 2.20, 38: 1.95, 39: 1.90, 40: 1.75, 41: 1.64, 42: 1.54, 43: 1.47,
    44: 1.46, 45: 1.42, 46: 1.39, 47: 1.45, 48: 1.44,
    49: 1.42, 50: 1.39, 51: 1.39, 52: 1.38, 53: 1.39, 54: 1.40,
    55: 2.44, 56: 2.15, 57: 2.07, 72: 1.75, 73: 1.70, 74: 1.62, 75: 1.51,
    76: 1.44, 77: 1.41, 78: 1.36, 79: 1.36, 80: 1.32,
    81: 1.45, 82: 1.46, 83: 1.48, 84: 1.40, 85: 1.50, 86: 1.50,
}

# Radius used for elements missing from the table
DEFAULT_COVALENT_RADIUS = 1.50


def get_atomic_number(symbol: str) -> int:
    """
    Get the atomic number for an element symbol.

    Args:
        symbol: Element symbol, case-insensitive (e.g., "C", "FE", "Fe")

    Returns:
        Atomic number, or 0 if the symbol is unknown
    """
    return ATOMIC_NUMBERS.get(symbol.strip().upper(), 0)


def get_element_symbol(atomic_number: int) -> str:
    """Get the element symbol for an atomic number ("X" if unknown)."""
    if 0 < atomic_number < len(ELEMENTS):
        return ELEMENTS[atomic_number]
    return "X"


def get_covalent_radius(atomic_number: int) -> float:
    """Covalent radius in Angstroms for an atomic number."""
    return COVALENT_RADII.get(atomic_number, DEFAULT_COVALENT_RADIUS)
