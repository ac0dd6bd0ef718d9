"""Physical constants used across primal-sweep."""

from __future__ import annotations

# Universal gas constant (J/(mol*K))
R_GAS: float = 8.314462618

# Faraday constant (C/mol)
FARADAY: float = 96485.33212

# First-order relaxation rates of the relaxation models (1/s)
NERNST_RELAXATION_RATE: float = 10.0
POISEUILLE_RELAXATION_RATE: float = 5.0

__all__ = ["R_GAS", "FARADAY", "NERNST_RELAXATION_RATE", "POISEUILLE_RELAXATION_RATE"]
