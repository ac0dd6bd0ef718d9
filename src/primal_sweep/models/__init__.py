"""RHS model library: kinetics, epidemic, neuron and relaxation models."""

from __future__ import annotations

from primal_sweep.models.base import MODE_HANDLERS, AbstractModel
from primal_sweep.models.fitzhugh_nagumo import FitzHughNagumoModel
from primal_sweep.models.michaelis_menten import MichaelisMentenModel
from primal_sweep.models.nernst import NernstModel
from primal_sweep.models.poiseuille import PoiseuilleModel
from primal_sweep.models.sir import SIRModel

__all__ = [
    "AbstractModel",
    "MODE_HANDLERS",
    "FitzHughNagumoModel",
    "MichaelisMentenModel",
    "NernstModel",
    "PoiseuilleModel",
    "SIRModel",
]
