"""primal-sweep: RK4 integration of ODE models under Primal Logic perturbations."""

from __future__ import annotations

# Version info
__version__ = "1.0.0"

from primal_sweep.core import (
    integrate,
    rk4,
    rk4_step,
    rk4_trajectory,
    rk4_warp,
    rk4_warp_trajectory,
)
from primal_sweep.exceptions import (
    ConfigurationError,
    PrimalSweepError,
    RegistryError,
    ResultSinkError,
    SolverError,
    ValidationError,
)
from primal_sweep.models import (
    AbstractModel,
    FitzHughNagumoModel,
    MichaelisMentenModel,
    NernstModel,
    PoiseuilleModel,
    SIRModel,
)
from primal_sweep.perturbation import (
    PerturbationConfig,
    PerturbationMode,
    control,
    modulation,
    residual,
    time_warp,
)
from primal_sweep.sweep import ResultSink, SweepDriver, read_results, run_sweep
from primal_sweep.utils import MODEL_REGISTRY, Registry
from primal_sweep.utils.config import SweepConfig, load_config
from primal_sweep.utils.logging import JSONFormatter, RunTracer, setup_logging

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "PrimalSweepError",
    "SolverError",
    "ValidationError",
    "ConfigurationError",
    "RegistryError",
    "ResultSinkError",
    # Integrators
    "rk4_step",
    "rk4",
    "rk4_warp",
    "integrate",
    "rk4_trajectory",
    "rk4_warp_trajectory",
    # Perturbation layer
    "PerturbationConfig",
    "PerturbationMode",
    "residual",
    "modulation",
    "control",
    "time_warp",
    # Models
    "AbstractModel",
    "FitzHughNagumoModel",
    "MichaelisMentenModel",
    "NernstModel",
    "PoiseuilleModel",
    "SIRModel",
    # Sweep
    "SweepDriver",
    "ResultSink",
    "run_sweep",
    "read_results",
    # Configuration
    "SweepConfig",
    "load_config",
    # Registry System
    "Registry",
    "MODEL_REGISTRY",
    # Logging
    "JSONFormatter",
    "RunTracer",
    "setup_logging",
]
