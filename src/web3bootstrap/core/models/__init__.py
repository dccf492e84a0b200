"""
Domain models for the bootstrapper.

All models are re-exported here for convenient access:

    from web3bootstrap.core.models import Step, ExecutionResult, BootstrapConfig
"""

from web3bootstrap.core.models.config import BootstrapConfig
from web3bootstrap.core.models.result import BootstrapReport, ExecutionResult
from web3bootstrap.core.models.step import (
    UNKNOWN_VERSION,
    Command,
    Detection,
    FailurePolicy,
    InstallPlan,
    Probe,
    RunPolicy,
    Step,
)

__all__ = [
    # config.py
    "BootstrapConfig",
    # result.py
    "BootstrapReport",
    "ExecutionResult",
    # step.py
    "Command",
    "Detection",
    "FailurePolicy",
    "InstallPlan",
    "Probe",
    "RunPolicy",
    "Step",
    "UNKNOWN_VERSION",
]
