"""
Static data — the step registry.

Pure data.  No logic beyond selection helpers.
"""

from web3bootstrap.core.data.recipes import (  # noqa: F401
    TOOL_RECIPES,
    default_registry,
    select_steps,
    step_names,
)
