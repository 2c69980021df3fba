"""API Container (composition root state holder).

This module only defines the structure of objects created in the real
composition root (`src/interfaces/api/main.py`).
"""

from __future__ import annotations

from dataclasses import dataclass

from src.domain.ports.dynamic_node_parameters_service import DynamicNodeParametersService
from src.domain.ports.execution_context_builder import ExecutionContextBuilder


@dataclass(frozen=True, slots=True)
class ApiContainer:
    """Typed container attached to `app.state.container`."""

    dynamic_node_parameters_service: DynamicNodeParametersService
    execution_context_builder: ExecutionContextBuilder
