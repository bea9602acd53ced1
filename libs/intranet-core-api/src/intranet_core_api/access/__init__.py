"""Visibility, authorization and plan gating."""

from intranet_core_api.access.access_service import IntranetAccessService
from intranet_core_api.access.plan_gate import Feature, PlanGate

__all__ = [
    "Feature",
    "IntranetAccessService",
    "PlanGate",
]
