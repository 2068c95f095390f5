# centymo/modules/plan/__init__.py
"""Módulo de Planes de facturación"""

from .router import router as plan_router
from .service import PlanService
from .repository import PlanRepository

__all__ = [
    "plan_router",
    "PlanService",
    "PlanRepository"
]
