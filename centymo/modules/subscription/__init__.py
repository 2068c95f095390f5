# centymo/modules/subscription/__init__.py
"""Módulo de Suscripciones"""

from .router import router as subscription_router
from .service import SubscriptionService
from .repository import SubscriptionRepository

__all__ = [
    "subscription_router",
    "SubscriptionService",
    "SubscriptionRepository"
]
