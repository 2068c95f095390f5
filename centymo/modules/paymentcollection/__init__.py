# centymo/modules/paymentcollection/__init__.py
"""
Módulo de Cobros (payment collections)

Listado por estado: pending, completed, failed
"""

from .router import router as paymentcollection_router
from .service import PaymentCollectionService
from .repository import PaymentCollectionRepository

__all__ = [
    "paymentcollection_router",
    "PaymentCollectionService",
    "PaymentCollectionRepository"
]
