# centymo/modules/pricelist/__init__.py
"""
Módulo de Listas de Precios

- Listado por estado derivado del flag active
- Detalle con pestañas (basic, prices)
- Precios por producto dentro de cada lista
"""

from .router import router as pricelist_router
from .service import PriceListService
from .repository import PriceListRepository

__all__ = [
    "pricelist_router",
    "PriceListService",
    "PriceListRepository"
]
