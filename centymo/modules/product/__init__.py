# centymo/modules/product/__init__.py
"""
Módulo de Productos

- Listado por estado (active / inactive)
- Detalle con pestañas (info, variants, attributes, pricing)
- Variantes y atributos asignados desde drawers HTMX
"""

from .router import router as product_router
from .service import ProductService
from .repository import ProductRepository

__all__ = [
    "product_router",
    "ProductService",
    "ProductRepository"
]
