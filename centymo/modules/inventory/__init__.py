# centymo/modules/inventory/__init__.py
"""
Módulo de Inventario

- Listado por ubicación con alertas de reorden
- Detalle con pestañas (info, atributos, seriales, movimientos, depreciación, auditoría)
- Dashboard con widgets y fragmentos HTMX
- Movimientos de stock de todas las ubicaciones
"""

from .router import router as inventory_router
from .service import InventoryService
from .repository import InventoryRepository

__all__ = [
    "inventory_router",
    "InventoryService",
    "InventoryRepository"
]
