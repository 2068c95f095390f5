# centymo/modules/sales/__init__.py
"""
Módulo de Ventas (revenue)

- Listado por estado y detalle con pestañas (info, items, payment, audit)
- Alta, edición, borrado y cambios de estado (individuales y en bulk)
- Line items, descuentos y pagos de cada venta
- Efectos sobre inventario: completar descuenta stock, cancelar libera seriales

Arquitectura:
- router.py: Endpoints FastAPI (páginas /app y acciones /action)
- service.py: Reglas de negocio y view models
- repository.py: Acceso al DataSource
- schemas.py: Modelos Pydantic de formularios y páginas
"""

from .router import router as sales_router
from .service import SalesService
from .repository import SalesRepository

__all__ = [
    "sales_router",
    "SalesService",
    "SalesRepository"
]
