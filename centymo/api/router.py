# centymo/api/router.py
from fastapi import APIRouter

from centymo.modules.inventory import inventory_router
from centymo.modules.sales import sales_router
from centymo.modules.product import product_router
from centymo.modules.pricelist import pricelist_router
from centymo.modules.paymentcollection import paymentcollection_router
from centymo.modules.plan import plan_router
from centymo.modules.subscription import subscription_router

# Router principal: los módulos declaran rutas completas (/app/... y /action/...)
app_router = APIRouter()

# ==================== OPERACIONES ====================

app_router.include_router(inventory_router)
app_router.include_router(sales_router)

# ==================== CATÁLOGO ====================

app_router.include_router(product_router)
app_router.include_router(pricelist_router)

# ==================== FACTURACIÓN ====================

app_router.include_router(paymentcollection_router)
app_router.include_router(plan_router)
app_router.include_router(subscription_router)
