# Rutas del back-office.
# /app/...    páginas de lectura
# /action/... acciones que modifican datos (drawers HTMX, bulk, tabs parciales)

# ==================== INVENTORY ====================

INVENTORY_LIST_URL = "/app/inventory/list/{location}"
INVENTORY_DETAIL_URL = "/app/inventory/detail/{id}"
INVENTORY_DASHBOARD_URL = "/app/inventory/dashboard"
INVENTORY_MOVEMENTS_URL = "/app/inventory/movements"

INVENTORY_TAB_ACTION_URL = "/action/inventory/detail/{id}/tab/{tab}"
INVENTORY_DASHBOARD_PARTIAL_URL = "/action/inventory/dashboard/{partial}"
INVENTORY_ADD_URL = "/action/inventory/add"
INVENTORY_EDIT_URL = "/action/inventory/edit/{id}"
INVENTORY_DELETE_URL = "/action/inventory/delete"
INVENTORY_BULK_DELETE_URL = "/action/inventory/bulk-delete"
INVENTORY_SET_STATUS_URL = "/action/inventory/set-status"
INVENTORY_BULK_SET_STATUS_URL = "/action/inventory/bulk-set-status"

INVENTORY_SERIAL_TABLE_URL = "/action/inventory/detail/{id}/serials/table"
INVENTORY_SERIAL_ASSIGN_URL = "/action/inventory/detail/{id}/serials/assign"
INVENTORY_SERIAL_EDIT_URL = "/action/inventory/detail/{id}/serials/edit/{sid}"
INVENTORY_SERIAL_REMOVE_URL = "/action/inventory/detail/{id}/serials/remove"

INVENTORY_TRANSACTION_TABLE_URL = "/action/inventory/detail/{id}/transactions/table"
INVENTORY_TRANSACTION_ASSIGN_URL = "/action/inventory/detail/{id}/transactions/assign"

INVENTORY_DEPRECIATION_ASSIGN_URL = "/action/inventory/detail/{id}/depreciation/assign"
INVENTORY_DEPRECIATION_EDIT_URL = "/action/inventory/detail/{id}/depreciation/edit/{did}"

# ==================== SALES ====================

SALES_LIST_URL = "/app/sales/list/{status}"
SALES_DETAIL_URL = "/app/sales/detail/{id}"

SALES_TAB_ACTION_URL = "/action/sales/detail/{id}/tab/{tab}"
SALES_ADD_URL = "/action/sales/add"
SALES_EDIT_URL = "/action/sales/edit/{id}"
SALES_DELETE_URL = "/action/sales/delete"
SALES_BULK_DELETE_URL = "/action/sales/bulk-delete"
SALES_SET_STATUS_URL = "/action/sales/set-status"
SALES_BULK_SET_STATUS_URL = "/action/sales/bulk-set-status"

SALES_LINE_ITEM_TABLE_URL = "/action/sales/detail/{id}/items/table"
SALES_LINE_ITEM_ADD_URL = "/action/sales/detail/{id}/items/add"
SALES_LINE_ITEM_EDIT_URL = "/action/sales/detail/{id}/items/edit/{item_id}"
SALES_LINE_ITEM_REMOVE_URL = "/action/sales/detail/{id}/items/remove"
SALES_LINE_ITEM_DISCOUNT_URL = "/action/sales/detail/{id}/items/add-discount"

SALES_PAYMENT_TABLE_URL = "/action/sales/detail/{id}/payment/table"
SALES_PAYMENT_ADD_URL = "/action/sales/detail/{id}/payment/add"
SALES_PAYMENT_EDIT_URL = "/action/sales/detail/{id}/payment/edit/{payment_id}"
SALES_PAYMENT_REMOVE_URL = "/action/sales/detail/{id}/payment/remove"

# ==================== PRODUCTS ====================

PRODUCT_LIST_URL = "/app/products/list/{status}"
PRODUCT_DETAIL_URL = "/app/products/detail/{id}"

PRODUCT_TAB_ACTION_URL = "/action/products/detail/{id}/tab/{tab}"
PRODUCT_ADD_URL = "/action/products/add"
PRODUCT_EDIT_URL = "/action/products/edit/{id}"
PRODUCT_DELETE_URL = "/action/products/delete"
PRODUCT_BULK_DELETE_URL = "/action/products/bulk-delete"
PRODUCT_SET_STATUS_URL = "/action/products/set-status"
PRODUCT_BULK_SET_STATUS_URL = "/action/products/bulk-set-status"

PRODUCT_VARIANT_TABLE_URL = "/action/products/detail/{id}/variants/table"
PRODUCT_VARIANT_ASSIGN_URL = "/action/products/detail/{id}/variants/assign"
PRODUCT_VARIANT_EDIT_URL = "/action/products/detail/{id}/variants/edit/{vid}"
PRODUCT_VARIANT_REMOVE_URL = "/action/products/detail/{id}/variants/remove"

PRODUCT_ATTRIBUTE_TABLE_URL = "/action/products/detail/{id}/attributes/table"
PRODUCT_ATTRIBUTE_ASSIGN_URL = "/action/products/detail/{id}/attributes/assign"
PRODUCT_ATTRIBUTE_REMOVE_URL = "/action/products/detail/{id}/attributes/remove"

# ==================== PRICE LISTS ====================

PRICE_LIST_LIST_URL = "/app/price-lists/list/{status}"
PRICE_LIST_DETAIL_URL = "/app/price-lists/{id}"

PRICE_LIST_ADD_URL = "/action/price-lists/add"
PRICE_LIST_EDIT_URL = "/action/price-lists/edit/{id}"
PRICE_LIST_DELETE_URL = "/action/price-lists/delete"
PRICE_LIST_BULK_DELETE_URL = "/action/price-lists/bulk-delete"
PRICE_PRODUCT_ADD_URL = "/action/price-lists/{id}/products/add"
PRICE_PRODUCT_DELETE_URL = "/action/price-lists/{id}/products/delete"

# ==================== PAYMENT COLLECTIONS / PLANS / SUBSCRIPTIONS ====================

PAYMENT_COLLECTION_LIST_URL = "/app/payment-collections/list/{status}"
PAYMENT_COLLECTION_DETAIL_URL = "/app/payment-collections/{id}"
PAYMENT_COLLECTION_ADD_URL = "/action/payment-collections/add"
PAYMENT_COLLECTION_EDIT_URL = "/action/payment-collections/edit/{id}"
PAYMENT_COLLECTION_DELETE_URL = "/action/payment-collections/delete"

PLAN_LIST_URL = "/app/plans/list/{status}"
PLAN_DETAIL_URL = "/app/plans/{id}"
PLAN_ADD_URL = "/action/plans/add"
PLAN_EDIT_URL = "/action/plans/edit/{id}"
PLAN_DELETE_URL = "/action/plans/delete"

SUBSCRIPTION_LIST_URL = "/app/subscriptions/list/{status}"
SUBSCRIPTION_DETAIL_URL = "/app/subscriptions/{id}"
SUBSCRIPTION_ADD_URL = "/action/subscriptions/add"
SUBSCRIPTION_EDIT_URL = "/action/subscriptions/edit/{id}"
SUBSCRIPTION_DELETE_URL = "/action/subscriptions/delete"


def route_url(template: str, **params) -> str:
    """Rellenar los {placeholders} de una ruta: route_url(SALES_DETAIL_URL, id="abc")"""
    return template.format(**params)
