# centymo/modules/sales/repository.py
from typing import List, Dict, Any

from centymo.shared.datasource import DataSource
from centymo.shared.records import record_bool, record_str

REVENUE = "revenue"
LINE_ITEM = "revenue_line_item"
PAYMENT = "revenue_payment"
LOCATION = "location"
COLLECTION_METHOD = "collection_method"
INVENTORY_ITEM = "inventory_item"
INVENTORY_SERIAL = "inventory_serial"
SERIAL_HISTORY = "inventory_serial_history"

class SalesRepository:
    """
    Acceso a datos de ventas (revenue) y sus colecciones relacionadas
    """

    def __init__(self, db: DataSource):
        self.db = db

    # ==================== VENTAS ====================

    def list_sales(self) -> List[Dict[str, Any]]:
        return self.db.list_simple(REVENUE)

    def get_sale(self, sale_id: str) -> Dict[str, Any]:
        return self.db.read(REVENUE, sale_id)

    def create_sale(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.create(REVENUE, data)

    def update_sale(self, sale_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.update(REVENUE, sale_id, data)

    def delete_sale(self, sale_id: str) -> None:
        self.db.delete(REVENUE, sale_id)

    # ==================== LINE ITEMS ====================

    def get_line_items(self, revenue_id: str) -> List[Dict[str, Any]]:
        """Line items de una venta"""
        return [
            item for item in self.db.list_simple(LINE_ITEM)
            if record_str(item, "revenue_id") == revenue_id
        ]

    def get_line_item(self, item_id: str) -> Dict[str, Any]:
        return self.db.read(LINE_ITEM, item_id)

    def create_line_item(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.create(LINE_ITEM, data)

    def update_line_item(self, item_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.update(LINE_ITEM, item_id, data)

    def delete_line_item(self, item_id: str) -> None:
        self.db.delete(LINE_ITEM, item_id)

    # ==================== PAGOS ====================

    def get_payments(self, revenue_id: str) -> List[Dict[str, Any]]:
        """Pagos registrados para una venta"""
        return [
            payment for payment in self.db.list_simple(PAYMENT)
            if record_str(payment, "revenue_id") == revenue_id
        ]

    def get_payment(self, payment_id: str) -> Dict[str, Any]:
        return self.db.read(PAYMENT, payment_id)

    def create_payment(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.create(PAYMENT, data)

    def update_payment(self, payment_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.update(PAYMENT, payment_id, data)

    def delete_payment(self, payment_id: str) -> None:
        self.db.delete(PAYMENT, payment_id)

    # ==================== CATÁLOGOS ====================

    def get_active_locations(self) -> List[Dict[str, Any]]:
        return [
            location for location in self.db.list_simple(LOCATION)
            if record_bool(location, "active") and record_str(location, "id")
        ]

    def list_collection_methods(self) -> List[Dict[str, Any]]:
        return self.db.list_simple(COLLECTION_METHOD)

    def get_collection_method(self, method_id: str) -> Dict[str, Any]:
        return self.db.read(COLLECTION_METHOD, method_id)

    # ==================== INVENTARIO ====================

    def list_inventory_items(self) -> List[Dict[str, Any]]:
        return self.db.list_simple(INVENTORY_ITEM)

    def get_inventory_item(self, item_id: str) -> Dict[str, Any]:
        return self.db.read(INVENTORY_ITEM, item_id)

    def update_inventory_item(self, item_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.update(INVENTORY_ITEM, item_id, data)

    def get_serial(self, serial_id: str) -> Dict[str, Any]:
        return self.db.read(INVENTORY_SERIAL, serial_id)

    def update_serial_status(self, serial_id: str, status: str) -> Dict[str, Any]:
        return self.db.update(INVENTORY_SERIAL, serial_id, {"status": status})

    def create_serial_history(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.create(SERIAL_HISTORY, data)
