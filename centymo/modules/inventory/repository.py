# centymo/modules/inventory/repository.py
from typing import List, Dict, Any

from centymo.shared.datasource import DataSource
from centymo.shared.records import record_str

INVENTORY_ITEM = "inventory_item"
INVENTORY_SERIAL = "inventory_serial"
INVENTORY_TRANSACTION = "inventory_transaction"
INVENTORY_DEPRECIATION = "inventory_depreciation"
INVENTORY_ATTRIBUTE = "inventory_attribute"
PRODUCT_ATTRIBUTE = "product_attribute"
ATTRIBUTE = "attribute"


def filter_by_field(records: List[Dict[str, Any]], field: str, value: str) -> List[Dict[str, Any]]:
    return [record for record in records if record_str(record, field) == value]


class InventoryRepository:
    """
    Acceso a datos de inventario: items, seriales, movimientos y depreciación
    """

    def __init__(self, db: DataSource):
        self.db = db

    # ==================== ITEMS ====================

    def list_items(self) -> List[Dict[str, Any]]:
        return self.db.list_simple(INVENTORY_ITEM)

    def get_item(self, item_id: str) -> Dict[str, Any]:
        return self.db.read(INVENTORY_ITEM, item_id)

    def create_item(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.create(INVENTORY_ITEM, data)

    def update_item(self, item_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.update(INVENTORY_ITEM, item_id, data)

    def delete_item(self, item_id: str) -> None:
        self.db.delete(INVENTORY_ITEM, item_id)

    def set_active(self, item_id: str, active: bool) -> Dict[str, Any]:
        return self.db.update(INVENTORY_ITEM, item_id, {"active": active})

    # ==================== SERIALES ====================

    def list_all_serials(self) -> List[Dict[str, Any]]:
        return self.db.list_simple(INVENTORY_SERIAL)

    def get_serials(self, item_id: str) -> List[Dict[str, Any]]:
        return filter_by_field(self.db.list_simple(INVENTORY_SERIAL), "inventory_item_id", item_id)

    def get_serial(self, serial_id: str) -> Dict[str, Any]:
        return self.db.read(INVENTORY_SERIAL, serial_id)

    def create_serial(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.create(INVENTORY_SERIAL, data)

    def update_serial(self, serial_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.update(INVENTORY_SERIAL, serial_id, data)

    def delete_serial(self, serial_id: str) -> None:
        self.db.delete(INVENTORY_SERIAL, serial_id)

    # ==================== MOVIMIENTOS ====================

    def list_transactions(self) -> List[Dict[str, Any]]:
        return self.db.list_simple(INVENTORY_TRANSACTION)

    def get_transactions(self, item_id: str) -> List[Dict[str, Any]]:
        return filter_by_field(self.db.list_simple(INVENTORY_TRANSACTION), "inventory_item_id", item_id)

    def create_transaction(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.create(INVENTORY_TRANSACTION, data)

    # ==================== DEPRECIACIÓN ====================

    def list_depreciations(self) -> List[Dict[str, Any]]:
        return self.db.list_simple(INVENTORY_DEPRECIATION)

    def get_depreciations(self, item_id: str) -> List[Dict[str, Any]]:
        return filter_by_field(self.db.list_simple(INVENTORY_DEPRECIATION), "inventory_item_id", item_id)

    def get_depreciation(self, depreciation_id: str) -> Dict[str, Any]:
        return self.db.read(INVENTORY_DEPRECIATION, depreciation_id)

    def create_depreciation(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.create(INVENTORY_DEPRECIATION, data)

    def update_depreciation(self, depreciation_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.update(INVENTORY_DEPRECIATION, depreciation_id, data)

    # ==================== ATRIBUTOS ====================

    def get_product_attributes(self, product_id: str) -> List[Dict[str, Any]]:
        return filter_by_field(self.db.list_simple(PRODUCT_ATTRIBUTE), "product_id", product_id)

    def list_attributes(self) -> List[Dict[str, Any]]:
        return self.db.list_simple(ATTRIBUTE)

    def get_item_attributes(self, item_id: str) -> List[Dict[str, Any]]:
        return filter_by_field(self.db.list_simple(INVENTORY_ATTRIBUTE), "inventory_item_id", item_id)
