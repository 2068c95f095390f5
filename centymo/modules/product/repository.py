# centymo/modules/product/repository.py
from typing import List, Dict, Any

from centymo.shared.datasource import DataSource
from centymo.shared.records import record_str

PRODUCT = "product"
PRODUCT_VARIANT = "product_variant"
PRODUCT_ATTRIBUTE = "product_attribute"
PRODUCT_COLLECTION = "product_collection"
ATTRIBUTE = "attribute"
PRICE_PRODUCT = "price_product"
PRICE_LIST = "price_list"


def _for_product(records: List[Dict[str, Any]], product_id: str) -> List[Dict[str, Any]]:
    return [record for record in records if record_str(record, "product_id") == product_id]


class ProductRepository:
    """
    Acceso a datos del catálogo: productos, variantes, atributos y precios
    """

    def __init__(self, db: DataSource):
        self.db = db

    # ==================== PRODUCTOS ====================

    def list_products(self) -> List[Dict[str, Any]]:
        return self.db.list_simple(PRODUCT)

    def get_product(self, product_id: str) -> Dict[str, Any]:
        return self.db.read(PRODUCT, product_id)

    def create_product(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.create(PRODUCT, data)

    def update_product(self, product_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.update(PRODUCT, product_id, data)

    def delete_product(self, product_id: str) -> None:
        self.db.delete(PRODUCT, product_id)

    def set_active(self, product_id: str, active: bool) -> Dict[str, Any]:
        return self.db.update(PRODUCT, product_id, {
            "active": active,
            "status": "active" if active else "inactive",
        })

    def get_collections(self, product_id: str) -> List[Dict[str, Any]]:
        return _for_product(self.db.list_simple(PRODUCT_COLLECTION), product_id)

    # ==================== VARIANTES ====================

    def get_variants(self, product_id: str) -> List[Dict[str, Any]]:
        return _for_product(self.db.list_simple(PRODUCT_VARIANT), product_id)

    def get_variant(self, variant_id: str) -> Dict[str, Any]:
        return self.db.read(PRODUCT_VARIANT, variant_id)

    def create_variant(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.create(PRODUCT_VARIANT, data)

    def update_variant(self, variant_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.update(PRODUCT_VARIANT, variant_id, data)

    def delete_variant(self, variant_id: str) -> None:
        self.db.delete(PRODUCT_VARIANT, variant_id)

    # ==================== ATRIBUTOS ====================

    def get_product_attributes(self, product_id: str) -> List[Dict[str, Any]]:
        return _for_product(self.db.list_simple(PRODUCT_ATTRIBUTE), product_id)

    def list_attributes(self) -> List[Dict[str, Any]]:
        return self.db.list_simple(ATTRIBUTE)

    def get_attribute(self, attribute_id: str) -> Dict[str, Any]:
        return self.db.read(ATTRIBUTE, attribute_id)

    def create_product_attribute(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.create(PRODUCT_ATTRIBUTE, data)

    def delete_product_attribute(self, product_attribute_id: str) -> None:
        self.db.delete(PRODUCT_ATTRIBUTE, product_attribute_id)

    # ==================== PRECIOS ====================

    def get_price_products(self, product_id: str) -> List[Dict[str, Any]]:
        return _for_product(self.db.list_simple(PRICE_PRODUCT), product_id)

    def list_price_lists(self) -> List[Dict[str, Any]]:
        return self.db.list_simple(PRICE_LIST)
