# centymo/modules/pricelist/repository.py
"""
Adaptadores entre los registros sin esquema del DataSource y los modelos
PriceList / PriceProduct.
"""

import logging
from typing import List, Dict, Any

from centymo.core.exceptions import DataSourceError
from centymo.shared.datasource import DataSource
from centymo.shared.records import record_bool, record_int, record_str
from .schemas import PriceList, PriceProduct

logger = logging.getLogger(__name__)

PRICE_LIST = "price_list"
PRICE_PRODUCT = "price_product"
PRODUCT = "product"


def map_to_price_list(record: Dict[str, Any]) -> PriceList:
    price_list = PriceList(
        id=record_str(record, "id"),
        name=record_str(record, "name"),
        date_start_string=record_str(record, "date_start_string"),
    )
    description = record_str(record, "description")
    if description:
        price_list.description = description
    date_end = record_str(record, "date_end_string")
    if date_end:
        price_list.date_end_string = date_end
    if "active" in record:
        price_list.active = record_bool(record, "active")
    return price_list


def map_to_price_product(record: Dict[str, Any]) -> PriceProduct:
    price_product = PriceProduct(
        id=record_str(record, "id"),
        product_id=record_str(record, "product_id"),
        name=record_str(record, "name"),
        currency=record_str(record, "currency"),
        amount=record_int(record, "amount"),
    )
    description = record_str(record, "description")
    if description:
        price_product.description = description
    price_list_id = record_str(record, "price_list_id")
    if price_list_id:
        price_product.price_list_id = price_list_id
    if "active" in record:
        price_product.active = record_bool(record, "active")
    return price_product


def price_list_to_record(price_list: PriceList) -> Dict[str, Any]:
    """Campos opcionales sólo se escriben cuando vienen definidos"""
    data: Dict[str, Any] = {"name": price_list.name}
    if price_list.description is not None:
        data["description"] = price_list.description
    if price_list.date_start_string:
        data["date_start_string"] = price_list.date_start_string
    if price_list.date_end_string is not None:
        data["date_end_string"] = price_list.date_end_string
    data["active"] = price_list.active
    return data


class PriceListRepository:
    """
    Acceso a datos de listas de precios y precios por producto
    """

    def __init__(self, db: DataSource):
        self.db = db

    # ==================== LISTAS DE PRECIOS ====================

    def list_price_lists(self) -> List[PriceList]:
        return [map_to_price_list(record) for record in self.db.list_simple(PRICE_LIST)]

    def get_price_list(self, price_list_id: str) -> PriceList:
        return map_to_price_list(self.db.read(PRICE_LIST, price_list_id))

    def create_price_list(self, price_list: PriceList) -> PriceList:
        return map_to_price_list(self.db.create(PRICE_LIST, price_list_to_record(price_list)))

    def update_price_list(self, price_list: PriceList) -> PriceList:
        return map_to_price_list(self.db.update(PRICE_LIST, price_list.id, price_list_to_record(price_list)))

    def delete_price_list(self, price_list_id: str) -> None:
        self.db.delete(PRICE_LIST, price_list_id)

    # ==================== PRECIOS POR PRODUCTO ====================

    def list_price_products(self) -> List[PriceProduct]:
        try:
            records = self.db.list_simple(PRICE_PRODUCT)
        except DataSourceError as e:
            # La colección puede no existir todavía
            logger.warning(f"Failed to list price products, returning none: {e}")
            return []
        return [map_to_price_product(record) for record in records]

    def create_price_product(self, data: Dict[str, Any]) -> PriceProduct:
        return map_to_price_product(self.db.create(PRICE_PRODUCT, data))

    def delete_price_product(self, price_product_id: str) -> None:
        self.db.delete(PRICE_PRODUCT, price_product_id)

    # ==================== PRODUCTOS ====================

    def list_products(self) -> List[Dict[str, Any]]:
        return self.db.list_simple(PRODUCT)
