# centymo/modules/paymentcollection/repository.py
from typing import List, Dict, Any

from centymo.shared.datasource import DataSource

PAYMENT_COLLECTION = "payment_collection"


class PaymentCollectionRepository:
    def __init__(self, db: DataSource):
        self.db = db

    def list_collections(self) -> List[Dict[str, Any]]:
        return self.db.list_simple(PAYMENT_COLLECTION)

    def get_collection(self, collection_id: str) -> Dict[str, Any]:
        return self.db.read(PAYMENT_COLLECTION, collection_id)

    def create_collection(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.create(PAYMENT_COLLECTION, data)

    def update_collection(self, collection_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.update(PAYMENT_COLLECTION, collection_id, data)

    def delete_collection(self, collection_id: str) -> None:
        self.db.delete(PAYMENT_COLLECTION, collection_id)
