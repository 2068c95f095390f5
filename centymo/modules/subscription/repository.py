# centymo/modules/subscription/repository.py
from typing import List, Dict, Any

from centymo.shared.datasource import DataSource

SUBSCRIPTION = "subscription"
PLAN = "plan"


class SubscriptionRepository:
    def __init__(self, db: DataSource):
        self.db = db

    def list_subscriptions(self) -> List[Dict[str, Any]]:
        return self.db.list_simple(SUBSCRIPTION)

    def get_subscription(self, subscription_id: str) -> Dict[str, Any]:
        return self.db.read(SUBSCRIPTION, subscription_id)

    def create_subscription(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.create(SUBSCRIPTION, data)

    def update_subscription(self, subscription_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.update(SUBSCRIPTION, subscription_id, data)

    def delete_subscription(self, subscription_id: str) -> None:
        self.db.delete(SUBSCRIPTION, subscription_id)

    def list_plans(self) -> List[Dict[str, Any]]:
        return self.db.list_simple(PLAN)
