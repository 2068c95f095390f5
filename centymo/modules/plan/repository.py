# centymo/modules/plan/repository.py
from typing import List, Dict, Any

from centymo.shared.datasource import DataSource

PLAN = "plan"


class PlanRepository:
    def __init__(self, db: DataSource):
        self.db = db

    def list_plans(self) -> List[Dict[str, Any]]:
        return self.db.list_simple(PLAN)

    def get_plan(self, plan_id: str) -> Dict[str, Any]:
        return self.db.read(PLAN, plan_id)

    def create_plan(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.create(PLAN, data)

    def update_plan(self, plan_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self.db.update(PLAN, plan_id, data)

    def delete_plan(self, plan_id: str) -> None:
        self.db.delete(PLAN, plan_id)
