# centymo/modules/plan/service.py
import logging
from typing import List, Dict, Any

from centymo.core.exceptions import ActionError, DataSourceError, PageError, RecordNotFoundError
from centymo.shared import routes
from centymo.shared.datasource import DataSource
from centymo.shared.labels import LabelCatalog, map_table_labels
from centymo.shared.records import record_str
from centymo.shared.schemas import (
    ActionResult, EmptyState, InfoField, PageData, PrimaryAction, RowAction,
    TableCell, TableColumn, TableConfig, TableRow, apply_column_styles, build_options
)
from .repository import PlanRepository
from .schemas import PlanDetailPage, PlanFormData, PlanFormRequest, PlanListPage

logger = logging.getLogger(__name__)

PLANS_TABLE = "plans-table"

DEFAULT_INTERVAL = "monthly"
PLAN_INTERVALS = ("monthly", "annual")
PLAN_STATUSES = ("active", "inactive")

STATUS_TITLES = {"active": "Active Plans", "inactive": "Inactive Plans"}
STATUS_SUBTITLES = {
    "active": "Manage your active billing plans",
    "inactive": "View inactive billing plans",
}


def status_variant(status: str) -> str:
    return {"active": "success", "inactive": "warning"}.get(status, "default")


def interval_variant(interval: str) -> str:
    return {"monthly": "info", "annual": "primary"}.get(interval, "default")


class PlanService:
    """Planes de facturación: listado por estado, detalle y drawer de alta/edición"""

    def __init__(self, db: DataSource, labels: LabelCatalog):
        self.repository = PlanRepository(db)
        self.labels = labels

    def get_list_page(self, status: str, current_path: str = "") -> PlanListPage:
        status = status or "active"

        try:
            records = self.repository.list_plans()
        except DataSourceError as e:
            logger.error(f"Failed to list plans: {e}")
            raise PageError(f"failed to load plans: {e.message}") from e

        columns = [
            TableColumn(key="name", label="Name", sortable=True),
            TableColumn(key="interval", label="Interval", sortable=True, width="150px"),
            TableColumn(key="price", label="Price", sortable=True, width="120px"),
            TableColumn(key="status", label="Status", sortable=True, width="120px"),
        ]
        rows = build_table_rows(records, status)
        apply_column_styles(columns, rows)

        title = STATUS_TITLES.get(status, "Plans")
        return PlanListPage(
            page=PageData(
                title=title,
                current_path=current_path,
                active_nav="plans",
                active_sub_nav=status,
                header_title=title,
                header_subtitle=STATUS_SUBTITLES.get(status, "Plan management"),
                header_icon="icon-file-text",
                content_template="plan/list.html",
            ),
            table=TableConfig(
                id=PLANS_TABLE,
                refresh_url=routes.route_url(routes.PLAN_LIST_URL, status=status),
                columns=columns,
                rows=rows,
                show_search=True,
                show_actions=True,
                labels=map_table_labels(self.labels.common),
                empty_state=EmptyState(title="No plans found", message=f"No {status} plans to display."),
                primary_action=PrimaryAction(label="Add Plan", action_url=routes.PLAN_ADD_URL),
            ),
        )

    def get_detail_page(self, plan_id: str, current_path: str = "") -> PlanDetailPage:
        try:
            plan = self.repository.get_plan(plan_id)
        except RecordNotFoundError as e:
            raise PageError(f"failed to load plan: {e.message}", status_code=404) from e
        except DataSourceError as e:
            logger.error(f"Failed to read plan {plan_id}: {e}")
            raise PageError(f"failed to load plan: {e.message}") from e

        name = record_str(plan, "name")
        status = record_str(plan, "status") or "active"
        interval = record_str(plan, "interval") or DEFAULT_INTERVAL
        return PlanDetailPage(
            page=PageData(
                title=name,
                current_path=current_path,
                active_nav="plans",
                active_sub_nav=status,
                header_title=name,
                header_subtitle=record_str(plan, "description"),
                header_icon="icon-file-text",
                content_template="plan/detail.html",
            ),
            plan_id=plan_id,
            status=status,
            status_variant=status_variant(status),
            info_fields=[
                InfoField(label="Name", value=name),
                InfoField(label="Description", value=record_str(plan, "description")),
                InfoField(label="Interval", value=interval, variant=interval_variant(interval)),
                InfoField(label="Price", value=record_str(plan, "price")),
                InfoField(label="Status", value=status, variant=status_variant(status)),
            ],
            back_url=routes.route_url(routes.PLAN_LIST_URL, status=status),
        )

    # ==================== DRAWER ====================

    def get_add_form(self) -> PlanFormData:
        return PlanFormData(
            form_action=routes.PLAN_ADD_URL,
            intervals=build_options(list(PLAN_INTERVALS), {}, DEFAULT_INTERVAL),
            statuses=build_options(list(PLAN_STATUSES), {}, "active"),
        )

    def get_edit_form(self, plan_id: str) -> PlanFormData:
        try:
            record = self.repository.get_plan(plan_id)
        except DataSourceError as e:
            logger.error(f"Failed to read plan {plan_id}: {e}")
            raise ActionError("Plan not found") from e

        interval = record_str(record, "interval") or DEFAULT_INTERVAL
        status = record_str(record, "status") or "active"
        return PlanFormData(
            form_action=routes.route_url(routes.PLAN_EDIT_URL, id=plan_id),
            is_edit=True,
            id=plan_id,
            name=record_str(record, "name"),
            description=record_str(record, "description"),
            interval=interval,
            price=record_str(record, "price"),
            status=status,
            intervals=build_options(list(PLAN_INTERVALS), {}, interval),
            statuses=build_options(list(PLAN_STATUSES), {}, status),
        )

    @staticmethod
    def _plan_data(form: PlanFormRequest) -> Dict[str, Any]:
        return {
            "name": form.name,
            "description": form.description,
            "interval": form.interval or DEFAULT_INTERVAL,
            "price": form.price,
            "status": form.status or "active",
        }

    def create_plan(self, form: PlanFormRequest) -> ActionResult:
        if not form.name:
            raise ActionError("Plan name is required")

        try:
            self.repository.create_plan(self._plan_data(form))
        except DataSourceError as e:
            logger.error(f"Failed to create plan: {e}")
            raise ActionError("Failed to create plan") from e

        return ActionResult.refresh(PLANS_TABLE)

    def update_plan(self, plan_id: str, form: PlanFormRequest) -> ActionResult:
        try:
            self.repository.update_plan(plan_id, self._plan_data(form))
        except DataSourceError as e:
            logger.error(f"Failed to update plan {plan_id}: {e}")
            raise ActionError("Failed to update plan") from e

        return ActionResult.refresh(PLANS_TABLE)

    def delete_plan(self, plan_id: str) -> ActionResult:
        if not plan_id:
            raise ActionError("Plan ID is required")

        try:
            self.repository.delete_plan(plan_id)
        except DataSourceError as e:
            logger.error(f"Failed to delete plan {plan_id}: {e}")
            raise ActionError("Failed to delete plan") from e

        return ActionResult.refresh(PLANS_TABLE)


def build_table_rows(records: List[Dict[str, Any]], status: str) -> List[TableRow]:
    """Filas del listado; un registro sin status se muestra en cualquier listado"""
    rows = []
    for record in records:
        record_status = record_str(record, "status")
        if record_status and record_status != status:
            continue
        record_status = record_status or status

        plan_id = record_str(record, "id")
        name = record_str(record, "name")
        interval = record_str(record, "interval") or DEFAULT_INTERVAL
        price = record_str(record, "price")
        rows.append(TableRow(
            id=plan_id,
            cells=[
                TableCell(value=name),
                TableCell(type="badge", value=interval, variant=interval_variant(interval)),
                TableCell(value=price),
                TableCell(type="badge", value=record_status, variant=status_variant(record_status)),
            ],
            data_attrs={
                "name": name,
                "interval": interval,
                "price": price,
                "status": record_status,
            },
            actions=[
                RowAction(
                    type="view", label="View Plan", action="view",
                    href=routes.route_url(routes.PLAN_DETAIL_URL, id=plan_id),
                ),
                RowAction(
                    type="edit", label="Edit Plan", action="edit",
                    url=routes.route_url(routes.PLAN_EDIT_URL, id=plan_id),
                    drawer_title="Edit Plan",
                ),
                RowAction(type="delete", label="Delete Plan", action="delete", url=routes.PLAN_DELETE_URL, item_name=name),
            ],
        ))
    return rows
