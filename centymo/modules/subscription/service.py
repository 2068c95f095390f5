# centymo/modules/subscription/service.py
import logging
from datetime import date
from typing import List, Dict, Any

from centymo.core.exceptions import ActionError, DataSourceError, PageError, RecordNotFoundError
from centymo.shared import routes
from centymo.shared.datasource import DataSource
from centymo.shared.labels import LabelCatalog, map_table_labels
from centymo.shared.records import record_str
from centymo.shared.schemas import (
    ActionResult, EmptyState, FormOption, InfoField, PageData, PrimaryAction,
    RowAction, TableCell, TableColumn, TableConfig, TableRow, apply_column_styles, build_options
)
from .repository import SubscriptionRepository
from .schemas import (
    SubscriptionDetailPage, SubscriptionFormData, SubscriptionFormRequest, SubscriptionListPage
)

logger = logging.getLogger(__name__)

SUBSCRIPTIONS_TABLE = "subscriptions-table"

SUBSCRIPTION_STATUSES = ("active", "inactive")

STATUS_TITLES = {"active": "Active Subscriptions", "inactive": "Inactive Subscriptions"}
STATUS_SUBTITLES = {
    "active": "Manage your active subscriptions",
    "inactive": "View cancelled or expired subscriptions",
}


def status_variant(status: str) -> str:
    return {"active": "success", "inactive": "warning"}.get(status, "default")


class SubscriptionService:
    """Suscripciones de clientes a planes"""

    def __init__(self, db: DataSource, labels: LabelCatalog):
        self.repository = SubscriptionRepository(db)
        self.labels = labels

    def get_list_page(self, status: str, current_path: str = "") -> SubscriptionListPage:
        status = status or "active"

        try:
            records = self.repository.list_subscriptions()
        except DataSourceError as e:
            logger.error(f"Failed to list subscriptions: {e}")
            raise PageError(f"failed to load subscriptions: {e.message}") from e

        columns = [
            TableColumn(key="customer", label="Customer", sortable=True),
            TableColumn(key="plan", label="Plan", sortable=True),
            TableColumn(key="start_date", label="Start Date", sortable=True, width="150px"),
            TableColumn(key="status", label="Status", sortable=True, width="120px"),
        ]
        rows = build_table_rows(records, status)
        apply_column_styles(columns, rows)

        title = STATUS_TITLES.get(status, "Subscriptions")
        return SubscriptionListPage(
            page=PageData(
                title=title,
                current_path=current_path,
                active_nav="subscriptions",
                active_sub_nav=status,
                header_title=title,
                header_subtitle=STATUS_SUBTITLES.get(status, "Subscription management"),
                header_icon="icon-refresh-cw",
                content_template="subscription/list.html",
            ),
            table=TableConfig(
                id=SUBSCRIPTIONS_TABLE,
                refresh_url=routes.route_url(routes.SUBSCRIPTION_LIST_URL, status=status),
                columns=columns,
                rows=rows,
                show_search=True,
                show_actions=True,
                labels=map_table_labels(self.labels.common),
                empty_state=EmptyState(title="No subscriptions found", message=f"No {status} subscriptions to display."),
                primary_action=PrimaryAction(label="Add Subscription", action_url=routes.SUBSCRIPTION_ADD_URL),
            ),
        )

    def get_detail_page(self, subscription_id: str, current_path: str = "") -> SubscriptionDetailPage:
        try:
            record = self.repository.get_subscription(subscription_id)
        except RecordNotFoundError as e:
            raise PageError(f"failed to load subscription: {e.message}", status_code=404) from e
        except DataSourceError as e:
            logger.error(f"Failed to read subscription {subscription_id}: {e}")
            raise PageError(f"failed to load subscription: {e.message}") from e

        customer = record_str(record, "customer")
        status = record_str(record, "status") or "active"
        return SubscriptionDetailPage(
            page=PageData(
                title=customer,
                current_path=current_path,
                active_nav="subscriptions",
                active_sub_nav=status,
                header_title=customer,
                header_subtitle=record_str(record, "plan"),
                header_icon="icon-refresh-cw",
                content_template="subscription/detail.html",
            ),
            subscription_id=subscription_id,
            status=status,
            status_variant=status_variant(status),
            info_fields=[
                InfoField(label="Customer", value=customer),
                InfoField(label="Plan", value=record_str(record, "plan")),
                InfoField(label="Start Date", value=record_str(record, "start_date")),
                InfoField(label="End Date", value=record_str(record, "end_date")),
                InfoField(label="Status", value=status, variant=status_variant(status)),
            ],
            back_url=routes.route_url(routes.SUBSCRIPTION_LIST_URL, status=status),
        )

    # ==================== DRAWER ====================

    def _plan_options(self, selected: str = "") -> List[FormOption]:
        try:
            plans = self.repository.list_plans()
        except DataSourceError as e:
            logger.error(f"Failed to list plans for subscription form: {e}")
            return []

        names = [record_str(plan, "name") for plan in plans if record_str(plan, "name")]
        return build_options(names, {}, selected)

    def get_add_form(self) -> SubscriptionFormData:
        return SubscriptionFormData(
            form_action=routes.SUBSCRIPTION_ADD_URL,
            start_date=date.today().isoformat(),
            plans=self._plan_options(),
            statuses=build_options(list(SUBSCRIPTION_STATUSES), {}, "active"),
        )

    def get_edit_form(self, subscription_id: str) -> SubscriptionFormData:
        try:
            record = self.repository.get_subscription(subscription_id)
        except DataSourceError as e:
            logger.error(f"Failed to read subscription {subscription_id}: {e}")
            raise ActionError("Subscription not found") from e

        plan = record_str(record, "plan")
        status = record_str(record, "status") or "active"
        return SubscriptionFormData(
            form_action=routes.route_url(routes.SUBSCRIPTION_EDIT_URL, id=subscription_id),
            is_edit=True,
            id=subscription_id,
            customer=record_str(record, "customer"),
            plan=plan,
            start_date=record_str(record, "start_date"),
            end_date=record_str(record, "end_date"),
            status=status,
            plans=self._plan_options(plan),
            statuses=build_options(list(SUBSCRIPTION_STATUSES), {}, status),
        )

    @staticmethod
    def _subscription_data(form: SubscriptionFormRequest) -> Dict[str, Any]:
        return {
            "customer": form.customer,
            "plan": form.plan,
            "start_date": form.start_date,
            "end_date": form.end_date,
            "status": form.status or "active",
        }

    def create_subscription(self, form: SubscriptionFormRequest) -> ActionResult:
        if not form.customer:
            raise ActionError("Customer is required")

        try:
            self.repository.create_subscription(self._subscription_data(form))
        except DataSourceError as e:
            logger.error(f"Failed to create subscription: {e}")
            raise ActionError("Failed to create subscription") from e

        return ActionResult.refresh(SUBSCRIPTIONS_TABLE)

    def update_subscription(self, subscription_id: str, form: SubscriptionFormRequest) -> ActionResult:
        try:
            self.repository.update_subscription(subscription_id, self._subscription_data(form))
        except DataSourceError as e:
            logger.error(f"Failed to update subscription {subscription_id}: {e}")
            raise ActionError("Failed to update subscription") from e

        return ActionResult.refresh(SUBSCRIPTIONS_TABLE)

    def delete_subscription(self, subscription_id: str) -> ActionResult:
        if not subscription_id:
            raise ActionError("Subscription ID is required")

        try:
            self.repository.delete_subscription(subscription_id)
        except DataSourceError as e:
            logger.error(f"Failed to delete subscription {subscription_id}: {e}")
            raise ActionError("Failed to cancel subscription") from e

        return ActionResult.refresh(SUBSCRIPTIONS_TABLE)


def build_table_rows(records: List[Dict[str, Any]], status: str) -> List[TableRow]:
    rows = []
    for record in records:
        record_status = record_str(record, "status")
        if record_status and record_status != status:
            continue
        record_status = record_status or status

        subscription_id = record_str(record, "id")
        customer = record_str(record, "customer")
        plan = record_str(record, "plan")
        start_date = record_str(record, "start_date")
        rows.append(TableRow(
            id=subscription_id,
            cells=[
                TableCell(value=customer),
                TableCell(value=plan),
                TableCell(value=start_date),
                TableCell(type="badge", value=record_status, variant=status_variant(record_status)),
            ],
            data_attrs={
                "customer": customer,
                "plan": plan,
                "start_date": start_date,
                "status": record_status,
            },
            actions=[
                RowAction(
                    type="view", label="View Subscription", action="view",
                    href=routes.route_url(routes.SUBSCRIPTION_DETAIL_URL, id=subscription_id),
                ),
                RowAction(
                    type="edit", label="Edit Subscription", action="edit",
                    url=routes.route_url(routes.SUBSCRIPTION_EDIT_URL, id=subscription_id),
                    drawer_title="Edit Subscription",
                ),
                RowAction(
                    type="delete", label="Cancel Subscription", action="delete",
                    url=routes.SUBSCRIPTION_DELETE_URL, item_name=customer,
                ),
            ],
        ))
    return rows
