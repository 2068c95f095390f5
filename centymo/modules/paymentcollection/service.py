# centymo/modules/paymentcollection/service.py
import logging
from datetime import date
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
from .repository import PaymentCollectionRepository
from .schemas import (
    PaymentCollectionDetailPage, PaymentCollectionFormData,
    PaymentCollectionFormRequest, PaymentCollectionListPage
)

logger = logging.getLogger(__name__)

PAYMENT_COLLECTIONS_TABLE = "payment-collections-table"

COLLECTION_STATUSES = ("pending", "completed", "failed")

STATUS_TITLES = {
    "pending": "Pending Payments",
    "completed": "Completed Payments",
    "failed": "Failed Payments",
}
STATUS_SUBTITLES = {
    "pending": "Payments awaiting collection",
    "completed": "Successfully collected payments",
    "failed": "Failed payment attempts",
}


def status_variant(status: str) -> str:
    return {"pending": "warning", "completed": "success", "failed": "danger"}.get(status, "default")


class PaymentCollectionService:
    """
    Cobros a clientes agrupados por estado (pending, completed, failed)
    """

    def __init__(self, db: DataSource, labels: LabelCatalog):
        self.repository = PaymentCollectionRepository(db)
        self.labels = labels

    def get_list_page(self, status: str, current_path: str = "") -> PaymentCollectionListPage:
        status = status or "pending"

        try:
            records = self.repository.list_collections()
        except DataSourceError as e:
            logger.error(f"Failed to list payment collections: {e}")
            raise PageError(f"failed to load payment collections: {e.message}") from e

        columns = [
            TableColumn(key="customer", label="Customer", sortable=True),
            TableColumn(key="amount", label="Amount", sortable=True, width="120px"),
            TableColumn(key="date", label="Date", sortable=True, width="150px"),
            TableColumn(key="status", label="Status", sortable=True, width="120px"),
        ]
        rows = build_table_rows(records, status)
        apply_column_styles(columns, rows)

        title = STATUS_TITLES.get(status, "Payment Collections")
        return PaymentCollectionListPage(
            page=PageData(
                title=title,
                current_path=current_path,
                active_nav="payment-collections",
                active_sub_nav=status,
                header_title=title,
                header_subtitle=STATUS_SUBTITLES.get(status, "Payment collection management"),
                header_icon="icon-credit-card",
                content_template="paymentcollection/list.html",
            ),
            table=TableConfig(
                id=PAYMENT_COLLECTIONS_TABLE,
                refresh_url=routes.route_url(routes.PAYMENT_COLLECTION_LIST_URL, status=status),
                columns=columns,
                rows=rows,
                show_search=True,
                show_actions=True,
                labels=map_table_labels(self.labels.common),
                empty_state=EmptyState(
                    title="No payment collections found",
                    message=f"No {status} payment collections to display.",
                ),
                primary_action=PrimaryAction(label="Add Payment Collection", action_url=routes.PAYMENT_COLLECTION_ADD_URL),
            ),
        )

    def get_detail_page(self, collection_id: str, current_path: str = "") -> PaymentCollectionDetailPage:
        try:
            record = self.repository.get_collection(collection_id)
        except RecordNotFoundError as e:
            raise PageError(f"failed to load payment collection: {e.message}", status_code=404) from e
        except DataSourceError as e:
            logger.error(f"Failed to read payment collection {collection_id}: {e}")
            raise PageError(f"failed to load payment collection: {e.message}") from e

        customer = record_str(record, "customer")
        status = record_str(record, "status") or "pending"
        return PaymentCollectionDetailPage(
            page=PageData(
                title=customer,
                current_path=current_path,
                active_nav="payment-collections",
                active_sub_nav=status,
                header_title=customer,
                header_subtitle=record_str(record, "reference"),
                header_icon="icon-credit-card",
                content_template="paymentcollection/detail.html",
            ),
            collection_id=collection_id,
            status=status,
            status_variant=status_variant(status),
            info_fields=[
                InfoField(label="Customer", value=customer),
                InfoField(label="Amount", value=record_str(record, "amount")),
                InfoField(label="Date", value=record_str(record, "date")),
                InfoField(label="Reference", value=record_str(record, "reference")),
                InfoField(label="Status", value=status, variant=status_variant(status)),
            ],
            back_url=routes.route_url(routes.PAYMENT_COLLECTION_LIST_URL, status=status),
        )

    # ==================== DRAWER ====================

    def get_add_form(self) -> PaymentCollectionFormData:
        return PaymentCollectionFormData(
            form_action=routes.PAYMENT_COLLECTION_ADD_URL,
            date=date.today().isoformat(),
            statuses=build_options(list(COLLECTION_STATUSES), {}, "pending"),
        )

    def get_edit_form(self, collection_id: str) -> PaymentCollectionFormData:
        try:
            record = self.repository.get_collection(collection_id)
        except DataSourceError as e:
            logger.error(f"Failed to read payment collection {collection_id}: {e}")
            raise ActionError("Payment collection not found") from e

        status = record_str(record, "status") or "pending"
        return PaymentCollectionFormData(
            form_action=routes.route_url(routes.PAYMENT_COLLECTION_EDIT_URL, id=collection_id),
            is_edit=True,
            id=collection_id,
            customer=record_str(record, "customer"),
            amount=record_str(record, "amount"),
            date=record_str(record, "date"),
            reference=record_str(record, "reference"),
            status=status,
            statuses=build_options(list(COLLECTION_STATUSES), {}, status),
        )

    @staticmethod
    def _collection_data(form: PaymentCollectionFormRequest) -> Dict[str, Any]:
        return {
            "customer": form.customer,
            "amount": form.amount,
            "date": form.date,
            "reference": form.reference,
            "status": form.status or "pending",
        }

    def create_collection(self, form: PaymentCollectionFormRequest) -> ActionResult:
        if not form.customer:
            raise ActionError("Customer is required")

        try:
            self.repository.create_collection(self._collection_data(form))
        except DataSourceError as e:
            logger.error(f"Failed to create payment collection: {e}")
            raise ActionError("Failed to create payment collection") from e

        return ActionResult.refresh(PAYMENT_COLLECTIONS_TABLE)

    def update_collection(self, collection_id: str, form: PaymentCollectionFormRequest) -> ActionResult:
        try:
            self.repository.update_collection(collection_id, self._collection_data(form))
        except DataSourceError as e:
            logger.error(f"Failed to update payment collection {collection_id}: {e}")
            raise ActionError("Failed to update payment collection") from e

        return ActionResult.refresh(PAYMENT_COLLECTIONS_TABLE)

    def delete_collection(self, collection_id: str) -> ActionResult:
        if not collection_id:
            raise ActionError("Payment collection ID is required")

        try:
            self.repository.delete_collection(collection_id)
        except DataSourceError as e:
            logger.error(f"Failed to delete payment collection {collection_id}: {e}")
            raise ActionError("Failed to delete payment collection") from e

        return ActionResult.refresh(PAYMENT_COLLECTIONS_TABLE)


def build_table_rows(records: List[Dict[str, Any]], status: str) -> List[TableRow]:
    rows = []
    for record in records:
        record_status = record_str(record, "status")
        if record_status and record_status != status:
            continue
        record_status = record_status or status

        collection_id = record_str(record, "id")
        customer = record_str(record, "customer")
        amount = record_str(record, "amount")
        collected_on = record_str(record, "date")
        rows.append(TableRow(
            id=collection_id,
            cells=[
                TableCell(value=customer),
                TableCell(value=amount),
                TableCell(value=collected_on),
                TableCell(type="badge", value=record_status, variant=status_variant(record_status)),
            ],
            data_attrs={
                "customer": customer,
                "amount": amount,
                "date": collected_on,
                "status": record_status,
            },
            actions=[
                RowAction(
                    type="view", label="View Payment", action="view",
                    href=routes.route_url(routes.PAYMENT_COLLECTION_DETAIL_URL, id=collection_id),
                ),
                RowAction(
                    type="edit", label="Edit Payment", action="edit",
                    url=routes.route_url(routes.PAYMENT_COLLECTION_EDIT_URL, id=collection_id),
                    drawer_title="Edit Payment Collection",
                ),
                RowAction(
                    type="delete", label="Delete Payment", action="delete",
                    url=routes.PAYMENT_COLLECTION_DELETE_URL, item_name=customer,
                ),
            ],
        ))
    return rows
