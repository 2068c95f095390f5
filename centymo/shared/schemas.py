"""
Modelos de presentación compartidos por todos los módulos.

Las vistas copian registros del DataSource a estas estructuras y las
plantillas de components/ las renderizan (tabla, tabs, drawer, header).
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

# ==================== TABLAS ====================

class TableLabels(BaseModel):
    """Labels planos que usa components/table.html"""
    search: str = "Search"
    search_placeholder: str = "Search..."
    filters: str = "Filters"
    filter_conditions: str = "Filter conditions"
    clear_all: str = "Clear all"
    add_condition: str = "Add condition"
    clear: str = "Clear"
    apply_filters: str = "Apply filters"
    sort: str = "Sort"
    columns: str = "Columns"
    export: str = "Export"
    density_default: str = "Default"
    density_comfortable: str = "Comfortable"
    density_compact: str = "Compact"
    show: str = "Show"
    entries: str = "entries"
    showing: str = "Showing"
    to: str = "to"
    of: str = "of"
    entries_label: str = "entries"
    select_all: str = "Select all"
    actions: str = "Actions"
    prev: str = "Previous"
    next: str = "Next"

class TableColumn(BaseModel):
    key: str
    label: str
    sortable: bool = False
    width: Optional[str] = None
    align: Optional[str] = None

class TableCell(BaseModel):
    type: str = "text"  # text | badge | money | date
    value: Any = ""
    variant: Optional[str] = None
    width: Optional[str] = None
    align: Optional[str] = None

class RowAction(BaseModel):
    type: str  # view | edit | delete | activate | deactivate
    label: str
    action: Optional[str] = None
    href: Optional[str] = None
    url: Optional[str] = None
    drawer_title: Optional[str] = None
    item_name: Optional[str] = None
    confirm_title: Optional[str] = None
    confirm_message: Optional[str] = None
    disabled: bool = False
    disabled_tooltip: Optional[str] = None

class TableRow(BaseModel):
    id: str
    cells: List[TableCell] = []
    data_attrs: Dict[str, str] = {}
    actions: List[RowAction] = []
    href: Optional[str] = None

class BulkAction(BaseModel):
    key: str
    label: str
    icon: Optional[str] = None
    variant: str = "default"
    endpoint: str
    confirm_title: Optional[str] = None
    confirm_message: Optional[str] = None
    extra_params: Dict[str, str] = {}

class BulkActionsConfig(BaseModel):
    enabled: bool = False
    select_all_label: str = ""
    selected_label: str = ""
    cancel_label: str = ""
    actions: List[BulkAction] = []

class EmptyState(BaseModel):
    title: str = ""
    message: str = ""

class PrimaryAction(BaseModel):
    label: str
    action_url: str
    icon: str = "icon-plus"

class TableConfig(BaseModel):
    id: str
    refresh_url: Optional[str] = None
    columns: List[TableColumn] = []
    rows: List[TableRow] = []
    show_search: bool = False
    show_actions: bool = False
    show_filters: bool = False
    show_sort: bool = False
    show_columns: bool = False
    show_export: bool = False
    show_density: bool = False
    show_entries: bool = False
    default_sort_column: Optional[str] = None
    default_sort_direction: str = "asc"
    page_size: int = 0
    labels: TableLabels = Field(default_factory=TableLabels)
    empty_state: EmptyState = Field(default_factory=EmptyState)
    primary_action: Optional[PrimaryAction] = None
    bulk_actions: Optional[BulkActionsConfig] = None

# ==================== PÁGINAS ====================

class TabItem(BaseModel):
    key: str
    label: str
    href: str
    hx_get: Optional[str] = None
    icon: Optional[str] = None
    count: Optional[int] = None
    disabled: bool = False

class PageData(BaseModel):
    title: str
    current_path: str = ""
    active_nav: str = ""
    active_sub_nav: str = ""
    header_title: str = ""
    header_subtitle: str = ""
    header_icon: str = ""
    content_template: str = ""

class FormOption(BaseModel):
    value: str
    label: str
    selected: bool = False

class InfoField(BaseModel):
    """Par etiqueta/valor de las pestañas de información"""
    label: str
    value: str = ""
    variant: Optional[str] = None

# ==================== HELPERS ====================

DEFAULT_PAGE_SIZE = 25

def apply_column_styles(columns: List[TableColumn], rows: List[TableRow]) -> None:
    """Copiar ancho y alineación de cada columna a sus celdas"""
    for row in rows:
        for column, cell in zip(columns, row.cells):
            if column.width and not cell.width:
                cell.width = column.width
            if column.align and not cell.align:
                cell.align = column.align

def apply_table_settings(table: TableConfig) -> TableConfig:
    """Defaults de paginación y orden para tablas completas"""
    if not table.page_size:
        table.page_size = DEFAULT_PAGE_SIZE
    if not table.default_sort_column and table.columns:
        table.default_sort_column = table.columns[0].key
    return table

def build_options(values: List[str], labels: Dict[str, str], selected: str = "") -> List[FormOption]:
    return [
        FormOption(value=value, label=labels.get(value, value), selected=value == selected)
        for value in values
    ]

# ==================== RESULTADOS DE ACCIONES ====================

class ActionResult(BaseModel):
    """Qué debe hacer el router tras una acción: refrescar una tabla o redirigir"""
    refresh_table: Optional[str] = None
    redirect_url: Optional[str] = None

    @classmethod
    def refresh(cls, table_id: str) -> "ActionResult":
        return cls(refresh_table=table_id)

    @classmethod
    def redirect(cls, url: str) -> "ActionResult":
        return cls(redirect_url=url)
