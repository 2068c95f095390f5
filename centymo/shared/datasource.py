"""
DataSource: acceso a datos agnóstico de tecnología para las vistas.

Cada colección (inventory_item, revenue, product, price_list, ...) es una
lista de registros dict con clave "id". Las vistas sólo dependen de esta
interfaz; la app consumidora decide el backend.
"""

import copy
import logging
import threading
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from centymo.config.database import init_db
from centymo.core.exceptions import DataSourceError, RecordNotFoundError
from centymo.shared.database.models import RecordDocument

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


def new_record_id() -> str:
    return uuid.uuid4().hex


class DataSource(ABC):
    """
    Interfaz CRUD sobre colecciones con nombre.

    Implementaciones deben lanzar RecordNotFoundError cuando el id no existe
    y DataSourceError para cualquier otro fallo del backend.
    """

    def initialize(self) -> None:
        """Hook de arranque (crear tablas, conectar, etc.)"""

    @abstractmethod
    def list_simple(self, collection: str) -> List[Record]:
        ...

    @abstractmethod
    def create(self, collection: str, data: Record) -> Record:
        ...

    @abstractmethod
    def read(self, collection: str, record_id: str) -> Record:
        ...

    @abstractmethod
    def update(self, collection: str, record_id: str, data: Record) -> Record:
        ...

    @abstractmethod
    def delete(self, collection: str, record_id: str) -> None:
        ...


class InMemoryDataSource(DataSource):
    """DataSource en memoria, útil para desarrollo y tests"""

    def __init__(self, seed: Optional[Dict[str, List[Record]]] = None):
        self._collections: Dict[str, Dict[str, Record]] = {}
        self._lock = threading.Lock()
        for collection, records in (seed or {}).items():
            for record in records:
                self.create(collection, record)

    def list_simple(self, collection: str) -> List[Record]:
        with self._lock:
            records = self._collections.get(collection, {})
            return [copy.deepcopy(record) for record in records.values()]

    def create(self, collection: str, data: Record) -> Record:
        record = copy.deepcopy(data)
        record_id = str(record.get("id") or new_record_id())
        record["id"] = record_id
        with self._lock:
            self._collections.setdefault(collection, {})[record_id] = record
        return copy.deepcopy(record)

    def read(self, collection: str, record_id: str) -> Record:
        with self._lock:
            record = self._collections.get(collection, {}).get(record_id)
            if record is None:
                raise RecordNotFoundError(collection, record_id)
            return copy.deepcopy(record)

    def update(self, collection: str, record_id: str, data: Record) -> Record:
        with self._lock:
            record = self._collections.get(collection, {}).get(record_id)
            if record is None:
                raise RecordNotFoundError(collection, record_id)
            record.update(copy.deepcopy(data))
            record["id"] = record_id
            return copy.deepcopy(record)

    def delete(self, collection: str, record_id: str) -> None:
        with self._lock:
            records = self._collections.get(collection, {})
            if record_id not in records:
                raise RecordNotFoundError(collection, record_id)
            del records[record_id]


class SQLDataSource(DataSource):
    """
    DataSource sobre SQLAlchemy.

    Guarda cada registro como documento JSON en la tabla ``records``
    única por (collection, id). Abre una sesión por operación.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def initialize(self) -> None:
        init_db(bind=self.session_factory.kw.get("bind"))
        logger.info("✅ SQL datasource ready")

    @staticmethod
    def _get_row(db, collection: str, record_id: str) -> Optional[RecordDocument]:
        return db.query(RecordDocument).filter(
            RecordDocument.collection == collection,
            RecordDocument.id == record_id
        ).first()

    def list_simple(self, collection: str) -> List[Record]:
        try:
            with self.session_factory() as db:
                rows = db.query(RecordDocument).filter(
                    RecordDocument.collection == collection
                ).order_by(RecordDocument.seq).all()
                return [row.to_record() for row in rows]
        except SQLAlchemyError as e:
            raise DataSourceError(f"Error listando {collection}: {e}") from e

    def create(self, collection: str, data: Record) -> Record:
        payload = copy.deepcopy(data)
        record_id = str(payload.pop("id", None) or new_record_id())
        try:
            with self.session_factory() as db:
                row = RecordDocument(collection=collection, id=record_id, data=payload)
                db.add(row)
                db.commit()
                db.refresh(row)
                return row.to_record()
        except SQLAlchemyError as e:
            raise DataSourceError(f"Error creando en {collection}: {e}") from e

    def read(self, collection: str, record_id: str) -> Record:
        try:
            with self.session_factory() as db:
                row = self._get_row(db, collection, record_id)
                if row is None:
                    raise RecordNotFoundError(collection, record_id)
                return row.to_record()
        except SQLAlchemyError as e:
            raise DataSourceError(f"Error leyendo {collection}/{record_id}: {e}") from e

    def update(self, collection: str, record_id: str, data: Record) -> Record:
        changes = copy.deepcopy(data)
        changes.pop("id", None)
        try:
            with self.session_factory() as db:
                row = self._get_row(db, collection, record_id)
                if row is None:
                    raise RecordNotFoundError(collection, record_id)
                # Reasignar el dict para que SQLAlchemy detecte el cambio en JSON
                merged = dict(row.data or {})
                merged.update(changes)
                row.data = merged
                db.commit()
                db.refresh(row)
                return row.to_record()
        except SQLAlchemyError as e:
            raise DataSourceError(f"Error actualizando {collection}/{record_id}: {e}") from e

    def delete(self, collection: str, record_id: str) -> None:
        try:
            with self.session_factory() as db:
                row = self._get_row(db, collection, record_id)
                if row is None:
                    raise RecordNotFoundError(collection, record_id)
                db.delete(row)
                db.commit()
        except SQLAlchemyError as e:
            raise DataSourceError(f"Error eliminando {collection}/{record_id}: {e}") from e
