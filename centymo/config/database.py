from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from .settings import settings

# SQLite necesita compartir la conexión entre hilos del servidor
connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

# Create engine
engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    pool_recycle=300,
    echo=settings.debug,
    connect_args=connect_args
)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()

def init_db(bind=None):
    """Crear las tablas de los modelos registrados en Base"""
    from centymo.shared.database import models  # noqa: F401  registra los modelos

    Base.metadata.create_all(bind=bind or engine)
