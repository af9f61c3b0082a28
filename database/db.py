from sqlalchemy import create_engine, event          # SQLAlchemy engine + connection hooks
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from config.settings import settings


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def build_engine(url: str, echo: bool = False, **kwargs) -> Engine:
    """Create an engine; SQLite connections get foreign keys and a Unicode-aware lower()."""
    if url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        kwargs["connect_args"] = connect_args

    new_engine = create_engine(url, echo=echo, **kwargs)

    if new_engine.dialect.name == "sqlite":
        # SQLite ignores ON DELETE RESTRICT / SET NULL unless asked per connection.
        # Its built-in lower() only folds ASCII, so it is replaced with str.lower.
        @event.listens_for(new_engine, "connect")
        def _configure_sqlite(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
            dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)

    return new_engine


# ✅ engine built from the configured URL
engine = build_engine(settings.DB_URL, echo=settings.SQL_ECHO)

# ✅ session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ✅ declarative base every model inherits from
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = None) -> None:
    """Create every table that does not exist yet."""
    import models  # noqa: F401  (registers the tables on Base.metadata)

    Base.metadata.create_all(bind=bind or engine)
