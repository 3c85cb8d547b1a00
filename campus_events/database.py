from contextlib import contextmanager
from threading import Lock
from typing import Iterator

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from campus_events.core import config


engine = create_engine(config.DATABASE_URL, echo=config.DATABASE_ECHO)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

_schema_lock = Lock()
_event_schema_checked = False


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """Run a unit of work as one transaction.

    Commits when the block exits normally. Any exception, domain errors
    included, rolls back everything written inside the block and is re-raised.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def ensure_event_schema(bind=None) -> None:
    """Create the lookup indexes behind event visibility and member counts."""
    global _event_schema_checked

    if _event_schema_checked:
        return

    bind = bind or engine

    with _schema_lock:
        if _event_schema_checked:
            return

        inspector = inspect(bind)
        table_names = set(inspector.get_table_names())

        if 'events' not in table_names:
            _event_schema_checked = True
            return

        with bind.begin() as connection:
            connection.execute(
                text('CREATE INDEX IF NOT EXISTS idx_events_type_university ON events(event_type, university_id)')
            )
            connection.execute(
                text('CREATE INDEX IF NOT EXISTS idx_events_type_approved ON events(event_type, approved)')
            )
            if 'rso_members' in table_names:
                connection.execute(
                    text('CREATE INDEX IF NOT EXISTS idx_rso_members_rso ON rso_members(rso_id)')
                )

        _event_schema_checked = True
