from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session


@contextmanager
def smart_transaction(session: Session) -> Iterator:
    """
    Run the block as one unit of work on the given Session.
    If the block is already inside another smart_transaction, it joins it
    through a SAVEPOINT (begin_nested) and the outermost block commits.
    Otherwise everything flushed in the block is committed on exit, or rolled
    back if the block raises.
    Usage:
        with smart_transaction(db):
            ... DB work ...
    """
    if session.info.get("unit_of_work"):
        with session.begin_nested():
            yield
        return

    session.info["unit_of_work"] = True
    try:
        yield
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.info.pop("unit_of_work", None)
