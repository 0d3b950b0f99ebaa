from contextlib import contextmanager

from sqlalchemy.dialects import postgresql, sqlite

_INSERT_BY_DIALECT = {
    'postgresql': postgresql.insert,
    'sqlite': sqlite.insert,
}


@contextmanager
def atomic(session):
    """Commit the session when the block exits cleanly, roll back otherwise."""
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise


def insert_ignoring_duplicates(session, model, index_elements):
    """Build an INSERT for ``model`` that is a no-op when the unique key already exists."""
    dialect_name = session.get_bind().dialect.name
    insert = _INSERT_BY_DIALECT.get(dialect_name)
    if insert is None:
        raise RuntimeError(f'Unsupported database dialect: {dialect_name}')
    return insert(model.__table__).on_conflict_do_nothing(index_elements=index_elements)
