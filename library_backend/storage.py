from contextlib import contextmanager

from flask import current_app

from library_backend.extensions import db


@contextmanager
def transaction():
    """
    Unit of work over the pooled session.

    Commits when the block finishes, rolls back on any exception and
    re-raises it. The session is closed on every exit path so the
    connection always goes back to the pool.
    """
    session = db.session
    try:
        yield session
        session.commit()
    except Exception as e:
        session.rollback()
        current_app.logger.warning(f"[storage] Transaction rolled back: {e}")
        raise
    finally:
        session.close()


def lock_for_update(query):
    """Exclusive row lock on the selected rows until the transaction ends.

    ``populate_existing`` forces a re-read even when the row is already in
    the identity map, so callers always see the locked state.
    """
    return query.with_for_update().populate_existing()


def shutdown(app):
    with app.app_context():
        db.engine.dispose()
    app.logger.info("[storage] Connection pool disposed.")
