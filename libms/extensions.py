from contextlib import contextmanager

from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()


@contextmanager
def transaction():
    """
    Single commit point for a unit of work.

    Book and borrowing-request repositories only stage changes on db.session;
    everything staged inside the block is committed together, or rolled back
    together if the block raises.
    """
    try:
        yield db.session
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
