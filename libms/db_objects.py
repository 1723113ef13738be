from sqlalchemy import event

from libms.extensions import db


def _install_sqlite_locking(engine):
    """
    SQLite has no row locks. Every transaction is opened with BEGIN IMMEDIATE
    so that writers are serialized from their first statement; a second
    reservation of the last copy then waits for the first to commit and sees
    available = 0.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        # pysqlite would otherwise emit its own deferred BEGIN
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def ensure_db_objects(app):
    with app.app_context():
        engine = db.engine
        if engine.dialect.name == "sqlite":
            _install_sqlite_locking(engine)
            app.logger.info("[db_objects] sqlite: BEGIN IMMEDIATE transactions enabled.")

        if not app.config.get("AUTO_CREATE_TABLES"):
            return

        # model metadata must be registered before create_all
        from libms.models import user, category, book, borrowing_request, revoked_token  # noqa: F401

        try:
            db.create_all()
            app.logger.info("[db_objects] tables ensured.")
        except Exception as e:
            app.logger.error(f"[db_objects] create_all failed: {e}")
            raise
