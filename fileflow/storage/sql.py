import logging
from contextlib import contextmanager
from typing import Iterable

from sqlalchemy import select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fileflow.db.session import Base, make_session_factory
from fileflow.errors import Conflict
from fileflow.models.user import User
from fileflow.models.file import UploadedFile
from fileflow.models.chart import Chart
from fileflow.models.admin_request import AdminRequest
from fileflow.schemas.records import UserRecord, FileRecord, ChartRecord, AdminRequestRecord
from fileflow.storage.base import Storage

logger = logging.getLogger(__name__)


class SqlStorage(Storage):
    """Relational storage through the SQLAlchemy ORM (MySQL, PostgreSQL, SQLite).

    Outside a transaction every call opens, commits and closes its own
    session. Inside ``transaction()`` the yielded handle is bound to one
    session that commits once on exit.
    """

    def __init__(self, engine: Engine, session: Session | None = None, create_tables: bool = True):
        self.engine = engine
        self._session_factory = make_session_factory(engine)
        self._session = session
        if create_tables and session is None:
            Base.metadata.create_all(bind=engine)

    @contextmanager
    def _scope(self):
        if self._session is not None:
            yield self._session
            return
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    @contextmanager
    def transaction(self):
        if self._session is not None:
            yield self
            return
        with self._scope() as db:
            yield SqlStorage(self.engine, session=db, create_tables=False)

    def _get(self, model, record_type, key):
        with self._scope() as db:
            row = db.get(model, key)
            return record_type.model_validate(row) if row is not None else None

    def _select(self, record_type, stmt):
        with self._scope() as db:
            return [record_type.model_validate(row) for row in db.scalars(stmt).all()]

    def _add(self, record_type, row):
        with self._scope() as db:
            db.add(row)
            db.flush()
            return record_type.model_validate(row)

    def _update(self, model, record_type, key, updates, from_status=None):
        with self._scope() as db:
            stmt = update(model).where(model.id == key)
            if from_status is not None:
                stmt = stmt.where(model.status == from_status)
            result = db.execute(stmt.values(**updates).execution_options(synchronize_session=False))
            if result.rowcount == 0:
                return None
            row = db.get(model, key, populate_existing=True)
            return record_type.model_validate(row)

    # Users
    def get_user(self, user_id):
        return self._get(User, UserRecord, user_id)

    def get_user_by_email(self, email):
        found = self._select(UserRecord, select(User).where(User.email == email))
        return found[0] if found else None

    def create_user(self, email, password_hash, name, role="user"):
        try:
            return self._add(UserRecord, User(email=email, password_hash=password_hash, name=name, role=role))
        except IntegrityError as e:
            raise Conflict("User already exists") from e

    def update_user(self, user_id, **updates):
        return self._update(User, UserRecord, user_id, updates)

    def list_users(self):
        return self._select(UserRecord, select(User).order_by(User.created_at))

    # Files
    def create_file(self, user_id, filename, original_name, storage_path, data: Iterable[dict], status="pending"):
        row = UploadedFile(
            user_id=user_id,
            filename=filename,
            original_name=original_name,
            storage_path=storage_path,
            status=status,
            data=list(data),
        )
        return self._add(FileRecord, row)

    def get_file(self, file_id):
        return self._get(UploadedFile, FileRecord, file_id)

    def list_files_by_user(self, user_id):
        stmt = select(UploadedFile).where(UploadedFile.user_id == user_id).order_by(UploadedFile.uploaded_at)
        return self._select(FileRecord, stmt)

    def list_pending_files(self):
        stmt = select(UploadedFile).where(UploadedFile.status == "pending").order_by(UploadedFile.uploaded_at)
        return self._select(FileRecord, stmt)

    def list_files(self):
        return self._select(FileRecord, select(UploadedFile).order_by(UploadedFile.uploaded_at))

    def transition_file(self, file_id, from_status, **updates):
        return self._update(UploadedFile, FileRecord, file_id, updates, from_status=from_status)

    # Charts
    def create_chart(self, user_id, file_id, title, type, x_axis, y_axis, config=None):
        row = Chart(
            user_id=user_id,
            file_id=file_id,
            title=title,
            type=type,
            x_axis=x_axis,
            y_axis=y_axis,
            config=config,
        )
        return self._add(ChartRecord, row)

    def get_chart(self, chart_id):
        return self._get(Chart, ChartRecord, chart_id)

    def list_charts_by_user(self, user_id):
        return self._select(ChartRecord, select(Chart).where(Chart.user_id == user_id).order_by(Chart.created_at))

    def list_charts_by_file(self, file_id):
        return self._select(ChartRecord, select(Chart).where(Chart.file_id == file_id).order_by(Chart.created_at))

    def list_charts(self):
        return self._select(ChartRecord, select(Chart).order_by(Chart.created_at))

    # Admin requests
    def create_admin_request(self, user_id, message):
        return self._add(AdminRequestRecord, AdminRequest(user_id=user_id, message=message))

    def get_admin_request(self, request_id):
        return self._get(AdminRequest, AdminRequestRecord, request_id)

    def list_pending_admin_requests(self):
        stmt = (select(AdminRequest)
                .where(AdminRequest.status == "pending")
                .order_by(AdminRequest.requested_at))
        return self._select(AdminRequestRecord, stmt)

    def transition_admin_request(self, request_id, from_status, **updates):
        return self._update(AdminRequest, AdminRequestRecord, request_id, updates, from_status=from_status)
