# app/storage.py
"""
Storage operations for relevés.

ReleveStore wraps a SQLAlchemy session; handlers obtain one per request
through get_store() instead of touching a global connection.
"""

from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db
from models import Releve
from utils import dump_payload, normalize_payload


def _columns(fields):
    """Map request fields onto model attributes; missing keys become None."""
    return {name: fields.get(name) for name, _label in Releve.FIELDS}


class ReleveStore:

    def __init__(self, session):
        self.session = session

    def insert(self, fields):
        """Insert a new relevé and return its id."""
        r = Releve(**_columns(fields))
        r.payload = normalize_payload(fields.get('payload'))
        try:
            self.session.add(r)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        return r.id

    def query(self, date=None, machine=None, article=None):
        """
        List relevés, newest first.

        `date` and `machine` match exactly, `article` matches as a substring.
        Empty filters are ignored.
        """
        conditions = []
        if date:
            conditions.append(Releve.date == date)
        if machine:
            conditions.append(Releve.machine == machine)
        if article:
            conditions.append(Releve.article.contains(article))

        q = self.session.query(Releve).filter(*conditions)
        return q.order_by(Releve.id.desc()).all()

    def update(self, releve_id, fields):
        """Overwrite every field of a relevé. Returns the number of rows changed."""
        values = _columns(fields)
        values['data'] = dump_payload(normalize_payload(fields.get('payload')))
        try:
            count = self.session.query(Releve).filter_by(id=releve_id).update(
                values, synchronize_session=False)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        return count

    def delete(self, releve_id):
        """Delete a relevé. Returns the number of rows removed."""
        try:
            count = self.session.query(Releve).filter_by(id=releve_id).delete(
                synchronize_session=False)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        return count

    def get_by_id(self, releve_id):
        return self.session.get(Releve, releve_id)


def get_store():
    """ReleveStore bound to the current application's session."""
    return ReleveStore(db.session)
