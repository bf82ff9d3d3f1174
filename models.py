from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event

from utils import dump_payload, load_payload

# SQLAlchemy instance (init in app)
db = SQLAlchemy()


def _set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable WAL mode and other optimizations for SQLite."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA synchronous=NORMAL")
    cursor.execute("PRAGMA busy_timeout=5000")
    cursor.close()


def init_db_events(app):
    """Initialize database event listeners for SQLite optimizations."""
    if app.config.get('SQLALCHEMY_DATABASE_URI', '').startswith('sqlite'):
        with app.app_context():
            event.listen(db.engine, "connect", _set_sqlite_pragma)


class Releve(db.Model):
    __tablename__ = 'releves'
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    date = db.Column(db.Text, nullable=True)
    time = db.Column('heure', db.Text, nullable=True)
    operator = db.Column('operateur', db.Text, nullable=True)
    workstation = db.Column('poste', db.Text, nullable=True)
    article = db.Column(db.Text, nullable=True)
    machine = db.Column(db.Text, nullable=True)
    treatment = db.Column('traitement', db.Text, nullable=True)
    data = db.Column(db.Text, nullable=True)  # payload, JSON text

    # Fixed fields in display order, with the labels shown in exports
    FIELDS = (
        ('date', 'Date'),
        ('time', 'Heure'),
        ('operator', 'Opérateur'),
        ('workstation', 'Poste'),
        ('article', 'Article'),
        ('machine', 'Machine'),
        ('treatment', 'Traitement'),
    )

    @property
    def payload(self):
        return load_payload(self.data)

    @payload.setter
    def payload(self, value):
        self.data = dump_payload(value)

    def to_dict(self):
        d = {'id': self.id}
        for name, _label in self.FIELDS:
            d[name] = getattr(self, name)
        d['payload'] = self.payload
        return d

    def __repr__(self):
        return f"<Releve {self.id} {self.article}>"
