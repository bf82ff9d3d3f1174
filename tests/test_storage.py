import pytest
from app import create_app
from app.extensions import db
from app.storage import ReleveStore, get_store
from config import TestConfig
from models import Releve
from utils import PayloadError

@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

@pytest.fixture
def store(app):
    return get_store()


def test_get_store_uses_app_session(store):
    assert isinstance(store, ReleveStore)
    assert store.session is db.session


def test_insert_assigns_increasing_ids(store):
    a = store.insert({'article': 'A'})
    b = store.insert({'article': 'B'})
    assert b > a
    assert store.get_by_id(a).article == 'A'


def test_insert_keeps_nested_payload_values(store):
    releve_id = store.insert({'payload': {'cycles': [1, 2], 'params': {'t': 1}, 3: 'x'}})
    assert store.get_by_id(releve_id).payload == {'cycles': [1, 2], 'params': {'t': 1}, '3': 'x'}


def test_insert_rejects_scalar_payload(store):
    with pytest.raises(PayloadError):
        store.insert({'payload': 'temperature=850'})
    assert store.query() == []


def test_query_article_is_substring_match(store):
    store.insert({'article': 'ABC-1'})
    store.insert({'article': 'xx-ABC'})
    store.insert({'article': 'DEF'})
    assert sorted(r.article for r in store.query(article='ABC')) == ['ABC-1', 'xx-ABC']


def test_query_filters_are_conjunctive(store):
    store.insert({'date': '2025-01-01', 'machine': 'M1', 'article': 'ABC'})
    store.insert({'date': '2025-01-01', 'machine': 'M2', 'article': 'ABC'})
    store.insert({'date': '2025-01-02', 'machine': 'M1', 'article': 'ABC'})
    rows = store.query(date='2025-01-01', machine='M1', article='AB')
    assert len(rows) == 1
    assert (rows[0].date, rows[0].machine) == ('2025-01-01', 'M1')


def test_update_and_delete_report_row_counts(store):
    releve_id = store.insert({'article': 'A', 'payload': {'k': 1}})
    assert store.update(releve_id, {'article': 'B'}) == 1
    r = store.get_by_id(releve_id)
    assert r.article == 'B'
    assert r.payload is None

    assert store.update(releve_id + 100, {'article': 'C'}) == 0
    assert store.delete(releve_id + 100) == 0
    assert store.delete(releve_id) == 1
    assert store.get_by_id(releve_id) is None


def test_to_dict_uses_api_field_names(store):
    releve_id = store.insert({'time': '10:00', 'workstation': 'P1', 'treatment': 'Revenu', 'payload': {'a': 'b'}})
    d = store.get_by_id(releve_id).to_dict()
    assert list(d) == ['id', 'date', 'time', 'operator', 'workstation', 'article', 'machine', 'treatment', 'payload']
    assert d['time'] == '10:00'
    assert d['payload'] == {'a': 'b'}


def test_columns_keep_original_names(app):
    columns = [c.name for c in Releve.__table__.columns]
    assert columns == ['id', 'date', 'heure', 'operateur', 'poste', 'article', 'machine', 'traitement', 'data']
