import pytest
from openpyxl import load_workbook

from app import create_app
from app.extensions import db
from config import Config
from models import Releve

@pytest.fixture
def app(tmp_path):
    class FileConfig(Config):
        TESTING = True
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'data' / 'releves.db'}"
        LOGO_PATH = str(tmp_path / 'missing-logo.png')

    app = create_app(FileConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()

@pytest.fixture
def runner(app):
    return app.test_cli_runner()


def ensure_releve(app):
    with app.app_context():
        r = Releve(article='ABC-123', machine='Four 1')
        r.payload = {'temperature': 850}
        db.session.add(r)
        db.session.commit()
        return r.id


def test_database_directory_created(app, tmp_path):
    assert (tmp_path / 'data').is_dir()


def test_init_db(runner):
    result = runner.invoke(args=['init-db'])
    assert result.exit_code == 0
    assert 'Initialized the database.' in result.output


def test_backup_db(app, runner, tmp_path):
    ensure_releve(app)
    output = tmp_path / 'backups' / 'copy.db'
    result = runner.invoke(args=['backup-db', '-o', str(output)])
    assert result.exit_code == 0, result.output
    assert 'Backup created successfully' in result.output
    assert output.exists()


def test_export_releve_excel(app, runner, tmp_path):
    releve_id = ensure_releve(app)
    output = tmp_path / 'out.xlsx'
    result = runner.invoke(args=['export-releve', str(releve_id), '--type', 'excel', '-o', str(output)])
    assert result.exit_code == 0, result.output
    ws = load_workbook(output).active
    assert ws['B7'].value == 'ABC-123'
    assert [ws['A12'].value, ws['B12'].value] == ['temperature', 850]


def test_export_releve_missing(runner):
    result = runner.invoke(args=['export-releve', '999', '--type', 'excel'])
    assert result.exit_code != 0
    assert 'introuvable' in result.output
