# app/cli.py
"""
Flask CLI commands: database management and offline exports.
"""

import os
import sqlite3
from datetime import datetime

import click

from app.extensions import db
from app.exports import EXPORT_TYPES, render_pdf, render_workbook
from app.storage import get_store


def register_commands(app):

    @app.cli.command('init-db')
    def init_db():
        """Create database tables."""
        db.create_all()
        click.echo('Initialized the database.')

    @app.cli.command('backup-db')
    @click.option('--output', '-o', default=None, help='Output file path (default: data/backup_YYYYMMDD_HHMMSS.db)')
    def backup_db(output):
        """Create a safe backup of the SQLite database (works with WAL mode)."""
        db_uri = app.config.get('SQLALCHEMY_DATABASE_URI', '')
        if not db_uri.startswith('sqlite:///') or db_uri.endswith(':memory:'):
            click.echo('Backup command only works with file-backed SQLite databases')
            return

        source_path = db_uri.replace('sqlite:///', '')
        if not os.path.exists(source_path):
            click.echo(f'Database file not found: {source_path}')
            return

        # Generate default output path
        if not output:
            backup_dir = os.path.dirname(source_path)
            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            output = os.path.join(backup_dir, f'backup_{timestamp}.db')

        output_dir = os.path.dirname(output)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)

        try:
            # SQLite backup API for a safe hot backup
            source_conn = sqlite3.connect(source_path)
            dest_conn = sqlite3.connect(output)
            try:
                source_conn.backup(dest_conn)
            finally:
                source_conn.close()
                dest_conn.close()
        except sqlite3.Error as e:
            app.logger.exception('Database backup failed')
            raise click.ClickException(f'Backup failed: {e}')

        size_mb = os.path.getsize(output) / (1024 * 1024)
        click.echo(f'Backup created successfully: {output} ({size_mb:.2f} MB)')
        app.logger.info(f'Database backup created: {output}')

    @app.cli.command('export-releve')
    @click.argument('releve_id', type=int)
    @click.option('--type', 'export_type', type=click.Choice(sorted(EXPORT_TYPES)), default='pdf', show_default=True)
    @click.option('--output', '-o', default=None, help='Output file path (default: releve_<id>.<ext>)')
    def export_releve(releve_id, export_type, output):
        """Write one relevé to a PDF or Excel file: flask export-releve <id> --type excel"""
        r = get_store().get_by_id(releve_id)
        if r is None:
            raise click.ClickException(f'Relevé {releve_id} introuvable')

        extension, _mimetype = EXPORT_TYPES[export_type]
        output = output or f'releve_{releve_id}.{extension}'
        logo_path = app.config.get('LOGO_PATH')
        if export_type == 'pdf':
            content = render_pdf(r, logo_path)
        else:
            content = render_workbook(r, logo_path).getvalue()

        with open(output, 'wb') as fh:
            fh.write(content)
        app.logger.info(f'Releve exported from CLI: {releve_id} type={export_type} -> {output}')
        click.echo(f'Exported relevé {releve_id} to {output}')
