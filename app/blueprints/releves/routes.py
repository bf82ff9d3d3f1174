# app/blueprints/releves/routes.py
"""
Relevés routes - JSON API and exports
"""

from io import BytesIO

from flask import request, current_app, send_file, jsonify
from sqlalchemy.exc import SQLAlchemyError

from app.exports import EXPORT_TYPES, render_pdf, render_workbook
from app.extensions import db
from app.storage import get_store
from utils import PayloadError
from . import releves_bp


def _text(message, status):
    return message, status, {'Content-Type': 'text/plain; charset=utf-8'}


def _storage_error(e, action):
    db.session.rollback()
    current_app.logger.exception(f'Storage error during {action}')
    return _text(str(e), 500)


def _body():
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


@releves_bp.route('/')
def index():
    return current_app.send_static_file('index.html')


@releves_bp.route('/api/releve', methods=['POST'])
def create_releve():
    try:
        releve_id = get_store().insert(_body())
    except PayloadError as e:
        return _text(str(e), 400)
    except SQLAlchemyError as e:
        return _storage_error(e, 'releve.create')

    current_app.logger.info(f'Releve created: {releve_id}')
    return jsonify({'success': True, 'id': releve_id})


@releves_bp.route('/api/historique')
def historique():
    """List relevés, optionally filtered by date, machine and article"""
    date = request.args.get('date', '')
    machine = request.args.get('machine', '')
    article = request.args.get('article', '')

    try:
        releves = get_store().query(date=date, machine=machine, article=article)
        return jsonify([r.to_dict() for r in releves])
    except SQLAlchemyError as e:
        return _storage_error(e, 'historique')


@releves_bp.route('/api/releve/<int:releve_id>', methods=['PUT'])
def update_releve(releve_id):
    try:
        count = get_store().update(releve_id, _body())
    except PayloadError as e:
        return _text(str(e), 400)
    except SQLAlchemyError as e:
        return _storage_error(e, 'releve.update')

    current_app.logger.info(f'Releve updated: {releve_id} rows={count}')
    return jsonify({'success': True})


@releves_bp.route('/api/releve/<int:releve_id>', methods=['DELETE'])
def delete_releve(releve_id):
    try:
        count = get_store().delete(releve_id)
    except SQLAlchemyError as e:
        return _storage_error(e, 'releve.delete')

    current_app.logger.info(f'Releve deleted: {releve_id} rows={count}')
    return jsonify({'success': True})


@releves_bp.route('/api/releve/<int:releve_id>/export')
def export_releve(releve_id):
    """Export one relevé as PDF (?type=pdf) or Excel (?type=excel)"""
    export_type = request.args.get('type', '')

    try:
        r = get_store().get_by_id(releve_id)
    except SQLAlchemyError as e:
        return _storage_error(e, 'releve.export')
    if r is None:
        return _text('Relevé introuvable', 404)

    if export_type not in EXPORT_TYPES:
        return _text("Type d'export non pris en charge", 400)

    extension, mimetype = EXPORT_TYPES[export_type]
    logo_path = current_app.config.get('LOGO_PATH')
    if export_type == 'pdf':
        bio = BytesIO(render_pdf(r, logo_path))
    else:
        bio = render_workbook(r, logo_path)

    current_app.logger.info(f'Releve exported: {releve_id} type={export_type}')
    return send_file(bio, as_attachment=True, download_name=f'releve_{releve_id}.{extension}', mimetype=mimetype)
