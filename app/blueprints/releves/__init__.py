# app/blueprints/releves/__init__.py
"""
Relevés Blueprint

Responsible for:
- Landing page
- JSON API: create, history with filters, update, delete
- Export of one relevé to PDF or Excel

JSON field names are date, time, operator, workstation, article, machine,
treatment and payload. They are stored in the columns date, heure,
operateur, poste, article, machine, traitement and data. Clients that post
the column names (heure, operateur, ...) are not translated: those fields
are stored as NULL.
"""

from flask import Blueprint

releves_bp = Blueprint('releves', __name__, url_prefix='/')

# Import routes after blueprint creation to avoid circular imports
from . import routes
