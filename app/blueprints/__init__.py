# app/blueprints/__init__.py
