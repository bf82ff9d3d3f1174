#!/usr/bin/env python
"""
Local server for the relevés application

Usage:
    python run.py

Listens on all interfaces, port $PORT (default 3000).
"""

from app import create_app

if __name__ == '__main__':
    app = create_app()

    # Print registered routes for debugging
    print("\n=== Registered Routes ===")
    for rule in app.url_map.iter_rules():
        print(f"{rule.rule:40s} -> {rule.endpoint}")
    print("=" * 70)
    print(f"Serveur en local sur http://localhost:{app.config['PORT']}")

    app.run(host='0.0.0.0', port=app.config['PORT'])
