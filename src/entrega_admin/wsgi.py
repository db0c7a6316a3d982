"""WSGI entry point: ``gunicorn entrega_admin.wsgi:app``."""

from entrega_admin.app import create_app

app = create_app()
