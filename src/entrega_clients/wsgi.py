"""WSGI entry point: ``gunicorn entrega_clients.wsgi:app``."""

from entrega_clients.app import create_app

app = create_app()
