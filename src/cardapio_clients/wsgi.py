"""WSGI entry point: ``gunicorn cardapio_clients.wsgi:app``."""

from cardapio_clients.app import create_app

app = create_app()
