"""WSGI entrypoint for Gunicorn-style servers."""
import os

from padel_api.app import create_app

config_name = os.environ.get('FLASK_ENV', 'production')
app = create_app(config_name)
