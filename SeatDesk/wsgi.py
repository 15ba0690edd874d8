"""
WSGI config for SeatDesk, used by gunicorn (see gunicorn_config.py).
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'SeatDesk.settings')

application = get_wsgi_application()
