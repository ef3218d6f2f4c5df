"""
WSGI adapter for servers that cannot speak ASGI.

Run with `gunicorn hoardrun.wsgi:application`; uvicorn against
`hoardrun.main:app` is the primary deployment.
"""

from asgiref.wsgi import AsgiToWsgi

from hoardrun.main import app

application = AsgiToWsgi(app)
