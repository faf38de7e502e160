"""
WSGI config for the donation server.

Exposes the WSGI callable as a module-level variable named `application`.
Run with any WSGI server, for example:

    gunicorn config.wsgi --chdir app --bind 0.0.0.0:$PORT

For more information on this file, see:
https://docs.djangoproject.com/en/5.2/howto/deployment/wsgi/
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_wsgi_application()
