"""
ASGI config for the donation server.

Views are synchronous; under an ASGI server Django runs them in a thread
pool, so the blocking Stripe and Kafka calls do not stall the event loop.

For more information on this file, see:
https://docs.djangoproject.com/en/5.2/howto/deployment/asgi/
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_asgi_application()
