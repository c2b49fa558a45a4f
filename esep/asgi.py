"""
ASGI config for the esep project.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'esep.settings')

application = get_asgi_application()
