"""
WSGI config for the RedHope API.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'redhope.settings')

application = get_wsgi_application()
