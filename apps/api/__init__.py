from apps.api import main

from apps.api.main import (FRONTEND_DOMAINS, app, create_app,)

__all__ = ['FRONTEND_DOMAINS', 'app', 'create_app', 'main']
