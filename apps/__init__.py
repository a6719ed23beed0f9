from apps import api

from apps.api import (FRONTEND_DOMAINS, app, create_app, main,)

__all__ = ['FRONTEND_DOMAINS', 'api', 'app', 'create_app', 'main']
