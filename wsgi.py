# ==============================================================================
# WSGI Entry Point - Para Gunicorn en producción
# ==============================================================================
# USO:
#   gunicorn wsgi:app --bind 0.0.0.0:$PORT
#
# Para desarrollo local:
#   python wsgi.py
#
# La configuración se lee UNA vez desde variables de entorno (ver
# app_shop/config.py) y se inyecta en la app.
# ==============================================================================

import logging

from app_shop.config import Settings
from app_shop.main import create_app

settings = Settings.from_env()

logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s'
)

app = create_app(settings)

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=settings.port)
