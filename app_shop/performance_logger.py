# ==============================================================================
# SISTEMA DE PROFILING INTERNO
# ==============================================================================
# Mide rendimiento de rutas sin afectar la respuesta.
# Guarda logs legibles en <logs_dir>/ para análisis humano:
#   performance.log  → todas las peticiones
#   slow_routes.log  → peticiones que superan los umbrales
#
# ACTIVAR/DESACTIVAR: Settings.enable_profiling (SHOP_ENABLE_PROFILING)
# ==============================================================================

import logging
import os
import threading
import time
from datetime import datetime

from flask import Flask, g, request

logger = logging.getLogger(__name__)

# Umbrales de tiempo (en milisegundos)
THRESHOLD_WARNING = 300
THRESHOLD_CRITICAL = 700

PERFORMANCE_LOG = 'performance.log'
SLOW_ROUTES_LOG = 'slow_routes.log'

# Nombres legibles por endpoint (para logs más humanos)
ROUTE_NAMES = {
    'POST /api/auth/signup': 'Registrar usuario',
    'POST /api/auth/login': 'Iniciar sesión',
    'GET /api/auth/profile': 'Ver perfil',
    'GET /api/auth/admin/users': 'Listar usuarios',
    'POST /api/auth/admin/addProduct': 'Crear producto',
    'PUT /api/auth/admin/updateProduct/<int:pid>': 'Editar producto',
    'DELETE /api/auth/admin/deleteProduct/<int:pid>': 'Eliminar producto',
    'GET /api/auth/viewProducts': 'Ver productos',
    'POST /api/auth/addToCart': 'Agregar al carrito',
    'GET /api/auth/cart': 'Ver carrito',
}

_write_lock = threading.Lock()


def _get_timestamp():
    """Obtiene timestamp legible"""
    return datetime.now().strftime('%Y-%m-%d %H:%M:%S')


def _write_log(logs_dir, filename, content):
    """Escribe contenido a un archivo de log (thread-safe)"""
    try:
        with _write_lock:
            os.makedirs(logs_dir, exist_ok=True)
            with open(os.path.join(logs_dir, filename), 'a', encoding='utf-8') as f:
                f.write(content)
    except OSError as e:
        # Un log que no se puede escribir no debe romper la respuesta
        logger.warning("No se pudo escribir %s: %s", filename, e)


def get_route_name(method, rule):
    """Nombre legible para una ruta, o la ruta raw."""
    return ROUTE_NAMES.get(f"{method} {rule}", f"{method} {rule}")


def log_route_performance(logs_dir, method, path, rule, time_ms, user=None):
    """
    Registra el rendimiento de una ruta en performance.log

    Args:
        logs_dir: Carpeta de logs
        method: GET, POST, etc.
        path: Ruta solicitada (/api/auth/addToCart)
        rule: Regla de Flask (/api/auth/admin/deleteProduct/<int:pid>)
        time_ms: Tiempo en milisegundos
        user: ID del usuario autenticado (opcional)
    """
    log_entry = f"""
════════════════════════════════════════
[PERFORMANCE] {_get_timestamp()}
────────────────────────────────────────
Acción: {get_route_name(method, rule)}
Usuario: {user or 'anónimo'}
Ruta: {method} {path}
Tiempo: {time_ms:.0f} ms
"""
    _write_log(logs_dir, PERFORMANCE_LOG, log_entry)


def log_slow_route(logs_dir, method, path, rule, time_ms, user=None, level='WARNING'):
    """
    Registra una ruta lenta en slow_routes.log

    Args:
        level: 'WARNING' (>300ms) o 'CRITICAL' (>700ms)
    """
    severity = 'LENTA' if level == 'WARNING' else 'MUY LENTA'
    threshold = THRESHOLD_WARNING if level == 'WARNING' else THRESHOLD_CRITICAL

    log_entry = f"""
[{level}] {_get_timestamp()}
────────────────────────────────────────
Ruta {severity}: {get_route_name(method, rule)}
Usuario: {user or 'anónimo'}
Detalle: {method} {path}
Tiempo: {time_ms:.0f} ms (umbral: {threshold} ms)
────────────────────────────────────────
"""
    _write_log(logs_dir, SLOW_ROUTES_LOG, log_entry)
    logger.warning("Ruta %s: %s %s (%.0f ms)", severity.lower(), method, path, time_ms)


def init_profiling(app: Flask, logs_dir: str, enabled: bool = True):
    """
    Inicializa el sistema de profiling en una app Flask.
    Registra hooks before_request y after_request.

    Uso:
        init_profiling(app, settings.resolved_logs_dir, settings.enable_profiling)
    """
    if not enabled:
        return

    @app.before_request
    def _start_timer():
        g.start_time = time.perf_counter()

    @app.after_request
    def _log_request(response):
        if not hasattr(g, 'start_time'):
            return response

        elapsed = (time.perf_counter() - g.start_time) * 1000  # ms

        method = request.method
        path = request.path
        rule = str(request.url_rule) if request.url_rule else path
        identity = g.get('identity')
        user = identity.id if identity is not None else None

        log_route_performance(logs_dir, method, path, rule, elapsed, user)

        if elapsed >= THRESHOLD_CRITICAL:
            log_slow_route(logs_dir, method, path, rule, elapsed, user, 'CRITICAL')
        elif elapsed >= THRESHOLD_WARNING:
            log_slow_route(logs_dir, method, path, rule, elapsed, user, 'WARNING')

        return response


__all__ = [
    'init_profiling',
    'get_route_name',
    'log_route_performance',
    'log_slow_route',
]
