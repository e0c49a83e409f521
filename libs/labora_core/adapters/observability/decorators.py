import time
from functools import wraps

from labora_core.adapters.observability.metrics import HTTP_REQUEST_COUNT, HTTP_REQUEST_LATENCY


def track_http(view_name):
    """
    Conta e mede a latência de uma action de ViewSet/APIView.
    Exceções passam pelo `handle_exception` da view para que o status
    registrado seja o da resposta efetivamente devolvida.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(self, request, *args, **kwargs):
            start = time.perf_counter()
            status = "500"
            try:
                try:
                    resp = fn(self, request, *args, **kwargs)
                except Exception as exc:
                    resp = self.handle_exception(exc)
                status = str(resp.status_code)
                return resp
            finally:
                labels = (request.method, view_name, status)
                HTTP_REQUEST_COUNT.labels(*labels).inc()
                HTTP_REQUEST_LATENCY.labels(*labels).observe(time.perf_counter() - start)
        return wrapper
    return decorator
