from django.http import HttpResponse
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

# — Registry exclusivo da aplicação
registry = CollectorRegistry()

# — HTTP (views REST)
HTTP_REQUEST_LATENCY = Histogram(
    'labora_request_duration_seconds',
    'Latência de requisições HTTP',
    ['method', 'view', 'status'],
    registry=registry,
)
HTTP_REQUEST_COUNT = Counter(
    'labora_requests_total',
    'Total de requisições HTTP',
    ['method', 'view', 'status'],
    registry=registry,
)

# — Armazenamento externo
STORE_REQUEST_COUNT = Counter(
    'store_requests_total',
    'Requisições ao armazenamento externo',
    ['method', 'table', 'outcome'],
    registry=registry,
)

# — Orçamentos
QUOTE_TRANSITIONS = Counter(
    'quote_transitions_total',
    'Transições de status de orçamentos',
    ['status'],
    registry=registry,
)

# — Documentos
PDF_EXPORTS = Counter(
    'pdf_exports_total',
    'PDFs gerados',
    ['kind', 'outcome'],
    registry=registry,
)
PDF_EXPORT_DURATION = Histogram(
    'pdf_export_duration_seconds',
    'Duração da geração de PDF',
    ['kind'],
    registry=registry,
)


def metrics(request):
    data = generate_latest(registry)
    return HttpResponse(data, content_type=CONTENT_TYPE_LATEST)
