import logging
import sys

import structlog
from decouple import config


def configure_logging(level: str | None = None, json_logs: bool | None = None) -> None:
    """
    Configura structlog + logging:
     - Em `json_logs` (env JSON_LOGS) ativa JSONRenderer para produção.
     - Caso contrário, usa ConsoleRenderer colorido para dev.
     - Nível vem de `level` ou da env LOG_LEVEL (padrão INFO).
    Deve ser chamado ANTES de qualquer import que crie loggers.
    """
    level = (level or config("LOG_LEVEL", default="INFO")).upper()
    if json_logs is None:
        json_logs = config("JSON_LOGS", default=False, cast=bool)

    # Pré-processors comuns a stdlib e structlog
    pre_chain = [
        structlog.contextvars.merge_contextvars,     # request_id, path, user_id
        structlog.processors.add_log_level,          # level na raiz JSON / console
        structlog.processors.TimeStamper(fmt="iso"), # timestamp ISO-8601
    ]

    final_processor = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(colors=True)
    from structlog.processors import CallsiteParameter, CallsiteParameterAdder

    structlog.configure(
        processors=[
            *pre_chain,
            CallsiteParameterAdder(
                parameters=[
                    CallsiteParameter.MODULE,
                    CallsiteParameter.FUNC_NAME,
                    CallsiteParameter.LINENO,
                ]
            ),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,# ponte para stdlib
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level)
        ),
        cache_logger_on_first_use=True,
    )

    # Formatter para loggers stdlib (Django, urllib3...)
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=final_processor,
        foreign_pre_chain=pre_chain,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    logging.captureWarnings(True)
