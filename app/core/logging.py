import logging

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging():
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=LOG_FORMAT)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.DB_ECHO else logging.WARNING
    )


class OperationLogger(logging.LoggerAdapter):
    """
    Logger con el contexto de una operación (nombre + campos).
    Se crea uno por llamada y se pasa explícitamente, nada de estado global.

        log = OperationLogger(logger, "subscriptions.get", subscription_id=5)
        log.info("success")  ->  "success | op=subscriptions.get subscription_id=5"
    """

    def __init__(self, logger: logging.Logger, op: str, **fields):
        super().__init__(logger, {"op": op, **fields})

    def bind(self, **fields) -> "OperationLogger":
        merged = dict(self.extra)
        op = merged.pop("op")
        return OperationLogger(self.logger, op, **merged, **fields)

    def process(self, msg, kwargs):
        context = " ".join(f"{key}={value}" for key, value in self.extra.items())
        return f"{msg} | {context}", kwargs
