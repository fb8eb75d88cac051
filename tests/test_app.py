import logging

from app.api.routes import health
from app.core.config import Settings
from app.core.logging import OperationLogger
from app.server import build_config


def test_health(client, monkeypatch):
    monkeypatch.setattr(health, "check_connection", lambda: True)

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["database"] == "reachable"


def test_operation_logger_agrega_contexto(caplog):
    log = OperationLogger(logging.getLogger("tests"), "subscriptions.get", subscription_id=5)

    with caplog.at_level(logging.INFO, logger="tests"):
        log.bind(count=2).info("success")

    assert "success | op=subscriptions.get subscription_id=5 count=2" in caplog.text


def test_log_summary_oculta_password():
    settings = Settings(DATABASE_URL="postgresql://user:secreto@db:5432/subs")

    resumen = settings.log_summary()

    assert "secreto" not in resumen
    assert "db:5432/subs" in resumen


def test_server_usa_timeout_de_apagado():
    config = build_config()

    assert config.timeout_graceful_shutdown == 10
    assert config.port == 8080
