import logging
import time
import uuid
from typing import Sequence

from sqlmodel import Session

from app.core.exceptions import EntityNotFoundError, InternalServiceError
from app.core.logging import OperationLogger
from app.models.models import Subscription
from app.repositories.subscription_repository import (
    RecordNotFoundError,
    RepositoryError,
    SubscriptionRepository,
)
from app.schemas.subscription import (
    ERR_INTERNAL,
    ERR_NOT_FOUND,
    CostFilter,
    ListParams,
    SubscriptionCreate,
    SubscriptionUpdate,
    TotalCost,
)

logger = logging.getLogger(__name__)


def _map_error(exc: RepositoryError) -> Exception:
    # La capa HTTP solo conoce estos dos errores
    if isinstance(exc, RecordNotFoundError):
        return EntityNotFoundError(ERR_NOT_FOUND)
    return InternalServiceError(ERR_INTERNAL)


class SubscriptionService:
    def __init__(self, session: Session):
        self.repo = SubscriptionRepository(session)

    def crear(self, data: SubscriptionCreate) -> Subscription:
        log = OperationLogger(logger, "subscriptions.create", user_id=data.user_id)
        log.info("process started")
        try:
            subscription = self.repo.create(
                service_name=data.service_name,
                price=data.price,
                user_id=data.user_id,
                start_date=data.start_date,
                end_date=data.end_date,
            )
        except RepositoryError as exc:
            log.error(f"failed to create subscription: {exc}")
            raise _map_error(exc) from exc

        log.bind(subscription_id=subscription.id).info("subscription created")
        return subscription

    def obtener(self, subscription_id: int) -> Subscription:
        log = OperationLogger(logger, "subscriptions.get", subscription_id=subscription_id)
        log.info("process started")
        try:
            subscription = self.repo.get(subscription_id)
        except RepositoryError as exc:
            log.error(f"failed to get subscription: {exc}")
            raise _map_error(exc) from exc

        log.info("success")
        return subscription

    def listar(self, params: ListParams, user_id: uuid.UUID | None = None) -> Sequence[Subscription]:
        inicio = time.perf_counter()
        log = OperationLogger(
            logger,
            "subscriptions.list_by_user" if user_id else "subscriptions.list",
            limit=params.limit,
            offset=params.offset,
        )
        if user_id is not None:
            log = log.bind(user_id=user_id)
        log.info("process started")
        try:
            subscriptions = self.repo.list_all(params, user_id=user_id)
        except RepositoryError as exc:
            log.error(f"failed to list subscriptions: {exc}")
            raise _map_error(exc) from exc

        log.bind(count=len(subscriptions), duration=f"{time.perf_counter() - inicio:.4f}s").info("success")
        return subscriptions

    def actualizar(self, subscription_id: int, data: SubscriptionUpdate) -> Subscription:
        changes = data.changes()
        log = OperationLogger(
            logger, "subscriptions.update", subscription_id=subscription_id, fields=",".join(changes) or "-"
        )
        log.info("process started")
        try:
            subscription = self.repo.update(subscription_id, changes)
        except RepositoryError as exc:
            log.error(f"failed to update subscription: {exc}")
            raise _map_error(exc) from exc

        log.info("success")
        return subscription

    def eliminar(self, subscription_id: int) -> None:
        log = OperationLogger(logger, "subscriptions.delete", subscription_id=subscription_id)
        log.info("process started")
        try:
            self.repo.delete(subscription_id)
        except RepositoryError as exc:
            log.error(f"failed to delete subscription: {exc}")
            raise _map_error(exc) from exc

        log.info("success")

    def calcular_costo_total(self, filtro: CostFilter) -> TotalCost:
        inicio = time.perf_counter()
        log = OperationLogger(
            logger,
            "subscriptions.total_cost",
            start=filtro.start_period,
            end=filtro.end_period,
            user_id=filtro.user_id,
            service_name=filtro.service_name,
        )
        log.info("process started")
        try:
            resultado = self.repo.total_cost(filtro)
        except RepositoryError as exc:
            log.error(f"failed to calculate total cost: {exc}")
            raise _map_error(exc) from exc

        log.bind(
            total_cost=resultado.total_cost,
            count=resultado.count,
            duration=f"{time.perf_counter() - inicio:.4f}s",
        ).debug("success")
        return resultado
