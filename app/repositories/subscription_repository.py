import logging
import uuid
from datetime import date
from typing import Sequence

from sqlalchemy import delete, or_, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, desc, func, select

from app.models.models import Subscription
from app.schemas.subscription import CostFilter, ListParams, TotalCost
from app.utils.utils import last_day_of_month

logger = logging.getLogger(__name__)

# Columnas que se pueden modificar con un PATCH
UPDATABLE_FIELDS = ("service_name", "price", "end_date")

# sqlite3 lanza OverflowError al bindear enteros fuera de rango, sin envolverlo
DB_ERRORS = (SQLAlchemyError, OverflowError)


class RepositoryError(Exception):
    """Raised when a statement fails at the database level"""
    pass


class RecordNotFoundError(RepositoryError):
    """Raised when the requested row does not exist"""
    pass


class SubscriptionRepository:
    def __init__(self, session: Session):
        self.session = session

    def _fail(self, op: str, exc: Exception) -> RepositoryError:
        logger.error(f"{op} failed: {exc}")
        self.session.rollback()
        return RepositoryError(f"{op} failed")

    def create(
        self,
        service_name: str,
        price: int,
        user_id: uuid.UUID,
        start_date: date,
        end_date: date | None = None,
    ) -> Subscription:
        subscription = Subscription(
            service_name=service_name,
            price=price,
            user_id=user_id,
            start_date=start_date,
            end_date=end_date,
        )
        try:
            self.session.add(subscription)
            self.session.commit()
            self.session.refresh(subscription)
        except DB_ERRORS as exc:
            raise self._fail("create", exc) from exc
        return subscription

    def get(self, subscription_id: int) -> Subscription:
        try:
            subscription = self.session.get(Subscription, subscription_id)
        except DB_ERRORS as exc:
            raise self._fail("get", exc) from exc
        if subscription is None:
            raise RecordNotFoundError(f"subscription {subscription_id} not found")
        return subscription

    def list_all(self, params: ListParams, user_id: uuid.UUID | None = None) -> Sequence[Subscription]:
        query = select(Subscription)
        if user_id is not None:
            query = query.where(Subscription.user_id == user_id)
        query = (
            query.order_by(desc(Subscription.created_at), desc(Subscription.id))
            .offset(params.offset)
            .limit(params.limit)
        )
        try:
            return self.session.exec(query).all()
        except SQLAlchemyError as exc:
            raise self._fail("list", exc) from exc

    def update(self, subscription_id: int, changes: dict) -> Subscription:
        """
        Actualiza solo los campos presentes en `changes`.
        Cada campo se agrega como un parámetro del UPDATE, nunca como texto SQL.
        Sin cambios no se ejecuta nada y se devuelve el registro actual.
        """
        values = {campo: changes[campo] for campo in UPDATABLE_FIELDS if campo in changes}
        if not values:
            return self.get(subscription_id)

        statement = update(Subscription).where(col(Subscription.id) == subscription_id).values(**values)
        statement = statement.execution_options(synchronize_session="evaluate")
        try:
            result = self.session.execute(statement)
            if result.rowcount == 0:
                self.session.rollback()
                raise RecordNotFoundError(f"subscription {subscription_id} not found")
            self.session.commit()
        except DB_ERRORS as exc:
            raise self._fail("update", exc) from exc
        return self.get(subscription_id)

    def delete(self, subscription_id: int) -> None:
        statement = delete(Subscription).where(col(Subscription.id) == subscription_id).execution_options(
            synchronize_session="evaluate"
        )
        try:
            result = self.session.execute(statement)
            if result.rowcount == 0:
                self.session.rollback()
                raise RecordNotFoundError(f"subscription {subscription_id} not found")
            self.session.commit()
        except DB_ERRORS as exc:
            raise self._fail("delete", exc) from exc

    def total_cost(self, filtro: CostFilter) -> TotalCost:
        # El periodo incluye el mes final completo
        period_end = last_day_of_month(filtro.end_period)

        query = select(
            func.coalesce(func.sum(Subscription.price), 0),
            func.count(col(Subscription.id)),
        ).where(
            Subscription.start_date <= period_end,
            or_(col(Subscription.end_date).is_(None), col(Subscription.end_date) >= filtro.start_period),
        )
        if filtro.user_id is not None:
            query = query.where(Subscription.user_id == filtro.user_id)
        if filtro.service_name is not None:
            query = query.where(Subscription.service_name == filtro.service_name)

        try:
            total, count = self.session.exec(query).one()
        except SQLAlchemyError as exc:
            raise self._fail("total_cost", exc) from exc
        return TotalCost(total_cost=int(total or 0), count=int(count or 0))

