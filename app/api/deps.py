import uuid

from fastapi import Depends, Query
from sqlmodel import Session

from app.core.database import engine
from app.core.exceptions import InvalidInputError
from app.schemas.subscription import ERR_INVALID_DATE, ERR_INVALID_USER_ID, CostFilter, ListParams
from app.services.subscription_service import SubscriptionService
from app.utils.utils import clamp_pagination, parse_month_year


class PaginationParams:
    """limit fuera de rango se ajusta en vez de rechazarse (0 -> 10, 200 -> 100)"""

    def __init__(
        self,
        limit: int | None = Query(None, description="Cantidad máxima de registros (1-100, default 10)"),
        offset: int | None = Query(None, description="Número de registros a saltar (default 0)"),
    ):
        self.limit, self.offset = clamp_pagination(limit, offset)

    def to_params(self) -> ListParams:
        return ListParams(limit=self.limit, offset=self.offset)


def get_session():
    with Session(engine) as session:
        yield session


def get_subscription_service(session: Session = Depends(get_session)) -> SubscriptionService:
    return SubscriptionService(session)


def _parse_period(valor: str | None):
    try:
        return parse_month_year(valor or "")
    except ValueError:
        raise InvalidInputError(ERR_INVALID_DATE) from None


def get_cost_filter(
    start_period: str | None = Query(None, description="Inicio del periodo, MM-YYYY", examples=["01-2025"]),
    end_period: str | None = Query(None, description="Fin del periodo (inclusive), MM-YYYY", examples=["12-2025"]),
    user_id: str | None = Query(None, description="UUID del usuario"),
    service_name: str | None = Query(None, description="Nombre exacto del servicio"),
) -> CostFilter:
    inicio = _parse_period(start_period)
    fin = _parse_period(end_period)

    filtro_user = None
    if user_id:
        try:
            filtro_user = uuid.UUID(user_id)
        except ValueError:
            raise InvalidInputError(ERR_INVALID_USER_ID) from None

    return CostFilter(
        start_period=inicio,
        end_period=fin,
        user_id=filtro_user,
        service_name=service_name or None,
    )
