from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response

from app.api.deps import PaginationParams, get_cost_filter, get_subscription_service
from app.schemas.subscription import (
    CostFilter,
    ErrorRead,
    SubscriptionCreate,
    SubscriptionList,
    SubscriptionRead,
    SubscriptionUpdate,
    TotalCostRead,
)
from app.services.subscription_service import SubscriptionService

router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])

ERROR_RESPONSES = {
    400: {"model": ErrorRead, "description": "Invalid input"},
    500: {"model": ErrorRead, "description": "Internal error"},
}
NOT_FOUND_RESPONSE = {404: {"model": ErrorRead, "description": "Subscription not found"}}

# Mismo rango que un BIGINT
SubscriptionId = Annotated[int, Path(gt=0, le=2**63 - 1, description="ID de la suscripción")]


@router.post(
    "",
    response_model=SubscriptionRead,
    response_model_exclude_none=True,
    status_code=201,
    responses=ERROR_RESPONSES,
)
def crear_suscripcion(
    data: SubscriptionCreate,
    service: SubscriptionService = Depends(get_subscription_service),
):
    return SubscriptionRead.model_validate(service.crear(data))


@router.get(
    "",
    response_model=SubscriptionList,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
def listar_suscripciones(
    pagination: PaginationParams = Depends(),
    service: SubscriptionService = Depends(get_subscription_service),
):
    subscriptions = service.listar(pagination.to_params())
    return SubscriptionList(subscriptions=[SubscriptionRead.model_validate(s) for s in subscriptions])


# Tiene que ir antes de /{subscription_id}
@router.get("/cost", response_model=TotalCostRead, responses=ERROR_RESPONSES)
def calcular_costo_total(
    filtro: CostFilter = Depends(get_cost_filter),
    service: SubscriptionService = Depends(get_subscription_service),
):
    """
    Suma el precio de las suscripciones activas en algún momento del periodo.
    - start_period / end_period: MM-YYYY, ambos inclusive (el mes final se cuenta completo)
    - user_id / service_name: filtros opcionales por igualdad
    Sin coincidencias devuelve total_cost=0 y count=0.
    """
    resultado = service.calcular_costo_total(filtro)
    return TotalCostRead(total_cost=resultado.total_cost, count=resultado.count)


@router.get(
    "/{subscription_id}",
    response_model=SubscriptionRead,
    response_model_exclude_none=True,
    responses={**ERROR_RESPONSES, **NOT_FOUND_RESPONSE},
)
def obtener_suscripcion(
    subscription_id: SubscriptionId,
    service: SubscriptionService = Depends(get_subscription_service),
):
    return SubscriptionRead.model_validate(service.obtener(subscription_id))


@router.patch(
    "/{subscription_id}",
    response_model=SubscriptionRead,
    response_model_exclude_none=True,
    responses={**ERROR_RESPONSES, **NOT_FOUND_RESPONSE},
)
def actualizar_suscripcion(
    datos: SubscriptionUpdate,
    subscription_id: SubscriptionId,
    service: SubscriptionService = Depends(get_subscription_service),
):
    """Solo se modifican los campos enviados; un body vacío devuelve la suscripción sin cambios."""
    return SubscriptionRead.model_validate(service.actualizar(subscription_id, datos))


@router.delete(
    "/{subscription_id}",
    status_code=204,
    response_class=Response,
    responses={**ERROR_RESPONSES, **NOT_FOUND_RESPONSE},
)
def eliminar_suscripcion(
    subscription_id: SubscriptionId,
    service: SubscriptionService = Depends(get_subscription_service),
):
    service.eliminar(subscription_id)
    return Response(status_code=204)
