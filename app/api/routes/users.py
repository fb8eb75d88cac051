import uuid

from fastapi import APIRouter, Depends

from app.api.deps import PaginationParams, get_subscription_service
from app.api.routes.subscriptions import ERROR_RESPONSES
from app.schemas.subscription import SubscriptionList, SubscriptionRead
from app.services.subscription_service import SubscriptionService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "/{user_id}/subscriptions",
    response_model=SubscriptionList,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
def listar_suscripciones_usuario(
    user_id: uuid.UUID,
    pagination: PaginationParams = Depends(),
    service: SubscriptionService = Depends(get_subscription_service),
):
    """Suscripciones de un usuario, las más recientes primero."""
    subscriptions = service.listar(pagination.to_params(), user_id=user_id)
    return SubscriptionList(subscriptions=[SubscriptionRead.model_validate(s) for s in subscriptions])
