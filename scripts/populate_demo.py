import uuid

from sqlmodel import Session, select

from app.core.database import create_db_and_tables, engine
from app.models.models import Subscription
from app.repositories.subscription_repository import SubscriptionRepository
from app.utils.utils import parse_month_year

# Usuario fijo para poder probar /users/{user_id}/subscriptions desde Swagger
DEMO_USER_ID = uuid.UUID("60601fee-2bf1-4721-ae6f-7636e79a0cba")

DEMO_SUBSCRIPTIONS = [
    # (servicio, precio, inicio, fin)
    ("Yandex Plus", 400, "07-2025", None),
    ("Netflix", 800, "01-2025", "12-2025"),
    ("Spotify", 169, "03-2024", "02-2025"),
    ("Kinopoisk", 299, "11-2025", None),
]


def create_demo_data():
    create_db_and_tables()
    with Session(engine) as session:
        repo = SubscriptionRepository(session)
        for service_name, price, inicio, fin in DEMO_SUBSCRIPTIONS:
            existente = session.exec(
                select(Subscription).where(
                    Subscription.user_id == DEMO_USER_ID,
                    Subscription.service_name == service_name,
                )
            ).first()
            if existente:
                print(f"Ya existe: {service_name}")
                continue

            sub = repo.create(
                service_name=service_name,
                price=price,
                user_id=DEMO_USER_ID,
                start_date=parse_month_year(inicio),
                end_date=parse_month_year(fin) if fin else None,
            )
            print(f"Creada: #{sub.id} {service_name} ({price})")

    print(f"Listo. Usuario demo: {DEMO_USER_ID}")


if __name__ == "__main__":
    create_demo_data()
