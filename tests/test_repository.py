import uuid
from datetime import date

import pytest

from app.repositories.subscription_repository import RecordNotFoundError, RepositoryError, SubscriptionRepository
from app.schemas.subscription import CostFilter, ListParams
from app.utils.utils import parse_month_year


@pytest.fixture
def repo(session):
    return SubscriptionRepository(session)


def test_create_asigna_id_y_created_at(repo, user_id):
    primera = repo.create("Yandex Plus", 400, user_id, date(2025, 1, 1))
    segunda = repo.create("Netflix", 800, user_id, date(2025, 1, 1), date(2025, 12, 1))

    assert primera.id > 0
    assert segunda.id > primera.id
    assert segunda.created_at >= primera.created_at
    assert primera.end_date is None
    assert segunda.end_date == date(2025, 12, 1)


def test_get_inexistente(repo):
    with pytest.raises(RecordNotFoundError):
        repo.get(99999)


def test_list_ordena_por_mas_reciente(repo, user_id):
    creadas = [repo.create(f"Service{i}", 100, user_id, date(2025, 1, 1)) for i in range(3)]

    resultado = repo.list_all(ListParams(limit=10, offset=0))

    assert [s.id for s in resultado] == [s.id for s in reversed(creadas)]


def test_list_pagina_con_limit_y_offset(repo, user_id):
    for i in range(5):
        repo.create(f"Service{i}", 100, user_id, date(2025, 1, 1))

    pagina = repo.list_all(ListParams(limit=2, offset=1))

    assert [s.service_name for s in pagina] == ["Service3", "Service2"]


def test_list_filtra_por_usuario(repo, user_id):
    repo.create("Netflix", 800, user_id, date(2025, 1, 1))
    repo.create("Spotify", 169, uuid.uuid4(), date(2025, 1, 1))

    resultado = repo.list_all(ListParams(limit=10, offset=0), user_id=user_id)

    assert len(resultado) == 1
    assert resultado[0].user_id == user_id


def test_update_parcial_solo_toca_campos_enviados(repo, user_id):
    creada = repo.create("Netflix", 800, user_id, date(2025, 1, 1))

    actualizada = repo.update(creada.id, {"price": 999})

    assert actualizada.price == 999
    assert actualizada.service_name == "Netflix"
    assert actualizada.end_date is None
    assert actualizada.start_date == date(2025, 1, 1)


def test_update_ignora_campos_no_actualizables(repo, user_id):
    creada = repo.create("Netflix", 800, user_id, date(2025, 1, 1))

    actualizada = repo.update(creada.id, {"start_date": date(2030, 1, 1), "end_date": date(2025, 6, 1)})

    assert actualizada.start_date == date(2025, 1, 1)
    assert actualizada.end_date == date(2025, 6, 1)


def test_update_sin_cambios_devuelve_registro(repo, user_id):
    creada = repo.create("Netflix", 800, user_id, date(2025, 1, 1))

    resultado = repo.update(creada.id, {})

    assert resultado.id == creada.id
    assert resultado.price == 800


def test_update_inexistente(repo):
    with pytest.raises(RecordNotFoundError):
        repo.update(99999, {"price": 1})
    with pytest.raises(RecordNotFoundError):
        repo.update(99999, {})


def test_update_no_interpola_valores_en_el_sql(repo, user_id):
    creada = repo.create("Netflix", 800, user_id, date(2025, 1, 1))
    nombre = "x'; DROP TABLE subscriptions; --"

    actualizada = repo.update(creada.id, {"service_name": nombre})

    assert actualizada.service_name == nombre
    assert repo.get(creada.id).service_name == nombre


def test_delete(repo, user_id):
    creada = repo.create("Netflix", 800, user_id, date(2025, 1, 1))

    repo.delete(creada.id)

    with pytest.raises(RecordNotFoundError):
        repo.get(creada.id)
    with pytest.raises(RecordNotFoundError):
        repo.delete(creada.id)


def _filtro(inicio, fin, **kwargs):
    return CostFilter(start_period=parse_month_year(inicio), end_period=parse_month_year(fin), **kwargs)


def test_total_cost_sin_datos(repo):
    resultado = repo.total_cost(_filtro("01-2025", "12-2025"))

    assert resultado.total_cost == 0
    assert resultado.count == 0


def test_total_cost_suma_solapadas(repo, user_id):
    repo.create("Netflix", 800, user_id, date(2024, 1, 1))  # abierta
    repo.create("Spotify", 169, user_id, date(2025, 3, 1), date(2025, 5, 1))
    repo.create("Old", 50, user_id, date(2023, 1, 1), date(2023, 12, 1))  # termino antes
    repo.create("Future", 70, user_id, date(2026, 1, 1))  # empieza despues

    resultado = repo.total_cost(_filtro("01-2025", "12-2025"))

    assert resultado.total_cost == 969
    assert resultado.count == 2


def test_total_cost_bordes_inclusivos(repo, user_id):
    # Empieza el ultimo dia del mes final
    repo.create("EmpiezaAlFinal", 10, user_id, date(2025, 6, 30))
    # Termina justo en el inicio del periodo
    repo.create("TerminaAlInicio", 20, user_id, date(2024, 1, 1), date(2025, 1, 1))
    # Empieza el dia siguiente al fin del periodo
    repo.create("FueraDelPeriodo", 40, user_id, date(2025, 7, 1))

    resultado = repo.total_cost(_filtro("01-2025", "06-2025"))

    assert resultado.total_cost == 30
    assert resultado.count == 2


def test_total_cost_un_solo_mes(repo, user_id):
    repo.create("Marzo", 100, user_id, date(2025, 3, 1), date(2025, 3, 1))
    repo.create("Abril", 200, user_id, date(2025, 4, 1))

    resultado = repo.total_cost(_filtro("03-2025", "03-2025"))

    assert resultado.total_cost == 100
    assert resultado.count == 1


def test_total_cost_filtros_combinados(repo, user_id):
    otro_usuario = uuid.uuid4()
    repo.create("Netflix", 800, user_id, date(2025, 1, 1))
    repo.create("Spotify", 169, user_id, date(2025, 1, 1))
    repo.create("Netflix", 700, otro_usuario, date(2025, 1, 1))

    solo_usuario = repo.total_cost(_filtro("01-2025", "12-2025", user_id=user_id))
    solo_servicio = repo.total_cost(_filtro("01-2025", "12-2025", service_name="Netflix"))
    ambos = repo.total_cost(_filtro("01-2025", "12-2025", user_id=user_id, service_name="Netflix"))

    assert (solo_usuario.total_cost, solo_usuario.count) == (969, 2)
    assert (solo_servicio.total_cost, solo_servicio.count) == (1500, 2)
    assert (ambos.total_cost, ambos.count) == (800, 1)


def test_total_cost_service_name_distingue_mayusculas(repo, user_id):
    repo.create("Netflix", 800, user_id, date(2025, 1, 1))

    resultado = repo.total_cost(_filtro("01-2025", "12-2025", service_name="netflix"))

    assert resultado.count == 0


def test_create_precio_que_no_entra_en_la_db_hace_rollback(repo, user_id):
    with pytest.raises(RepositoryError):
        repo.create("Netflix", 2**63, user_id, date(2025, 1, 1))

    creada = repo.create("Netflix", 800, user_id, date(2025, 1, 1))
    assert repo.get(creada.id).price == 800


def test_update_precio_que_no_entra_en_la_db_hace_rollback(repo, user_id):
    creada = repo.create("Netflix", 800, user_id, date(2025, 1, 1))

    with pytest.raises(RepositoryError):
        repo.update(creada.id, {"price": 2**63})

    assert repo.update(creada.id, {"price": 900}).price == 900
