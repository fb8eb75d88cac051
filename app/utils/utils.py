import calendar
from datetime import date, datetime

MONTH_YEAR_FORMAT = "%m-%Y"

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def parse_month_year(texto: str) -> date:
    """Convierte "07-2025" en date(2025, 7, 1). Lanza ValueError si no es MM-YYYY."""
    if not texto or len(texto) != 7 or texto[2] != "-":
        raise ValueError(f"invalid month-year value: {texto!r}")
    return datetime.strptime(texto, MONTH_YEAR_FORMAT).date()


def format_month_year(fecha: date) -> str:
    return fecha.strftime(MONTH_YEAR_FORMAT)


def last_day_of_month(fecha: date) -> date:
    # Primer día del mes + 1 mes - 1 día
    _, dias = calendar.monthrange(fecha.year, fecha.month)
    return fecha.replace(day=dias)


def clamp_pagination(limit: int | None, offset: int | None) -> tuple[int, int]:
    if limit is None or limit <= 0:
        limit = DEFAULT_LIMIT
    if limit > MAX_LIMIT:
        limit = MAX_LIMIT
    if offset is None or offset < 0:
        offset = 0
    return limit, offset
