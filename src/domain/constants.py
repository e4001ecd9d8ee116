"""Domain constants for the fund ledger."""

DEFAULT_CATEGORIES = (
    "Fiscalía",
    "Capital Recuperado",
    "Intereses Ganados",
    "Préstamos Socios",
    "Prestamos Candelaria",
    "Capital Inicial",
    "Gastos Extraordinarios",
    "Egresos Extraordinarios",
    "Divisas",
)

DESCRIPTION_MIN_LENGTH = 2
DESCRIPTION_MAX_LENGTH = 100

DEFAULT_MAX_LOOKBACK_MONTHS = 1200


__all__ = [
    "DEFAULT_CATEGORIES",
    "DESCRIPTION_MIN_LENGTH",
    "DESCRIPTION_MAX_LENGTH",
    "DEFAULT_MAX_LOOKBACK_MONTHS",
]
