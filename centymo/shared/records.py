"""
Lectura defensiva de registros.

Los registros del DataSource son dicts sin esquema: cada campo puede venir
ausente, como string o como número según el backend. Estas funciones
devuelven siempre un valor del tipo esperado con fallback a cero.
"""

from typing import Any, Dict, Optional


def _format_scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def value_str(value: Any) -> str:
    """Valor escalar como string (None -> "", 10.0 -> "10")"""
    return _format_scalar(value)


def record_str(record: Optional[Dict[str, Any]], key: str) -> str:
    """Campo como string ("" si falta)"""
    if not record:
        return ""
    return _format_scalar(record.get(key))


def parse_float(value: Any) -> float:
    """Parseo tolerante: cualquier valor inválido es 0.0"""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        return 0.0


def record_float(record: Optional[Dict[str, Any]], key: str) -> float:
    if not record:
        return 0.0
    return parse_float(record.get(key))


def record_int(record: Optional[Dict[str, Any]], key: str) -> int:
    if not record:
        return 0
    value = record.get(key)
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    try:
        return int(str(value).strip())
    except ValueError:
        return 0


def record_bool(record: Optional[Dict[str, Any]], key: str) -> bool:
    """bool nativo o los strings "true" / "t" """
    if not record:
        return False
    value = record.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "t")
    return False


def is_explicit_false(record: Optional[Dict[str, Any]], key: str) -> bool:
    """True sólo cuando el campo existe y es el bool False"""
    return bool(record) and record.get(key) is False


def format_number(value: float) -> str:
    """Formato mínimo: 10.0 -> "10", 2.5 -> "2.5" """
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_quantity(value: float) -> str:
    """Cantidades: entero si no tiene decimales, si no dos decimales"""
    if value.is_integer():
        return str(int(value))
    return f"{value:.2f}"


def format_amount(value: float) -> str:
    return f"{value:.2f}"


def format_price(currency: str, amount: float) -> str:
    """PHP 1,234.50"""
    return f"{currency} {amount:,.2f}".strip()
