"""
Utilidades compartidas para construir requests a Poynt.

Este módulo contiene funciones usadas por los clientes para validar
opciones, extraer filtros y codificar paths y query strings.
"""

from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional
from urllib.parse import quote, urlencode

from app.utils.error_handler import MissingFieldException

# Caracteres que no se escapan en segmentos de path además de A-Z a-z 0-9 - _ . ~
_PATH_SEGMENT_SAFE = "!*'()"


def missing_keys(options: Optional[Mapping[str, Any]], keys: Iterable[str]) -> List[str]:
    """
    Devuelve las claves requeridas ausentes o vacías en `options`.

    Una clave cuenta como ausente si no existe, vale None o es "".
    Un string con sólo espacios no está vacío.

    Examples:
        >>> missing_keys({"businessId": "B"}, ["businessId", "orderId"])
        ['orderId']
    """
    options = options or {}
    missing = []
    for key in keys:
        value = options.get(key)
        if value is None or value == "":
            missing.append(key)
    return missing


def require_keys(options: Optional[Mapping[str, Any]], keys: Iterable[str], operation: Optional[str] = None) -> None:
    """
    Verifica que `options` contenga todas las claves requeridas.

    Raises:
        MissingFieldException: Con la lista completa de claves faltantes
    """
    missing = missing_keys(options, keys)
    if missing:
        raise MissingFieldException(missing, operation=operation)


def pick_keys(options: Optional[Mapping[str, Any]], keys: Iterable[str]) -> dict:
    """
    Extrae de `options` sólo las claves permitidas que tienen valor.

    Las claves ausentes o con valor None se omiten; el orden sigue `keys`.

    Examples:
        >>> pick_keys({"limit": 10, "storeId": None, "foo": 1}, ["startAt", "limit", "storeId"])
        {'limit': 10}
    """
    options = options or {}
    return {key: options[key] for key in keys if options.get(key) is not None}


def quote_path_segment(value: Any) -> str:
    """
    Codifica un valor para usarlo como segmento de path.

    Booleanos y floats enteros se escriben como en la query string.

    Examples:
        >>> quote_path_segment("a b/c")
        'a%20b%2Fc'
        >>> quote_path_segment(True)
        'true'
    """
    return quote(str(_query_value(value)), safe=_PATH_SEGMENT_SAFE)


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, (list, tuple)):
        return [_query_value(item) for item in value]
    return value


def build_query_string(params: Mapping[str, Any]) -> str:
    """
    Serializa parámetros como query string `key=value&key2=value2`.

    Los espacios se codifican como %20, los booleanos como true/false,
    los floats enteros sin decimales y las secuencias como claves repetidas.

    Examples:
        >>> build_query_string({"storeId": "a b", "includeStaysAll": True})
        'storeId=a%20b&includeStaysAll=true'
    """
    normalized = {key: _query_value(value) for key, value in params.items()}
    return urlencode(normalized, doseq=True, quote_via=quote, safe=_PATH_SEGMENT_SAFE)


def utc_now_iso() -> str:
    """
    Timestamp actual en ISO-8601 (UTC, milisegundos, sufijo Z).

    Examples:
        >>> utc_now_iso()  # doctest: +SKIP
        '2025-01-15T10:30:00.000Z'
    """
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
