"""
Utilidades compartidas para Shopify.

Este módulo contiene funciones utilitarias usadas por los clientes REST
y los agregadores: parseo del header Link, montos y tags.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

_LINK_URL_RE = re.compile(r"<([^>]+)>")
_LINK_REL_RE = re.compile(r'rel\s*=\s*"?([^";]+)"?')


def parse_link_header(header: Optional[str]) -> Dict[str, str]:
    """
    Convierte un header Link de Shopify en un mapa relación -> URL.

    Las entradas sin URL extraíble se descartan, de modo que un header
    malformado nunca produce una relación "next".

    Args:
        header: Valor del header Link (puede ser None)

    Returns:
        Dict[str, str]: Mapa de relación a URL

    Examples:
        >>> parse_link_header('<https://s/orders.json?page_info=abc>; rel="next"')
        {'next': 'https://s/orders.json?page_info=abc'}
        >>> parse_link_header('rel="next"')
        {}
    """
    links: Dict[str, str] = {}
    if not header:
        return links

    for part in header.split(","):
        url_match = _LINK_URL_RE.search(part)
        rel_match = _LINK_REL_RE.search(part)
        if not url_match or not rel_match:
            continue

        url = url_match.group(1).strip()
        if not url:
            continue

        for rel in rel_match.group(1).split():
            links.setdefault(rel.strip(), url)

    return links


def to_decimal(value: Any, default: Decimal = Decimal("0")) -> Decimal:
    """
    Convierte un monto de Shopify (string o número) a Decimal.

    Valores ausentes o no numéricos se tratan como ``default``.

    Examples:
        >>> to_decimal("19.99")
        Decimal('19.99')
        >>> to_decimal(None)
        Decimal('0')
    """
    if value is None or value == "":
        return default
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return default


def to_int(value: Any, default: int = 0) -> int:
    """Convierte una cantidad a entero; valores inválidos devuelven ``default``."""
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def split_tags(tags: Optional[str]) -> List[str]:
    """
    Separa el string de tags de Shopify, sin vacíos ni duplicados.

    Un valor que no es string (lista, número) se trata como sin tags.

    Examples:
        >>> split_tags("Summer, Sale,, ")
        ['Summer', 'Sale']
    """
    if not tags or not isinstance(tags, str):
        return []

    result: List[str] = []
    for tag in tags.split(","):
        trimmed = tag.strip()
        if trimmed and trimmed not in result:
            result.append(trimmed)
    return result
