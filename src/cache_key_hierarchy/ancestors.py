"""Derivação das chaves ancestrais usadas para invalidação em massa."""

import re

from .constants import SEPARATOR

_SEPARATOR_PATTERN = re.compile(re.escape(SEPARATOR))


def derive_ancestor_keys(key: str) -> list[str]:
    """Deriva todas as chaves ancestrais de uma chave completa.

    Emite o prefixo até cada ocorrência do separador '|', da esquerda
    para a direita. Inclui fronteiras dentro da lista de tipos de
    parâmetros e dos valores codificados, não apenas os quatro níveis
    nomeados da hierarquia.

    Args:
        key: Chave completa

    Returns:
        Prefixos da chave, do mais amplo ao mais específico

    Example:
        ```python
        derive_ancestor_keys("Order|svc1|Save|Int32|$42")
        # ["Order", "Order|svc1", "Order|svc1|Save", "Order|svc1|Save|Int32"]
        ```
    """
    return [key[: match.start()] for match in _SEPARATOR_PATTERN.finditer(key)]
