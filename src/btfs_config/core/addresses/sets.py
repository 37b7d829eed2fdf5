# src/btfs_config/core/addresses/sets.py
"""
Operações de conjunto sobre listas de endereços, preservando ordem.

Usadas pelos profiles para combinar listas de filtros, anúncios e peers
de bootstrap.

Invariantes:
    - O resultado nunca contém duplicatas literais
    - A ordem de saída é determinística e derivada da ordem de entrada
    - Nenhum input é mutado
"""

from __future__ import annotations

from typing import Iterable, List, Sequence


def union(a: Sequence[str], b: Iterable[str]) -> List[str]:
    """
    União ordenada: elementos de `a` na ordem original, seguidos dos
    elementos de `b` ainda não vistos, na ordem da primeira aparição.

    Duplicatas dentro de `a` também são removidas.

    >>> union(["a", "b"], ["b", "c"])
    ['a', 'b', 'c']
    """
    out: List[str] = []
    seen = set()
    for item in list(a) + list(b):
        if item not in seen:
            out.append(item)
            seen.add(item)
    return out


def difference(a: Sequence[str], b: Iterable[str]) -> List[str]:
    """
    Remove de `a` todo elemento presente em `b`, preservando a ordem de `a`.

    >>> difference(["x", "y", "z", "y"], ["y"])
    ['x', 'z']
    """
    removed = set(b)
    out: List[str] = []
    seen = set()
    for item in a:
        if item in removed or item in seen:
            continue
        out.append(item)
        seen.add(item)
    return out
