# src/btfs_config/core/document/access.py
"""
Acesso estrutural ao documento de configuração do nó.

O documento é o dicionário com o shape JSON persistido (chaves em
PascalCase, ex.: `doc["Swarm"]["SwarmKey"]`). Chaves ausentes são lidas
como o valor zero correspondente; seções só são criadas quando algo é
escrito nelas, para que uma leitura nunca altere o documento.
"""

from __future__ import annotations

from typing import Any, Dict, List


def lookup(doc: Dict[str, Any], *path: str, default: Any = None) -> Any:
    """
    Lê um valor aninhado sem mutar o documento.

    Retorna `default` quando algum segmento do caminho estiver ausente,
    for `None` ou não for um dicionário.
    """
    node: Any = doc
    for key in path:
        if not isinstance(node, dict):
            return default
        node = node.get(key)
        if node is None:
            return default
    return node


def ensure_section(doc: Dict[str, Any], *path: str) -> Dict[str, Any]:
    """Retorna a seção em `path`, criando dicionários vazios quando necessário."""
    node = doc
    for key in path:
        child = node.get(key)
        if not isinstance(child, dict):
            child = {}
            node[key] = child
        node = child
    return node


def strings(doc: Dict[str, Any], *path: str) -> List[str]:
    """Cópia da lista de strings em `path` (lista vazia se ausente)."""
    value = lookup(doc, *path, default=[])
    return list(value)
