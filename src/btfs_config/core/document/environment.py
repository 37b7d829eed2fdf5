# src/btfs_config/core/document/environment.py
"""
Classificação do ambiente de serviços de um documento.

Documentos persistidos não carregam o ambiente de forma explícita; ele é
inferido pelo domínio de escrow. Dois caminhos coexistem:

    - `is_non_production`: heurística legada (substrings "dev"/"staging"),
      usada pelas migrações e mantida byte a byte para compatibilidade
    - `Environment.classify`: enum estruturado para código novo
"""

from __future__ import annotations

from enum import Enum


class Environment(str, Enum):
    """
    Ambientes de serviço conhecidos.

    Os valores textuais coincidem com as chaves de `services` no
    `defaults.yaml`.
    """
    PRODUCTION = "production"
    DEV = "dev"
    TESTNET = "testnet"

    @classmethod
    def classify(cls, escrow_domain: str) -> "Environment":
        domain = escrow_domain or ""
        if "staging" in domain:
            return cls.TESTNET
        if "dev" in domain:
            return cls.DEV
        return cls.PRODUCTION


def is_non_production(escrow_domain: str) -> bool:
    """Heurística legada: qualquer domínio com "dev" ou "staging"."""
    domain = escrow_domain or ""
    return "dev" in domain or "staging" in domain
