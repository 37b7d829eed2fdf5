# src/btfs_config/core/document/__init__.py
"""
Utilitários sobre o documento de configuração do nó.

O documento pertence ao chamador (loader externo) e é emprestado ao core,
com escrita exclusiva, durante uma passada de migração ou aplicação de
profile. Este pacote oferece apenas:

    - access      → leitura sem efeitos colaterais e criação sob demanda de seções
    - environment → classificação do ambiente de serviços (legada e estruturada)
    - hashing     → fingerprint canônico para relatórios

Limites explícitos:
    - Não lê nem grava o documento em disco
    - Não valida semântica de edições arbitrárias do usuário
"""

from .access import ensure_section, lookup, strings
from .environment import Environment, is_non_production
from .hashing import compute_document_hash

__all__ = [
    "Environment",
    "compute_document_hash",
    "ensure_section",
    "is_non_production",
    "lookup",
    "strings",
]
