# src/btfs_config/__init__.py
"""
btfs-config: manutenção do documento de configuração de um nó BTFS.

Este pacote mantém o documento de configuração do nó através de
profiles nomeados e de uma cadeia de migrações executada a cada
inicialização.

Arquitetura em alto nível:
    - core.settings   → defaults embarcados
    - core.addresses  → peers de bootstrap e conjuntos de endereços
    - core.profiles   → registro e profiles embutidos
    - core.migrations → sequenciador de migrações

Limites explícitos:
    - Não lê nem grava o arquivo de configuração
    - Não gera identidade nem chaves do nó
"""

import logging

from .core.migrations import migrate_config, run_migrations
from .core.profiles import PROFILES, apply_profiles

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["PROFILES", "apply_profiles", "migrate_config", "run_migrations"]
