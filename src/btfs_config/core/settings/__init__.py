# src/btfs_config/core/settings/__init__.py

"""
Camada de settings do btfs-config.

Este pacote carrega as constantes embarcadas das quais o core depende:
tabelas de bootstrap, chaves de swarm, bundles de serviços por ambiente,
endereços padrão e parâmetros do lookup de IP externo.

Os settings são:
    - declarativos (um único `defaults.yaml` empacotado)
    - carregados uma única vez por processo
    - opcionalmente sobrescritos por um arquivo local explícito

Invariantes:
    - Os settings finais são um dicionário puro (dict)
    - Conflitos estruturais de merge são tratados como erro
    - Acessores devolvem cópias, nunca o estado compartilhado

Limites explícitos:
    - Não lê nem persiste o documento de configuração do nó
    - Não valida as tabelas de bootstrap (papel de `core.addresses.peers`)
"""

from .errors import (
    DefaultsNotFoundError,
    InvalidSettingsRootTypeError,
    ProtectedSettingsError,
    SettingsError,
    SettingsTypeConflictError,
    UnsupportedSettingsFormatError,
)
from .loader import get_settings, load_settings
from .merge import deep_merge

__all__ = [
    "DefaultsNotFoundError",
    "InvalidSettingsRootTypeError",
    "ProtectedSettingsError",
    "SettingsError",
    "SettingsTypeConflictError",
    "UnsupportedSettingsFormatError",
    "deep_merge",
    "get_settings",
    "load_settings",
]
