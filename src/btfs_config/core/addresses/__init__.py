# src/btfs_config/core/addresses/__init__.py
"""
Endereços de peers do btfs-config.

    - sets  → união e diferença de listas preservando ordem
    - peers → parse, validação e serialização de peers de bootstrap,
              tabelas embarcadas de peers padrão
"""

from .peers import (
    PeerRecord,
    bootstrap_peer_strings,
    bootstrap_peers,
    default_bootstrap_peers,
    default_testnet_bootstrap_peers,
    parse_bootstrap_peers,
    set_bootstrap_peers,
)
from .sets import difference, union

__all__ = [
    "PeerRecord",
    "bootstrap_peer_strings",
    "bootstrap_peers",
    "default_bootstrap_peers",
    "default_testnet_bootstrap_peers",
    "difference",
    "parse_bootstrap_peers",
    "set_bootstrap_peers",
    "union",
]
