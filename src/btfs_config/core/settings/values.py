# src/btfs_config/core/settings/values.py
"""
Acessores tipados dos settings embarcados.

Cada acessor devolve uma cópia, de modo que mutações feitas no documento
do nó nunca alcançam o estado compartilhado do processo.
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, List

from btfs_config.core.document.environment import Environment

from .loader import get_settings


def swarm_key(*, testnet: bool = False) -> str:
    swarm = get_settings()["swarm"]
    return swarm["testnet_key"] if testnet else swarm["key"]


def swarm_port() -> int:
    return int(get_settings()["swarm"]["port"])


def enable_auto_relay() -> bool:
    return bool(get_settings()["swarm"]["enable_auto_relay"])


def chain_id(*, testnet: bool = False) -> int:
    chain = get_settings()["chain"]
    return int(chain["testnet_id"] if testnet else chain["mainnet_id"])


def hosts_sync_mode(*, dev: bool = False) -> str:
    hosts_sync = get_settings()["hosts_sync"]
    return hosts_sync["mode_dev"] if dev else hosts_sync["mode"]


def default_addresses() -> Dict[str, List[str]]:
    return deepcopy(get_settings()["addresses"])


def remote_api_address() -> str:
    return get_settings()["remote_api"]


def services_config(environment: Environment = Environment.PRODUCTION) -> Dict[str, Any]:
    """Bundle de domínios e chaves públicas de serviço do ambiente."""
    return deepcopy(get_settings()["services"][Environment(environment).value])


def bootstrap_addresses(*, testnet: bool = False) -> List[str]:
    tables = get_settings()["bootstrap"]
    return list(tables["testnet" if testnet else "mainnet"])


def lookup_url() -> str:
    return get_settings()["lookup"]["url"]


def lookup_timeout() -> float:
    return float(get_settings()["lookup"]["timeout_seconds"])


def contract_manager_defaults() -> Dict[str, int]:
    return deepcopy(get_settings()["contract_manager"])


def s3_compatible_api_defaults() -> Dict[str, Any]:
    return deepcopy(get_settings()["s3_compatible_api"])
