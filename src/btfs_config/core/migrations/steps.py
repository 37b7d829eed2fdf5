# src/btfs_config/core/migrations/steps.py
"""
Cadeia de migrações do documento de configuração.

Cada função decide, a partir do estado atual do documento (e, em alguns
casos, de booleanos recebidos explicitamente de steps anteriores), se
precisa alterar algo; altera in-place e devolve True se alterou.

Todas as funções são idempotentes: reaplicadas sobre a própria saída,
devolvem False. A exceção documentada é `migrate_storage_settings`, que
marca o documento como alterado sempre que aplica um profile.

Erros de resolução da tabela de peers padrão são propagados; o
sequenciador os descarta, registra o aviso e segue para o próximo step.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Sequence

from btfs_config.core.addresses.peers import (
    PeerRecord,
    default_bootstrap_peers,
    default_testnet_bootstrap_peers,
    set_bootstrap_peers,
)
from btfs_config.core.document.access import ensure_section, lookup, strings
from btfs_config.core.document.environment import Environment, is_non_production
from btfs_config.core.profiles.builtin import PROFILES
from btfs_config.core.settings import values

from .registry import MigrationRegistry
from .types import MigrationStep

logger = logging.getLogger(__name__)

OBSOLETE_MAINNET_NODES = [
    "/ip4/34.213.5.20/tcp/4001/p2p/QmQVQBsM7uoJy8hATjTm51uSAkx2y3iGLhSwA6LWLa7iQJ",
    "/ip4/52.77.240.134/tcp/4001/p2p/QmURPwdLYesWUDB66EGXvDvwcyV44rVRqV2iGNqKN24eVu",
    "/ip4/3.126.224.22/tcp/4001/p2p/QmWTTmvchTodUaVvuKZMo67xk7ZgkxJf4nBo7SZry3vGU5",
    "/ip4/18.194.71.27/tcp/4001/p2p/QmYHkY5CrWcvgaDo4PfvzTQgaZtfaqRGDjwW1MrHUj8cLK",
    "/ip4/18.237.54.123/tcp/4001/p2p/QmWJWGxKKaqZUW4xga2BCzT5FBtYDL8Cc5Q5jywd6xPt1g",
    "/ip4/54.213.128.120/tcp/4001/p2p/QmWm3vBCRuZcJMUT9jDZysoYBb66aokmSReX26UaMk8qq5",
    "/ip4/18.237.202.91/tcp/4001/p2p/QmbVFdiNkvxtc7Nni7yBWAgtHg8MuyhaZ5mDaYR2ZrhhvN",
    "/ip4/13.229.45.41/tcp/4001/p2p/QmX7RZXh27AX8iv2BKLGMgPBiuUpEy8p4LFXgtXAfaZDn9",
    "/ip4/54.254.227.188/tcp/4001/p2p/QmYqCq3PasrzLr3PxtLo5D6spEAJ836W9Re9Eo4zUou45U",
    "/ip4/54.93.47.134/tcp/4001/p2p/QmeHaHe7WvjeY37z5MYC3qYQcQcuvDwUhwTXtP3KhKLXXK",
]

OBSOLETE_TESTNET_NODES = [
    "52.57.56.230",
    "13.59.69.165/tcp/43113",
    "13.229.73.63/tcp/38869",
    "3.126.51.74/tcp/38131",
    "/btfs/",  # protocolo anterior ao /p2p/
]

OBSOLETE_TESTNET_HOSTS = [
    "13.59.69.165",
    "13.229.73.63",
    "3.126.51.74",
]

# Valores permissivos gravados por versões antigas no `init`.
LEGACY_API_HTTP_HEADERS = {
    "Access-Control-Allow-Origin": ["*"],
    "Access-Control-Allow-Methods": ["PUT", "GET", "POST", "OPTIONS"],
    "Access-Control-Allow-Credentials": ["true"],
}
LEGACY_API_ADDRESSES = ["/ip4/0.0.0.0/tcp/5001"]
LEGACY_GATEWAY_ADDRESSES = ["/ip4/0.0.0.0/tcp/8080"]


def _replace_obsolete_nodes(
    doc: Dict[str, Any],
    obsolete: Sequence[str],
    resolve_defaults: Callable[[], List[PeerRecord]],
) -> bool:
    """
    Se alguma entrada de bootstrap contém algum token obsoleto, substitui
    a lista inteira pelos peers padrão. Sem ocorrência, nada muda.
    """
    current = strings(doc, "Bootstrap")
    for token in obsolete:
        for node in current:
            if token in node:
                set_bootstrap_peers(doc, resolve_defaults())
                return True
    return False


def _backfill_service_domain(doc: Dict[str, Any], *fields: str) -> bool:
    """
    Preenche campos de serviço a partir do bundle do ambiente, se o
    primeiro campo estiver vazio. O ambiente segue a heurística legada
    sobre o domínio de escrow ("dev"/"staging" → bundle de testnet).
    """
    services = lookup(doc, "Services", default={})
    if services.get(fields[0]):
        return False

    escrow = services.get("EscrowDomain") or ""
    environment = Environment.TESTNET if is_non_production(escrow) else Environment.PRODUCTION
    defaults = values.services_config(environment)

    target = ensure_section(doc, "Services")
    for name in fields:
        target[name] = defaults[name]
    return True


def migrate_services(doc: Dict[str, Any]) -> bool:
    services = lookup(doc, "Services", default={})
    if not services.get("EscrowPubKeys") or not services.get("GuardPubKeys"):
        doc["Services"] = values.services_config(Environment.PRODUCTION)
        return True
    return False


def migrate_status_url(doc: Dict[str, Any]) -> bool:
    # No-op mantido apenas para preservar a numeração da cadeia.
    return False


def migrate_storage_settings(
    doc: Dict[str, Any],
    *,
    from_v0: bool,
    just_initialized: bool,
    has_host_value: bool,
) -> bool:
    """
    Habilita papéis de armazenamento.

    - Atualização a partir de 0.x (`from_v0`): profile `storage-client`
    - Com valor de host legado, em atualização 0.x ou recém-inicializado:
      profile `storage-host`

    Devolve True sempre que algum profile foi aplicado, mesmo que o
    documento tenha ficado textualmente igual.
    """
    applied = False
    if from_v0:
        PROFILES.apply("storage-client", doc)
        applied = True
    if has_host_value and (from_v0 or just_initialized):
        PROFILES.apply("storage-host", doc)
        applied = True
    return applied


def migrate_swarm_key(doc: Dict[str, Any]) -> bool:
    swarm = lookup(doc, "Swarm", default={})
    if not swarm.get("SwarmKey"):
        ensure_section(doc, "Swarm")["SwarmKey"] = values.swarm_key()
        return True
    return False


def migrate_bootstrap_nodes(doc: Dict[str, Any]) -> bool:
    if lookup(doc, "Swarm", "SwarmKey", default="") != values.swarm_key():
        return False
    return _replace_obsolete_nodes(doc, OBSOLETE_MAINNET_NODES, default_bootstrap_peers)


def migrate_enable_auto_relay(doc: Dict[str, Any]) -> bool:
    default = values.enable_auto_relay()
    if bool(lookup(doc, "Swarm", "EnableAutoRelay", default=False)) != default:
        ensure_section(doc, "Swarm")["EnableAutoRelay"] = default
        return True
    return False


def migrate_testnet_bootstrap_nodes(doc: Dict[str, Any]) -> bool:
    if lookup(doc, "Swarm", "SwarmKey", default="") != values.swarm_key(testnet=True):
        return False
    return _replace_obsolete_nodes(doc, OBSOLETE_TESTNET_NODES, default_testnet_bootstrap_peers)


def migrate_announce_default(doc: Dict[str, Any], *, before_v1b2: bool) -> bool:
    if before_v1b2:
        ensure_section(doc, "Addresses")["Announce"] = []
        return True
    return False


def migrate_wallet_domain(doc: Dict[str, Any]) -> bool:
    return _backfill_service_domain(doc, "ExchangeDomain", "SolidityDomain")


def migrate_clean_api_http_headers(doc: Dict[str, Any]) -> bool:
    if (
        lookup(doc, "API", "HTTPHeaders") == LEGACY_API_HTTP_HEADERS
        and lookup(doc, "Addresses", "API") == LEGACY_API_ADDRESSES
        and lookup(doc, "Addresses", "Gateway") == LEGACY_GATEWAY_ADDRESSES
    ):
        ensure_section(doc, "API")["HTTPHeaders"] = {}
        return True
    return False


def migrate_exchange_domain(doc: Dict[str, Any]) -> bool:
    services = lookup(doc, "Services", default={})
    escrow = services.get("EscrowDomain") or ""
    exchange = services.get("ExchangeDomain") or ""
    if "staging" in escrow and "dev" in exchange:
        testnet = values.services_config(Environment.TESTNET)
        ensure_section(doc, "Services")["ExchangeDomain"] = testnet["ExchangeDomain"]
        return True
    return False


def migrate_fullnode_domain(doc: Dict[str, Any]) -> bool:
    return _backfill_service_domain(doc, "FullnodeDomain")


def migrate_host_contract_manager(doc: Dict[str, Any]) -> bool:
    if lookup(doc, "UI", "Host", "ContractManager") is None:
        ensure_section(doc, "UI", "Host")["ContractManager"] = values.contract_manager_defaults()
        return True
    return False


def migrate_testnet_bootstrap_hosts(doc: Dict[str, Any]) -> bool:
    if lookup(doc, "Swarm", "SwarmKey", default="") != values.swarm_key(testnet=True):
        return False
    return _replace_obsolete_nodes(doc, OBSOLETE_TESTNET_HOSTS, default_testnet_bootstrap_peers)


def migrate_missing_remote_api(doc: Dict[str, Any]) -> bool:
    if not lookup(doc, "Addresses", "RemoteAPI"):
        ensure_section(doc, "Addresses")["RemoteAPI"] = [values.remote_api_address()]
        return True
    return False


def migrate_trongrid_domain(doc: Dict[str, Any]) -> bool:
    return _backfill_service_domain(doc, "TrongridDomain")


def migrate_sync_hosts(doc: Dict[str, Any]) -> bool:
    # HostsSyncFlag marca que esta migração já rodou uma vez.
    if not lookup(doc, "Experimental", "HostsSyncFlag", default=False):
        experimental = ensure_section(doc, "Experimental")
        experimental["HostsSyncEnabled"] = False
        experimental["HostsSyncFlag"] = True
        return True
    return False


def migrate_s3_compatible_api(doc: Dict[str, Any]) -> bool:
    if not lookup(doc, "S3CompatibleAPI", "Address"):
        doc["S3CompatibleAPI"] = values.s3_compatible_api_defaults()
        return True
    return False


def build_default_migrations() -> MigrationRegistry:
    """Cadeia completa, validada (1..N sem lacunas)."""
    registry = MigrationRegistry()
    for step in (
        MigrationStep(1, "services", migrate_services,
                      description="replace empty or partial services with defaults"),
        MigrationStep(2, "status_url", migrate_status_url,
                      description="retired; kept to preserve numbering"),
        MigrationStep(3, "storage_settings", migrate_storage_settings,
                      inputs={"from_v0": "services",
                              "just_initialized": "just_initialized",
                              "has_host_value": "has_host_value"},
                      description="enable storage client/host roles"),
        MigrationStep(4, "swarm_key", migrate_swarm_key,
                      description="set default swarm key if unset"),
        MigrationStep(5, "bootstrap_nodes", migrate_bootstrap_nodes,
                      description="replace obsolete mainnet bootstrap nodes"),
        MigrationStep(6, "enable_auto_relay", migrate_enable_auto_relay,
                      description="reset auto-relay to its default"),
        MigrationStep(7, "testnet_bootstrap_nodes", migrate_testnet_bootstrap_nodes,
                      description="replace obsolete testnet bootstrap nodes"),
        MigrationStep(8, "announce_default", migrate_announce_default,
                      inputs={"before_v1b2": "swarm_key"},
                      description="clear announce list on pre-swarm-key documents"),
        MigrationStep(9, "wallet_domain", migrate_wallet_domain,
                      description="backfill exchange and solidity domains"),
        MigrationStep(10, "clean_api_http_headers", migrate_clean_api_http_headers,
                      description="drop legacy permissive CORS headers"),
        MigrationStep(11, "exchange_domain", migrate_exchange_domain,
                      description="move staging nodes off the dev exchange"),
        MigrationStep(12, "fullnode_domain", migrate_fullnode_domain,
                      description="backfill fullnode domain"),
        MigrationStep(13, "host_contract_manager", migrate_host_contract_manager,
                      description="backfill host contract manager"),
        MigrationStep(14, "testnet_bootstrap_hosts", migrate_testnet_bootstrap_hosts,
                      description="replace retired testnet bootstrap hosts"),
        MigrationStep(15, "missing_remote_api", migrate_missing_remote_api,
                      description="backfill remote API listen address"),
        MigrationStep(16, "trongrid_domain", migrate_trongrid_domain,
                      description="backfill trongrid domain"),
        MigrationStep(17, "sync_hosts", migrate_sync_hosts,
                      description="one-shot disable of hosts sync"),
        MigrationStep(18, "s3_compatible_api", migrate_s3_compatible_api,
                      description="backfill S3-compatible API settings"),
    ):
        registry.add(step)
    registry.validate()
    return registry


MIGRATIONS = build_default_migrations()
