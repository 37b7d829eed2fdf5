# src/btfs_config/core/profiles/builtin.py
"""
Profiles embutidos do btfs-config.

Cada transform muta o documento in-place. Transforms que dependem de
recursos falíveis (tabelas de peers, lookup de IP, porta efêmera) obtêm o
recurso antes da primeira escrita sempre que possível.

Os profiles de armazenamento têm três variantes: a padrão (mainnet) e as
variantes `-dev` / `-testnet`, que compartilham um transform base de
testnet e aplicam por cima o bundle de serviços do ambiente.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from btfs_config.core.addresses.peers import (
    bootstrap_peer_strings,
    default_bootstrap_peers,
    default_testnet_bootstrap_peers,
)
from btfs_config.core.addresses.sets import difference, union
from btfs_config.core.document.access import ensure_section, strings
from btfs_config.core.document.environment import Environment
from btfs_config.core.settings import values

from . import network
from .registry import ProfileRegistry
from .types import Profile

# Prefixos IPv4/IPv6 privados, locais ou não roteáveis (registros IANA de
# endereços de propósito especial).
DEFAULT_SERVER_FILTERS: List[str] = [
    "/ip4/10.0.0.0/ipcidr/8",
    "/ip4/100.64.0.0/ipcidr/10",
    "/ip4/169.254.0.0/ipcidr/16",
    "/ip4/172.16.0.0/ipcidr/12",
    "/ip4/192.0.0.0/ipcidr/24",
    "/ip4/192.0.0.0/ipcidr/29",
    "/ip4/192.0.0.8/ipcidr/32",
    "/ip4/192.0.0.170/ipcidr/32",
    "/ip4/192.0.0.171/ipcidr/32",
    "/ip4/192.0.2.0/ipcidr/24",
    "/ip4/192.168.0.0/ipcidr/16",
    "/ip4/198.18.0.0/ipcidr/15",
    "/ip4/198.51.100.0/ipcidr/24",
    "/ip4/203.0.113.0/ipcidr/24",
    "/ip4/240.0.0.0/ipcidr/4",
    "/ip6/100::/ipcidr/64",
    "/ip6/2001:2::/ipcidr/48",
    "/ip6/2001:db8::/ipcidr/32",
    "/ip6/fc00::/ipcidr/7",
    "/ip6/fe80::/ipcidr/10",
]

EPHEMERAL_LOOPBACK = "/ip4/127.0.0.1/tcp/0"

LOWPOWER_LOW_WATER = 20
LOWPOWER_HIGH_WATER = 40
LOWPOWER_GRACE_PERIOD = "1m0s"


def flatfs_spec() -> Dict[str, Any]:
    return {
        "type": "mount",
        "mounts": [
            {
                "mountpoint": "/blocks",
                "type": "measure",
                "prefix": "flatfs.datastore",
                "child": {
                    "type": "flatfs",
                    "path": "blocks",
                    "sync": True,
                    "shardFunc": "/repo/flatfs/shard/v1/next-to-last/2",
                },
            },
            {
                "mountpoint": "/",
                "type": "measure",
                "prefix": "leveldb.datastore",
                "child": {
                    "type": "levelds",
                    "path": "datastore",
                    "compression": "none",
                },
            },
        ],
    }


def badger_spec() -> Dict[str, Any]:
    return {
        "type": "measure",
        "prefix": "badger.datastore",
        "child": {
            "type": "badgerds",
            "path": "badgerds",
            "syncWrites": False,
            "truncate": True,
        },
    }


def _backfill_remote_api(doc: Dict[str, Any]) -> None:
    addresses = ensure_section(doc, "Addresses")
    if not addresses.get("RemoteAPI"):
        addresses["RemoteAPI"] = [values.remote_api_address()]


def _raise_storage_max(doc: Dict[str, Any]) -> None:
    datastore = ensure_section(doc, "Datastore")
    if datastore.get("StorageMax") == "10GB":
        datastore["StorageMax"] = "1TB"


# ---------------------------------------------------------------------------
# Rede
# ---------------------------------------------------------------------------

def _server(doc: Dict[str, Any]) -> None:
    ensure_section(doc, "Addresses")["NoAnnounce"] = union(
        strings(doc, "Addresses", "NoAnnounce"), DEFAULT_SERVER_FILTERS
    )
    swarm = ensure_section(doc, "Swarm")
    swarm["AddrFilters"] = union(strings(doc, "Swarm", "AddrFilters"), DEFAULT_SERVER_FILTERS)
    ensure_section(doc, "Discovery", "MDNS")["Enabled"] = False
    swarm["DisableNatPortMap"] = True


def _local_discovery(doc: Dict[str, Any]) -> None:
    ensure_section(doc, "Addresses")["NoAnnounce"] = difference(
        strings(doc, "Addresses", "NoAnnounce"), DEFAULT_SERVER_FILTERS
    )
    swarm = ensure_section(doc, "Swarm")
    swarm["AddrFilters"] = difference(strings(doc, "Swarm", "AddrFilters"), DEFAULT_SERVER_FILTERS)
    ensure_section(doc, "Discovery", "MDNS")["Enabled"] = True
    swarm["DisableNatPortMap"] = False


def _test(doc: Dict[str, Any]) -> None:
    addresses = ensure_section(doc, "Addresses")
    addresses["API"] = [EPHEMERAL_LOOPBACK]
    addresses["Gateway"] = [EPHEMERAL_LOOPBACK]
    addresses["Swarm"] = [EPHEMERAL_LOOPBACK]

    ensure_section(doc, "Swarm")["DisableNatPortMap"] = True

    doc["Bootstrap"] = []
    ensure_section(doc, "Discovery", "MDNS")["Enabled"] = False


def _default_networking(doc: Dict[str, Any]) -> None:
    doc["Addresses"] = values.default_addresses()

    peers = default_bootstrap_peers()
    doc["Bootstrap"] = union(doc.get("Bootstrap") or [], bootstrap_peer_strings(peers))

    ensure_section(doc, "Swarm")["DisableNatPortMap"] = False
    ensure_section(doc, "Discovery", "MDNS")["Enabled"] = True


def _announce_public(
    doc: Dict[str, Any],
    *,
    timeout: Optional[float] = None,
    session: Optional[requests.Session] = None,
) -> None:
    address = network.external_ip(timeout=timeout, session=session)
    addresses = ensure_section(doc, "Addresses")
    addresses["Announce"] = union(addresses.get("Announce") or [], [address])


def _lowpower(doc: Dict[str, Any]) -> None:
    ensure_section(doc, "Routing")["Type"] = "dhtclient"
    ensure_section(doc, "AutoNAT")["ServiceMode"] = "disabled"
    ensure_section(doc, "Reprovider")["Interval"] = "0"

    conn_mgr = ensure_section(doc, "Swarm", "ConnMgr")
    conn_mgr["Type"] = "basic"
    conn_mgr["LowWater"] = LOWPOWER_LOW_WATER
    conn_mgr["HighWater"] = LOWPOWER_HIGH_WATER
    conn_mgr["GracePeriod"] = LOWPOWER_GRACE_PERIOD


def _randomports(doc: Dict[str, Any]) -> None:
    port = network.available_port()
    ensure_section(doc, "Addresses")["Swarm"] = [
        f"/ip4/0.0.0.0/tcp/{port}",
        f"/ip6/::/tcp/{port}",
    ]


# ---------------------------------------------------------------------------
# Datastore (somente na inicialização)
# ---------------------------------------------------------------------------

def _flatfs(doc: Dict[str, Any]) -> None:
    ensure_section(doc, "Datastore")["Spec"] = flatfs_spec()


def _badgerds(doc: Dict[str, Any]) -> None:
    ensure_section(doc, "Datastore")["Spec"] = badger_spec()


# ---------------------------------------------------------------------------
# Armazenamento: host / repairer / client
# ---------------------------------------------------------------------------

def _storage_host(doc: Dict[str, Any]) -> None:
    peers = default_bootstrap_peers()
    doc["Bootstrap"] = bootstrap_peer_strings(peers)

    experimental = ensure_section(doc, "Experimental")
    experimental["Libp2pStreamMounting"] = True
    experimental["StorageHostEnabled"] = True
    experimental["Analytics"] = True
    experimental["ReportOnline"] = True
    experimental["ReportStatusContract"] = True

    _backfill_remote_api(doc)
    _raise_storage_max(doc)
    doc["Services"] = values.services_config(Environment.PRODUCTION)
    ensure_section(doc, "Swarm")["SwarmKey"] = values.swarm_key()
    doc["ChainInfo"] = {"ChainId": values.chain_id()}


def _testnet_storage_host(doc: Dict[str, Any]) -> None:
    peers = default_testnet_bootstrap_peers()
    doc["Bootstrap"] = bootstrap_peer_strings(peers)

    experimental = ensure_section(doc, "Experimental")
    experimental["Libp2pStreamMounting"] = True
    experimental["StorageHostEnabled"] = True
    experimental["Analytics"] = True
    experimental["ReportOnline"] = True
    experimental["ReportStatusContract"] = True

    _backfill_remote_api(doc)
    _raise_storage_max(doc)
    doc["Services"] = values.services_config(Environment.DEV)
    ensure_section(doc, "Swarm")["SwarmKey"] = values.swarm_key(testnet=True)
    doc["ChainInfo"] = {"ChainId": values.chain_id(testnet=True)}


def _storage_repairer(doc: Dict[str, Any]) -> None:
    peers = default_bootstrap_peers()
    doc["Bootstrap"] = bootstrap_peer_strings(peers)

    experimental = ensure_section(doc, "Experimental")
    experimental["Libp2pStreamMounting"] = True
    experimental["HostRepairEnabled"] = True
    experimental["Analytics"] = True

    _backfill_remote_api(doc)
    doc["Services"] = values.services_config(Environment.PRODUCTION)
    ensure_section(doc, "Swarm")["SwarmKey"] = values.swarm_key()


def _testnet_storage_repairer(doc: Dict[str, Any]) -> None:
    peers = default_testnet_bootstrap_peers()
    doc["Bootstrap"] = bootstrap_peer_strings(peers)

    experimental = ensure_section(doc, "Experimental")
    experimental["Libp2pStreamMounting"] = True
    experimental["HostRepairEnabled"] = True
    experimental["Analytics"] = True

    _backfill_remote_api(doc)
    ensure_section(doc, "Swarm")["SwarmKey"] = values.swarm_key(testnet=True)


def _storage_client(doc: Dict[str, Any]) -> None:
    peers = default_bootstrap_peers()
    doc["Bootstrap"] = bootstrap_peer_strings(peers)

    experimental = ensure_section(doc, "Experimental")
    experimental["Libp2pStreamMounting"] = True
    experimental["StorageClientEnabled"] = True
    experimental["StorageHostEnabled"] = False
    experimental["HostsSyncEnabled"] = True
    experimental["HostsSyncMode"] = values.hosts_sync_mode()

    _backfill_remote_api(doc)
    doc["Services"] = values.services_config(Environment.PRODUCTION)
    ensure_section(doc, "Swarm")["SwarmKey"] = values.swarm_key()


def _testnet_storage_client(doc: Dict[str, Any]) -> None:
    peers = default_testnet_bootstrap_peers()
    doc["Bootstrap"] = bootstrap_peer_strings(peers)

    experimental = ensure_section(doc, "Experimental")
    experimental["Libp2pStreamMounting"] = True
    experimental["StorageClientEnabled"] = True
    experimental["StorageHostEnabled"] = False
    experimental["HostsSyncEnabled"] = True
    experimental["HostsSyncMode"] = values.hosts_sync_mode(dev=True)

    _backfill_remote_api(doc)
    doc["ChainInfo"] = {"ChainId": values.chain_id(testnet=True)}
    ensure_section(doc, "Swarm")["SwarmKey"] = values.swarm_key(testnet=True)


def _with_services(base, environment: Environment):
    """Compõe um transform base de testnet com o bundle de serviços do ambiente."""

    def transform(doc: Dict[str, Any]) -> None:
        base(doc)
        doc["Services"] = values.services_config(environment)

    return transform


def build_default_registry() -> ProfileRegistry:
    """Registro com todos os profiles embutidos, na ordem de exibição."""
    registry = ProfileRegistry()
    for profile in (
        Profile(
            name="server",
            description="Disables local host discovery, recommended when running "
                        "the node on machines with public IPv4 addresses.",
            transform=_server,
        ),
        Profile(
            name="local-discovery",
            description="Sets default values to fields affected by the server "
                        "profile, enables discovery in local networks.",
            transform=_local_discovery,
        ),
        Profile(
            name="test",
            description="Reduces external interference of the daemon, this is "
                        "useful when using the daemon in test environments.",
            transform=_test,
        ),
        Profile(
            name="default-networking",
            description="Restores default network settings. Inverse profile of the test profile.",
            transform=_default_networking,
        ),
        Profile(
            name="announce-public",
            description="Announce public IP when running on cloud VM or local network.",
            transform=_announce_public,
            options=("timeout", "session"),
        ),
        Profile(
            name="default-datastore",
            description="Configures the node to use the default datastore (flatfs). "
                        "This profile may only be applied when first initializing the node.",
            transform=_flatfs,
            init_only=True,
        ),
        Profile(
            name="flatfs",
            description="Configures the node to use the flatfs datastore: simple, "
                        "battle-tested, one file per block. "
                        "This profile may only be applied when first initializing the node.",
            transform=_flatfs,
            init_only=True,
        ),
        Profile(
            name="badgerds",
            description="Configures the node to use the badger datastore: fastest, "
                        "but reclaims space poorly on small datastores and uses more memory. "
                        "This profile may only be applied when first initializing the node.",
            transform=_badgerds,
            init_only=True,
        ),
        Profile(
            name="lowpower",
            description="Reduces daemon overhead on the system. May affect node "
                        "functionality: content discovery and data fetching may be degraded.",
            transform=_lowpower,
        ),
        Profile(
            name="randomports",
            description="Use a random port number for swarm.",
            transform=_randomports,
        ),
        Profile(
            name="storage-host",
            description="Configures necessary flags and options for node to become a storage host.",
            transform=_storage_host,
        ),
        Profile(
            name="storage-host-dev",
            description="[dev] Configures necessary flags and options for node to become a storage host.",
            transform=_with_services(_testnet_storage_host, Environment.DEV),
        ),
        Profile(
            name="storage-host-testnet",
            description="[testnet] Configures necessary flags and options for node to become a storage host.",
            transform=_with_services(_testnet_storage_host, Environment.TESTNET),
        ),
        Profile(
            name="storage-repairer",
            description="Configures necessary flags and options for node to become a storage repairer.",
            transform=_storage_repairer,
        ),
        Profile(
            name="storage-repairer-dev",
            description="[dev] Configures necessary flags and options for node to become a storage repairer.",
            transform=_with_services(_testnet_storage_repairer, Environment.DEV),
        ),
        Profile(
            name="storage-repairer-testnet",
            description="[testnet] Configures necessary flags and options for node to become a storage repairer.",
            transform=_with_services(_testnet_storage_repairer, Environment.TESTNET),
        ),
        Profile(
            name="storage-client",
            description="Configures necessary flags and options for node to pay to store files on the network.",
            transform=_storage_client,
        ),
        Profile(
            name="storage-client-dev",
            description="[dev] Configures necessary flags and options for node to pay to store files on the network.",
            transform=_with_services(_testnet_storage_client, Environment.DEV),
        ),
        Profile(
            name="storage-client-testnet",
            description="[testnet] Configures necessary flags and options for node to pay to store files on the network.",
            transform=_with_services(_testnet_storage_client, Environment.TESTNET),
        ),
    ):
        registry.add(profile)
    return registry


PROFILES = build_default_registry()
