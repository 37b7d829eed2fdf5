# tests/core/addresses/test_bootstrap_peers.py
"""
Testes do modelo de peers de bootstrap.

Os testes asseguram que:
- strings válidas são agrupadas por identidade, na ordem de aparição
- a primeira entrada inválida aborta o parse inteiro
- registros re-serializam para as mesmas strings
- registros sem endereços são tratados como violação fatal
- as tabelas embarcadas são interpretadas sem erro

Limites explícitos:
    - Não abre conexões com os peers
"""

import pytest

from btfs_config.core.addresses import (
    PeerRecord,
    bootstrap_peer_strings,
    bootstrap_peers,
    default_bootstrap_peers,
    default_testnet_bootstrap_peers,
    parse_bootstrap_peers,
    set_bootstrap_peers,
)
from btfs_config.core.addresses import peers
from btfs_config.core.errors import (
    CorruptedBuiltinTableError,
    FatalInvariantViolation,
    InvalidAddressError,
)
from btfs_config.core.settings import values

PEER_ID = "16Uiu2HAmT9HSazxmnS4ucPY3Zpq2B5NT3wbiJi9ETurkVGGpxa57"


def test_parse_single_address(mainnet_addr):
    records = parse_bootstrap_peers([mainnet_addr])
    assert records == [PeerRecord(peer_id=PEER_ID, addrs=("/ip4/63.176.242.235/tcp/4001",))]


def test_addresses_sharing_an_identity_are_grouped():
    a = f"/ip4/1.2.3.4/tcp/4001/p2p/{PEER_ID}"
    b = f"/ip4/5.6.7.8/tcp/4001/p2p/{PEER_ID}"
    records = parse_bootstrap_peers([a, b, a])

    assert len(records) == 1
    assert records[0].addrs == ("/ip4/1.2.3.4/tcp/4001", "/ip4/5.6.7.8/tcp/4001")


def test_round_trip_returns_the_same_strings():
    table = values.bootstrap_addresses()
    assert bootstrap_peer_strings(parse_bootstrap_peers(table)) == table


@pytest.mark.parametrize(
    "address",
    [
        "not-an-address",
        "/ip4/1.2.3.4/tcp/4001",
        f"/p2p/{PEER_ID}",
        "/ip4/999.1.1.1/tcp/4001/p2p/" + PEER_ID,
    ],
)
def test_invalid_addresses_are_rejected(address):
    with pytest.raises(InvalidAddressError):
        parse_bootstrap_peers([address])


def test_parse_is_atomic(mainnet_addr):
    with pytest.raises(InvalidAddressError) as exc:
        parse_bootstrap_peers([mainnet_addr, "garbage"])
    assert exc.value.address == "garbage"


def test_record_without_addresses_is_fatal():
    with pytest.raises(FatalInvariantViolation):
        bootstrap_peer_strings([PeerRecord(peer_id=PEER_ID, addrs=())])


def test_fatal_violation_is_not_recoverable():
    from btfs_config.core.errors import BtfsConfigError

    assert not issubclass(FatalInvariantViolation, BtfsConfigError)


def test_default_tables_sizes():
    assert len(default_bootstrap_peers()) == 40
    assert len(default_testnet_bootstrap_peers()) == 15


def test_default_peers_are_fresh_lists():
    first = default_bootstrap_peers()
    first.clear()
    assert default_bootstrap_peers()


def test_corrupted_builtin_table(monkeypatch):
    monkeypatch.setattr(values, "bootstrap_addresses", lambda testnet=False: ["broken"])
    peers._builtin_peers.cache_clear()

    with pytest.raises(CorruptedBuiltinTableError):
        default_bootstrap_peers()


def test_document_helpers(mainnet_addr):
    doc = {"Bootstrap": [mainnet_addr]}
    records = bootstrap_peers(doc)
    assert records[0].peer_id == PEER_ID

    set_bootstrap_peers(doc, default_testnet_bootstrap_peers())
    assert doc["Bootstrap"] == values.bootstrap_addresses(testnet=True)

    assert bootstrap_peers({}) == []


def test_legacy_ipfs_suffix_is_accepted():
    legacy = "/ip4/1.2.3.4/tcp/4001/ipfs/QmQVQBsM7uoJy8hATjTm51uSAkx2y3iGLhSwA6LWLa7iQJ"
    current = "/ip4/1.2.3.4/tcp/4001/p2p/QmQVQBsM7uoJy8hATjTm51uSAkx2y3iGLhSwA6LWLa7iQJ"

    records = parse_bootstrap_peers([legacy])

    assert records == parse_bootstrap_peers([current])
    assert records[0].peer_id == "QmQVQBsM7uoJy8hATjTm51uSAkx2y3iGLhSwA6LWLa7iQJ"
    assert records[0].addrs == ("/ip4/1.2.3.4/tcp/4001",)


def test_legacy_ipfs_suffix_is_formatted_as_p2p():
    legacy = "/ip4/1.2.3.4/tcp/4001/ipfs/QmQVQBsM7uoJy8hATjTm51uSAkx2y3iGLhSwA6LWLa7iQJ"
    assert bootstrap_peer_strings(parse_bootstrap_peers([legacy])) == [
        "/ip4/1.2.3.4/tcp/4001/p2p/QmQVQBsM7uoJy8hATjTm51uSAkx2y3iGLhSwA6LWLa7iQJ"
    ]


def test_legacy_and_current_suffixes_merge_into_one_record():
    pid = "QmQVQBsM7uoJy8hATjTm51uSAkx2y3iGLhSwA6LWLa7iQJ"
    records = parse_bootstrap_peers([f"/ip4/1.2.3.4/tcp/4001/ipfs/{pid}", f"/ip4/5.6.7.8/tcp/4001/p2p/{pid}"])
    assert len(records) == 1
    assert records[0].addrs == ("/ip4/1.2.3.4/tcp/4001", "/ip4/5.6.7.8/tcp/4001")


def test_bare_legacy_identity_is_rejected():
    with pytest.raises(InvalidAddressError):
        parse_bootstrap_peers(["/ipfs/QmQVQBsM7uoJy8hATjTm51uSAkx2y3iGLhSwA6LWLa7iQJ"])
