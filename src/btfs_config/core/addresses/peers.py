# src/btfs_config/core/addresses/peers.py
"""
Modelo de peers de bootstrap.

A representação persistida no documento (`doc["Bootstrap"]`) é uma lista
plana de strings multiaddress, cada uma codificando um par
(endereço de transporte, identidade do peer):

    /ip4/63.176.242.235/tcp/4001/p2p/16Uiu2HAmT9HS...

Este módulo converte essa lista em `PeerRecord`s (uma identidade com um
conjunto ordenado de endereços) e de volta, além de resolver as tabelas
embarcadas de peers padrão (mainnet e testnet).

Decisões arquiteturais:
    - A decodificação usa a biblioteca `multiaddr`; qualquer string que
      ela rejeite é um `InvalidAddressError`
    - O parse é atômico: a primeira entrada inválida aborta tudo
    - O sufixo legado `/ipfs/<id>` é aceito como sinônimo de `/p2p/<id>`;
      a serialização sempre usa `/p2p/`
    - Strings que compartilham a mesma identidade são agrupadas num único
      registro, na ordem da primeira aparição
    - Um registro sem endereços, ou cujo endereço não re-serializa, é um
      bug do core (`FatalInvariantViolation`)

Limites explícitos:
    - Não abre conexões nem resolve nomes
    - Não valida alcançabilidade dos peers
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from multiaddr import Multiaddr
from multiaddr.exceptions import Error as MultiaddrError

from btfs_config.core.errors import (
    CorruptedBuiltinTableError,
    FatalInvariantViolation,
    InvalidAddressError,
)
from btfs_config.core.settings import values

# Nome legado do protocolo de identidade; a biblioteca só conhece "/p2p/".
LEGACY_PEER_SEGMENT = "/ipfs/"
PEER_SEGMENT = "/p2p/"


@dataclass(frozen=True)
class PeerRecord:
    """
    Identidade de um peer e seus endereços de transporte.

    Campos:
        - peer_id: identidade do peer (ex.: "16Uiu2HAm...")
        - addrs: endereços multiaddress sem o sufixo `/p2p/<id>`
    """
    peer_id: str
    addrs: Tuple[str, ...]


def _canonical(address: str) -> str:
    """Reescreve um sufixo `/ipfs/<id>` para a forma `/p2p/<id>`."""
    head, sep, peer_id = address.rpartition(LEGACY_PEER_SEGMENT)
    if sep and peer_id and "/" not in peer_id:
        return f"{head}{PEER_SEGMENT}{peer_id}"
    return address


def _decode(address: str) -> Tuple[str, str]:
    """Separa uma string de bootstrap em (transporte, peer_id)."""
    try:
        ma = Multiaddr(_canonical(address))
        components = list(ma.items())
    except (ValueError, LookupError, TypeError, MultiaddrError) as exc:
        raise InvalidAddressError(address, str(exc) or "not a multiaddress") from exc

    if not components:
        raise InvalidAddressError(address, "empty multiaddress")

    proto, peer_id = components[-1]
    if proto.name != "p2p" or not peer_id:
        raise InvalidAddressError(address, "missing trailing /p2p/<peer-id> component")

    # O id em base58 não contém "/", então os dois últimos segmentos são
    # sempre o nome do protocolo e a identidade.
    transport = str(ma).rsplit("/", 2)[0]
    if not transport:
        raise InvalidAddressError(address, "missing transport address before peer id")

    return transport, str(peer_id)


def parse_bootstrap_peers(addresses: Iterable[str]) -> List[PeerRecord]:
    """
    Interpreta uma lista de strings de bootstrap.

    Args:
        addresses: strings `"<transporte>/p2p/<id>"`.

    Returns:
        List[PeerRecord]: um registro por identidade, na ordem da primeira
        aparição; endereços duplicados de um mesmo peer são descartados.

    Raises:
        InvalidAddressError: na primeira entrada malformada (nenhum
            resultado parcial é retornado).
    """
    grouped: Dict[str, List[str]] = {}
    for address in addresses:
        transport, peer_id = _decode(address)
        addrs = grouped.setdefault(peer_id, [])
        if transport not in addrs:
            addrs.append(transport)

    return [PeerRecord(peer_id=pid, addrs=tuple(addrs)) for pid, addrs in grouped.items()]


def bootstrap_peer_strings(records: Sequence[PeerRecord]) -> List[str]:
    """
    Formata registros como lista de bootstrap pronta para persistência.

    Cada endereço de cada registro vira uma string com o sufixo
    `/p2p/<id>` do seu peer.

    Raises:
        FatalInvariantViolation: se um registro não tiver endereços ou se
            um endereço não re-serializar como multiaddress.
    """
    out: List[str] = []
    for record in records:
        if not record.addrs:
            raise FatalInvariantViolation(f"peer {record.peer_id} has no addresses")
        for addr in record.addrs:
            try:
                out.append(str(Multiaddr(f"{addr}/p2p/{record.peer_id}")))
            except (ValueError, LookupError, TypeError, MultiaddrError) as exc:
                raise FatalInvariantViolation(
                    f"peer {record.peer_id} address {addr} failed to serialize: {exc}"
                ) from exc
    return out


@lru_cache(maxsize=None)
def _builtin_peers(testnet: bool) -> Tuple[PeerRecord, ...]:
    table = "testnet" if testnet else "mainnet"
    try:
        return tuple(parse_bootstrap_peers(values.bootstrap_addresses(testnet=testnet)))
    except InvalidAddressError as exc:
        raise CorruptedBuiltinTableError(
            f"failed to parse hardcoded {table} bootstrap peers: {exc}. "
            "This is a problem with the btfs-config distribution, not with your node configuration."
        ) from exc


def default_bootstrap_peers() -> List[PeerRecord]:
    """Peers padrão da mainnet (tabela embarcada, interpretada uma vez)."""
    return list(_builtin_peers(False))


def default_testnet_bootstrap_peers() -> List[PeerRecord]:
    """Peers padrão da testnet (tabela embarcada, interpretada uma vez)."""
    return list(_builtin_peers(True))


def bootstrap_peers(doc: Dict[str, Any]) -> List[PeerRecord]:
    """Peers de bootstrap atualmente configurados no documento."""
    return parse_bootstrap_peers(doc.get("Bootstrap") or [])


def set_bootstrap_peers(doc: Dict[str, Any], records: Sequence[PeerRecord]) -> None:
    """Substitui integralmente a lista de bootstrap do documento."""
    doc["Bootstrap"] = bootstrap_peer_strings(records)
