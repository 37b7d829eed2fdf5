# src/btfs_config/core/profiles/network.py
"""
Recursos de rede usados por profiles.

Dois pontos de I/O existem no core e ambos vivem aqui:

    - `external_ip`: um único GET bloqueante ao serviço de IP público,
      sempre com timeout limitado
    - `available_port`: abre um socket de escuta efêmero, lê a porta
      atribuída e fecha o socket em qualquer caminho

Nenhum resultado é cacheado e nenhuma tentativa é repetida; política de
retry pertence ao chamador.
"""

from __future__ import annotations

import ipaddress
import logging
import socket
from typing import Optional, Sequence

import requests

from btfs_config.core.errors import (
    ExternalLookupFailedError,
    InvalidAddressError,
    PortUnavailableError,
)
from btfs_config.core.settings import values

logger = logging.getLogger(__name__)


def _check_swarm_port(int_port: int, swarm_addrs: Sequence[str]) -> None:
    for address in swarm_addrs:
        parts = address.split("/")
        if len(parts) != 5:
            raise InvalidAddressError(address, "invalid swarm listening address")
        if parts[4] == str(int_port):
            return
    raise InvalidAddressError(
        ",".join(swarm_addrs),
        f"internal port {int_port} not found in swarm listening addresses",
    )


def external_ip(
    ext_port: Optional[int] = None,
    int_port: Optional[int] = None,
    swarm_addrs: Optional[Sequence[str]] = None,
    *,
    timeout: Optional[float] = None,
    session: Optional[requests.Session] = None,
) -> str:
    """
    Descobre o IP público e sintetiza o endereço de anúncio
    `/ip4/<ip>/tcp/<ext_port>`.

    Args:
        ext_port: porta anunciada (padrão: porta do swarm).
        int_port: porta interna que deve constar em `swarm_addrs`.
        swarm_addrs: endereços de escuta do swarm; quando informados,
            cada um deve ter a forma `/ip4/<host>/tcp/<porta>` e algum
            deve usar `int_port`.
        timeout: limite em segundos (padrão: `lookup.timeout_seconds`).
        session: sessão `requests` opcional do chamador.

    Raises:
        InvalidAddressError: se `swarm_addrs` for inválido para `int_port`.
        ExternalLookupFailedError: timeout, erro de rede, status não-2xx
            ou resposta que não é um IPv4.
    """
    default_port = values.swarm_port()
    ext_port = default_port if ext_port is None else ext_port
    int_port = default_port if int_port is None else int_port

    if swarm_addrs is not None:
        _check_swarm_port(int_port, swarm_addrs)

    url = values.lookup_url()
    limit = values.lookup_timeout() if timeout is None else timeout
    http = session or requests

    try:
        resp = http.get(url, timeout=limit)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise ExternalLookupFailedError(f"get external IP failed: {exc}") from exc

    ip = resp.text.strip()
    try:
        ipaddress.IPv4Address(ip)
    except ValueError as exc:
        raise ExternalLookupFailedError(f"parse external IP failed: {ip!r}") from exc

    logger.debug("external ip resolved to %s", ip)
    return f"/ip4/{ip}/tcp/{ext_port}"


def available_port() -> int:
    """
    Obtém uma porta TCP livre da pilha de rede.

    Raises:
        PortUnavailableError: se o socket não puder ser aberto ou ligado.
    """
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.bind(("", 0))
            sock.listen(1)
            return sock.getsockname()[1]
    except OSError as exc:
        raise PortUnavailableError(f"could not acquire an ephemeral port: {exc}") from exc
