# src/btfs_config/core/errors.py
"""
Exceções canônicas do core do btfs-config.

Este módulo define a hierarquia oficial de exceções levantadas pelo
modelo de peers de bootstrap, pelo registro de profiles e pelos
utilitários de rede usados pelos profiles.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros de parse, formatação e profile são devolvidos ao chamador
      imediato, nunca engolidos nessa camada
    - Violações de invariante do próprio core são sinalizadas por uma
      classe separada, que não herda da base recuperável

Invariantes:
    - Toda falha recuperável herda de `BtfsConfigError`
    - `FatalInvariantViolation` nunca é capturada pelo core

Limites explícitos:
    - Erros da camada de settings vivem em `core.settings.errors`
"""


class BtfsConfigError(Exception):
    """
    Exceção base para falhas recuperáveis do core.

    O sequenciador de migrações captura exatamente esta classe para
    permanecer total.
    """


class InvalidAddressError(BtfsConfigError, ValueError):
    """
    Endereço de peer malformado.

    Levantada quando uma string não decodifica como multiaddress válido
    terminado por um segmento de identidade (`/p2p/<id>`), ou quando um
    endereço de escuta do swarm não tem o formato esperado.
    """

    def __init__(self, address: str, reason: str):
        super().__init__(f"invalid peer address {address!r}: {reason}")
        self.address = address
        self.reason = reason


class ProfileNotFoundError(BtfsConfigError, LookupError):
    """Nome de profile desconhecido pelo registro."""

    def __init__(self, name: str):
        super().__init__(f"profile not found: {name!r}")
        self.name = name


class InitOnlyProfileError(BtfsConfigError):
    """
    Profile restrito à inicialização aplicado fora dela.

    A restrição é verificada pelo chamador (`ensure_applicable`); o
    registro em si sempre permite o lookup.
    """

    def __init__(self, name: str):
        super().__init__(f"profile {name!r} may only be applied when initializing the node")
        self.name = name


class ExternalLookupFailedError(BtfsConfigError):
    """Lookup do IP público falhou (timeout, erro de rede ou status não-2xx)."""


class PortUnavailableError(BtfsConfigError):
    """Não foi possível obter uma porta efêmera da pilha de rede."""


class CorruptedBuiltinTableError(BtfsConfigError):
    """
    Tabela de bootstrap embarcada não pôde ser interpretada.

    Indica um problema na distribuição do próprio pacote (ou num override
    local de settings), e não em dados do usuário. Deve ser tratada como
    erro fatal de inicialização do processo.
    """


class FatalInvariantViolation(RuntimeError):
    """
    Um registro de peer estruturalmente garantido falhou ao ser
    re-serializado.

    Representa um bug no core, não uma entrada inválida; chamadores devem
    abortar e reportar em vez de tratar como erro recuperável.
    """
