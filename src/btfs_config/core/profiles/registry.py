# src/btfs_config/core/profiles/registry.py
"""
Registro de profiles.

Este módulo define o `ProfileRegistry`, responsável por registrar profiles,
garantir unicidade de nomes e aplicá-los ao documento sob demanda.

Decisões arquiteturais:
    - A ordem de registro é preservada separadamente do armazenamento
    - Nomes duplicados são erro estrutural, detectado no registro
    - O registro expõe `init_only`, mas não o impõe: a verificação é do
      chamador (`ensure_applicable` / `apply_profiles`)

Limites explícitos:
    - Não realiza rollback de aplicações parciais
    - Não persiste o documento
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from btfs_config.core.errors import InitOnlyProfileError, ProfileNotFoundError

from .types import Profile

logger = logging.getLogger(__name__)


class DuplicateProfileError(ValueError):
    """
    Exceção levantada ao registrar dois profiles com o mesmo nome.

    Invariantes:
        - O estado interno do registro não é alterado após a falha
    """


@dataclass
class ProfileRegistry:
    """
    Registro canônico de profiles.

    Invariantes:
        - Cada `profile.name` é único no registro
        - `list()` reflete exatamente a ordem de registro
    """

    _profiles: Dict[str, Profile] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def add(self, profile: Profile) -> None:
        name = getattr(profile, "name", None)
        if not isinstance(name, str) or not name.strip():
            raise ValueError("profile.name must be a non-empty string")

        if name in self._profiles:
            raise DuplicateProfileError(f"Duplicate profile name: {name}")

        self._profiles[name] = profile
        self._order.append(name)

    def get(self, name: str) -> Profile:
        try:
            return self._profiles[name]
        except KeyError:
            raise ProfileNotFoundError(name) from None

    def list(self) -> List[Profile]:
        return [self._profiles[n] for n in self._order]

    def __contains__(self, name: object) -> bool:
        return name in self._profiles

    def apply(self, name: str, doc: Dict[str, Any], **options: Any) -> None:
        """
        Aplica o profile `name` ao documento.

        `options` são repassados ao transform e precisam estar declarados
        em `profile.options` (ex.: `timeout`/`session` em `announce-public`).

        Raises:
            ProfileNotFoundError: se o nome não estiver registrado.
            TypeError: se alguma opção não for aceita pelo profile.
            BtfsConfigError: repassada do transform; o documento pode ter
                ficado parcialmente alterado.
        """
        profile = self.get(name)
        unknown = sorted(set(options) - set(profile.options))
        if unknown:
            raise TypeError(f"profile {name!r} does not accept options: {unknown}")

        logger.info("applying profile %s", name)
        profile.transform(doc, **options)


def ensure_applicable(profile: Profile, *, initializing: bool) -> None:
    """
    Verificação do chamador para profiles `init_only`.

    Raises:
        InitOnlyProfileError: se `profile.init_only` e não estivermos
            criando o documento.
    """
    if profile.init_only and not initializing:
        raise InitOnlyProfileError(profile.name)


def apply_profiles(
    doc: Dict[str, Any],
    names: str,
    *,
    initializing: bool,
    registry: ProfileRegistry,
    **options: Any,
) -> List[str]:
    """
    Aplica uma lista de profiles separada por vírgulas (forma `--profile`).

    Cada profile é verificado e aplicado em sequência; a primeira falha
    interrompe a aplicação, deixando os profiles anteriores aplicados.
    Cada profile recebe apenas as `options` que declara.

    Returns:
        List[str]: nomes aplicados, na ordem.
    """
    applied: List[str] = []
    for raw in names.split(","):
        name = raw.strip()
        if not name:
            continue
        profile = registry.get(name)
        ensure_applicable(profile, initializing=initializing)
        accepted = {k: v for k, v in options.items() if k in profile.options}
        registry.apply(name, doc, **accepted)
        applied.append(name)
    return applied
