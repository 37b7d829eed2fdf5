# src/btfs_config/core/settings/merge.py
"""
Deep-merge canônico de settings.

Política de merge:
    - dict → merge recursivo por chave
    - list → sobrescrita total (uma tabela local substitui a embarcada)
    - escalar → sobrescrita direta
    - conflito de tipos → erro estrutural explícito, com o caminho completo
      da chave (ex.: `lookup.url`)

Invariantes:
    - Nenhum input é mutado durante o processo
    - A mesma entrada sempre produz a mesma saída

Limites explícitos:
    - Não carrega arquivos
    - Não realiza coerção de tipos (ex.: `5` não substitui `5.0`)
"""

from copy import deepcopy
from typing import Any, Dict, Tuple

from .errors import SettingsTypeConflictError


def _merge_into(target: Dict[str, Any], override: Dict[str, Any], path: Tuple[str, ...]) -> None:
    for key, incoming in override.items():
        current = target.get(key)
        where = ".".join(path + (str(key),))

        if key not in target or isinstance(incoming, list):
            target[key] = deepcopy(incoming)
        elif isinstance(current, dict) and isinstance(incoming, dict):
            _merge_into(current, incoming, path + (str(key),))
        elif type(current) is type(incoming):
            target[key] = deepcopy(incoming)
        else:
            raise SettingsTypeConflictError(
                f"Conflito de tipo em '{where}': "
                f"{type(current).__name__} vs {type(incoming).__name__}"
            )


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Devolve um novo dicionário com `override` aplicado sobre `base`.

    Raises:
        SettingsTypeConflictError: se algum dos lados não for dict, ou se
            uma chave tiver tipos incompatíveis entre base e override.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise SettingsTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result = deepcopy(base)
    _merge_into(result, override, ())
    return result
