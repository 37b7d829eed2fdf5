# src/btfs_config/core/settings/loader.py
"""
Loader canônico dos settings embarcados do btfs-config.

Os settings são resolvidos a partir de:
    - um arquivo de defaults (obrigatório; por padrão o `defaults.yaml`
      distribuído com o pacote)
    - um arquivo local de overrides (opcional, passado explicitamente)
    - no processo, um override apontado por `BTFS_CONFIG_SETTINGS`,
      restrito às seções operacionais (`OVERRIDABLE_SECTIONS`)

Decisões arquiteturais:
    - Parsers são escolhidos pela extensão do arquivo (`_PARSERS`)
    - Chaves de swarm e tabelas de bootstrap controlam as migrações 5, 7
      e 14; o ambiente não pode trocá-las, e tentar é erro explícito

Invariantes:
    - O arquivo de defaults é obrigatório
    - O resultado é sempre um dicionário puro (`dict`)
    - Overrides nunca mutam os defaults

Limites explícitos:
    - Não lê nem grava o documento de configuração do nó
    - Não valida semântica das tabelas (isso é papel do modelo de peers)
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Dict, Optional
import json
import os

import yaml  # PyYAML

from .merge import deep_merge
from .errors import (
    DefaultsNotFoundError,
    InvalidSettingsRootTypeError,
    ProtectedSettingsError,
    UnsupportedSettingsFormatError,
)

PACKAGED_DEFAULTS = Path(__file__).with_name("defaults.yaml")

# Caminho opcional de override local lido por `get_settings`.
SETTINGS_ENV_VAR = "BTFS_CONFIG_SETTINGS"

# Únicas seções que o override por ambiente pode alterar.
OVERRIDABLE_SECTIONS = frozenset({"lookup"})

_PARSERS: Dict[str, Callable[[str], Any]] = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.loads,
}


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Lê e interpreta um arquivo de settings.

    Arquivos vazios (ou YAML só com comentários) valem `{}`.

    Raises:
        DefaultsNotFoundError: Se o arquivo não existir.
        UnsupportedSettingsFormatError: Se a extensão não tiver parser.
        InvalidSettingsRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    parse = _PARSERS.get(path.suffix.lower())
    if parse is None:
        raise UnsupportedSettingsFormatError(f"Formato não suportado: {path.suffix}")

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise DefaultsNotFoundError(f"Arquivo de settings não encontrado: {path}") from None

    data = parse(text) if text.strip() else None
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidSettingsRootTypeError(
            f"Settings root deve ser dict, recebido: {type(data).__name__}"
        )
    return data


def load_settings(
    *,
    defaults_path: Optional[str] = None,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve os settings efetivos.

    Política de resolução:
        - Sem `defaults_path`, usa o `defaults.yaml` empacotado
        - O arquivo local é opcional e ignorado se não existir
        - Quando presente, o local sempre tem prioridade sobre defaults

    Raises:
        DefaultsNotFoundError: Se o arquivo de defaults não existir.
        UnsupportedSettingsFormatError: Se o formato não for suportado.
        InvalidSettingsRootTypeError: Se o conteúdo não for um dicionário.
        SettingsTypeConflictError: Se ocorrer conflito de tipos no merge.
    """
    effective = _load_file(Path(defaults_path) if defaults_path else PACKAGED_DEFAULTS)

    if local_path is not None and Path(local_path).exists():
        effective = deep_merge(effective, _load_file(Path(local_path)))

    return effective


@lru_cache(maxsize=None)
def get_settings() -> Dict[str, Any]:
    """
    Settings do processo, carregados uma única vez.

    O dicionário retornado é compartilhado e deve ser tratado como
    somente-leitura; os acessores de `btfs_config.core.settings.values`
    devolvem cópias.

    Raises:
        ProtectedSettingsError: se o arquivo apontado por
            `BTFS_CONFIG_SETTINGS` tocar seções fora de `OVERRIDABLE_SECTIONS`.
    """
    settings = load_settings()

    override_path = os.environ.get(SETTINGS_ENV_VAR)
    if not override_path or not Path(override_path).exists():
        return settings

    override = _load_file(Path(override_path))
    protected = sorted(set(override) - OVERRIDABLE_SECTIONS)
    if protected:
        raise ProtectedSettingsError(
            f"{SETTINGS_ENV_VAR} só pode alterar {sorted(OVERRIDABLE_SECTIONS)}; "
            f"seções protegidas no override: {protected}"
        )
    return deep_merge(settings, override)
