# src/btfs_config/core/migrations/types.py
"""
Tipos canônicos das migrações.

Componentes:
    - MigrationStep   → descritor numerado de uma migração
    - MigrationResult → resultado imutável de um step
    - MigrationReport → resultado agregado de uma passada completa

Fluxo de dados entre steps:
    Alguns steps dependem do booleano produzido por um step anterior (ou
    de uma flag do chamador). Essa dependência é declarada em
    `MigrationStep.inputs` como `{parametro: origem}` e o sequenciador
    passa o valor explicitamente como argumento nomeado; ele nunca é
    relido do documento já mutado.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping

# Flags fornecidas pelo chamador e disponíveis como origem de `inputs`.
CALLER_FLAGS = ("just_initialized", "has_host_value")


@dataclass(frozen=True)
class MigrationStep:
    """
    Unidade numerada de migração.

    Campos:
        - order: posição na cadeia (1..N, sem lacunas)
        - name: identificador estável, também usado como origem de `inputs`
        - apply: `apply(doc, **inputs) -> bool`, True se alterou o documento
        - inputs: parâmetro de `apply` → nome de um step anterior ou de uma
          flag do chamador
        - description: resumo exibido em relatórios
    """
    order: int
    name: str
    apply: Callable[..., bool]
    inputs: Mapping[str, str] = field(default_factory=dict)
    description: str = ""


@dataclass(frozen=True)
class MigrationResult:
    """
    Resultado de um step.

    `warnings` registra erros descartados pelo sequenciador (ex.: falha
    ao resolver a tabela de peers padrão); nesses casos `changed` é False.
    """
    order: int
    name: str
    changed: bool
    warnings: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class MigrationReport:
    """Resultado agregado de uma passada de migração."""

    results: List[MigrationResult] = field(default_factory=list)
    fingerprint_before: str = ""
    fingerprint_after: str = ""

    @property
    def changed(self) -> bool:
        return any(r.changed for r in self.results)

    @property
    def outcomes(self) -> Dict[str, bool]:
        return {r.name: r.changed for r in self.results}

    @property
    def warnings(self) -> List[str]:
        return [w for r in self.results for w in r.warnings]
