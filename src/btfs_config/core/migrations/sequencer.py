# src/btfs_config/core/migrations/sequencer.py
"""
Sequenciador de migrações.

Executa todos os steps registrados, em ordem crescente, sobre um único
documento, uma vez por inicialização do processo.

Decisões arquiteturais:
    - Nenhum step é pulado por causa de outro: o resultado agregado é o OU
      de todos os resultados, sem curto-circuito
    - Valores entre steps fluem por `MigrationStep.inputs`, nunca relidos
      do documento
    - `BtfsConfigError` levantada por um step é descartada: o step conta
      como "não alterou", o erro vira aviso no relatório e a passada segue
    - `FatalInvariantViolation` indica defeito e é propagada

Limites explícitos:
    - Não persiste o documento (o chamador grava se `changed`)
    - Não faz rollback de um step que falhou no meio da mutação
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from btfs_config.core.document.hashing import compute_document_hash
from btfs_config.core.errors import BtfsConfigError

from .registry import MigrationRegistry
from .types import MigrationReport, MigrationResult

logger = logging.getLogger(__name__)


def run_migrations(
    doc: Dict[str, Any],
    *,
    just_initialized: bool = False,
    has_host_value: bool = False,
    registry: Optional[MigrationRegistry] = None,
) -> MigrationReport:
    """
    Executa a cadeia completa e devolve um resultado por step.

    Args:
        doc: documento de configuração, alterado in-place.
        just_initialized: o documento acabou de ser criado.
        has_host_value: o chamador detectou uma configuração legada de host.
        registry: cadeia alternativa (testes); padrão `MIGRATIONS`.
    """
    if registry is None:
        from .steps import MIGRATIONS

        registry = MIGRATIONS

    outcomes: Dict[str, bool] = {
        "just_initialized": bool(just_initialized),
        "has_host_value": bool(has_host_value),
    }
    results: List[MigrationResult] = []
    fingerprint_before = compute_document_hash(doc)

    for step in registry.list():
        kwargs = {param: outcomes[source] for param, source in step.inputs.items()}
        try:
            changed = bool(step.apply(doc, **kwargs))
            warnings: List[str] = []
        except BtfsConfigError as e:
            logger.warning("migration %d (%s) failed, skipping: %s", step.order, step.name, e)
            changed = False
            warnings = [f"{step.name}: {e}"]

        if changed:
            logger.debug("migration %d (%s) changed the document", step.order, step.name)

        outcomes[step.name] = changed
        results.append(
            MigrationResult(order=step.order, name=step.name, changed=changed, warnings=warnings)
        )

    return MigrationReport(
        results=results,
        fingerprint_before=fingerprint_before,
        fingerprint_after=compute_document_hash(doc),
    )


def migrate_config(
    doc: Dict[str, Any],
    just_initialized: bool = False,
    has_host_value: bool = False,
) -> bool:
    """Executa a cadeia e devolve True se algum step alterou o documento."""
    report = run_migrations(doc, just_initialized=just_initialized, has_host_value=has_host_value)
    return report.changed
