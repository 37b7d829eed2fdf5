# src/btfs_config/core/migrations/registry.py
"""
Registro estrutural da cadeia de migrações.

O `MigrationRegistry` valida a cadeia antes de qualquer execução:

    - `order` e `name` são únicos
    - `inputs` só referenciam flags do chamador ou steps de ordem menor
    - a numeração é contígua, de 1 a N (`validate`)

Limites explícitos:
    - Não executa steps (papel do sequenciador)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .types import CALLER_FLAGS, MigrationStep


class DuplicateMigrationError(ValueError):
    """Dois steps com a mesma `order` ou o mesmo `name`."""


class MigrationSequenceError(ValueError):
    """
    Cadeia estruturalmente inválida: numeração com lacunas ou `inputs`
    apontando para um step inexistente ou posterior.
    """


@dataclass
class MigrationRegistry:
    """
    Registro canônico de steps de migração.

    Invariantes:
        - Cada `order` e cada `name` são únicos
        - `list()` devolve os steps em ordem crescente de `order`
    """

    _steps: Dict[int, MigrationStep] = field(default_factory=dict, init=False, repr=False)
    _names: Dict[str, int] = field(default_factory=dict, init=False, repr=False)

    def add(self, step: MigrationStep) -> None:
        if not isinstance(step.order, int) or step.order < 1:
            raise ValueError("step.order must be a positive integer")
        if not isinstance(step.name, str) or not step.name.strip():
            raise ValueError("step.name must be a non-empty string")

        if step.order in self._steps:
            raise DuplicateMigrationError(f"Duplicate migration order: {step.order}")
        if step.name in self._names or step.name in CALLER_FLAGS:
            raise DuplicateMigrationError(f"Duplicate migration name: {step.name}")

        for param, source in step.inputs.items():
            if source in CALLER_FLAGS:
                continue
            source_order = self._names.get(source)
            if source_order is None or source_order >= step.order:
                raise MigrationSequenceError(
                    f"migration {step.order} ({step.name}): input '{param}' "
                    f"must reference an earlier step or a caller flag, got '{source}'"
                )

        self._steps[step.order] = step
        self._names[step.name] = step.order

    def get(self, name: str) -> MigrationStep:
        return self._steps[self._names[name]]

    def list(self) -> List[MigrationStep]:
        return [self._steps[o] for o in sorted(self._steps)]

    def validate(self) -> None:
        orders = sorted(self._steps)
        expected = list(range(1, len(orders) + 1))
        if orders != expected:
            missing = sorted(set(range(1, (orders[-1] if orders else 0) + 1)) - set(orders))
            raise MigrationSequenceError(f"migration numbering has gaps: missing {missing}")
