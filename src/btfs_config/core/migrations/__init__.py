# src/btfs_config/core/migrations/__init__.py
"""
Migrações do documento de configuração.

    - types     → `MigrationStep`, `MigrationResult`, `MigrationReport`
    - registry  → `MigrationRegistry` (unicidade, numeração, fluxo de inputs)
    - steps     → a cadeia numerada embarcada (`MIGRATIONS`)
    - sequencer → `run_migrations` / `migrate_config`

Limites explícitos:
    - Não persiste o documento
    - Não remove steps aposentados: a numeração é estável
"""

from .registry import DuplicateMigrationError, MigrationRegistry, MigrationSequenceError
from .sequencer import migrate_config, run_migrations
from .steps import MIGRATIONS, build_default_migrations
from .types import CALLER_FLAGS, MigrationReport, MigrationResult, MigrationStep

__all__ = [
    "CALLER_FLAGS",
    "DuplicateMigrationError",
    "MIGRATIONS",
    "MigrationRegistry",
    "MigrationReport",
    "MigrationResult",
    "MigrationSequenceError",
    "MigrationStep",
    "build_default_migrations",
    "migrate_config",
    "run_migrations",
]
