# src/btfs_config/core/profiles/__init__.py
"""
Profiles do btfs-config.

Um profile é uma transformação nomeada aplicada em bloco ao documento de
configuração, opcionalmente restrita à primeira inicialização.

## Componentes

- **types**    → `Profile`, `Transformer`
- **registry** → `ProfileRegistry`, `ensure_applicable`, `apply_profiles`
- **network**  → lookup do IP público e aquisição de porta efêmera
- **builtin**  → profiles embutidos e o registro `PROFILES`

## Limites Explícitos

- A aplicação não é atômica: uma falha deixa o documento parcialmente
  alterado; chamadores que precisem de atomicidade fazem snapshot/restore
- `init_only` é exposto, mas imposto apenas pelo chamador
"""

from .builtin import PROFILES, build_default_registry
from .registry import (
    DuplicateProfileError,
    ProfileRegistry,
    apply_profiles,
    ensure_applicable,
)
from .types import Profile, Transformer

__all__ = [
    "DuplicateProfileError",
    "PROFILES",
    "Profile",
    "ProfileRegistry",
    "Transformer",
    "apply_profiles",
    "build_default_registry",
    "ensure_applicable",
]
