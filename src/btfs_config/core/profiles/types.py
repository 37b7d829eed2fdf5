# src/btfs_config/core/profiles/types.py
"""
Tipos canônicos de profiles.

Um profile é uma transformação nomeada e reutilizável aplicada em bloco
ao documento de configuração.

Invariantes:
    - `Profile` é imutável
    - `transform` muta o documento in-place e sinaliza falha levantando
      exceção; escritas anteriores à falha permanecem (sem rollback)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Tuple

# transform(doc, **options) -> None
Transformer = Callable[..., None]


@dataclass(frozen=True)
class Profile:
    """
    Profile registrado.

    Campos:
        - name: identificador único (ex.: "storage-host")
        - description: descrição curta exibida ao operador
        - transform: função que aplica o profile ao documento
        - init_only: se True, só pode ser aplicado na criação do documento
          (verificação feita pelo chamador)
        - options: argumentos nomeados opcionais que o transform aceita
          (ex.: `timeout` e `session` do lookup de IP em `announce-public`)
    """
    name: str
    description: str
    transform: Transformer
    init_only: bool = False
    options: Tuple[str, ...] = ()
