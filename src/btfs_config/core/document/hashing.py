# src/btfs_config/core/document/hashing.py
"""
Fingerprint canônico do documento de configuração.

Usado pelo sequenciador de migrações para registrar o estado do documento
antes e depois de uma passada, permitindo ao chamador decidir se precisa
persistir sem comparar estruturas inteiras.

Política de hashing:
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - Codificação UTF-8
    - SHA-256
"""

import hashlib
import json
from typing import Any, Dict


def compute_document_hash(doc: Dict[str, Any]) -> str:
    """
    Gera um hash determinístico do documento.

    Args:
        doc (Dict[str, Any]): Documento de configuração do nó.

    Returns:
        str: Hash SHA-256 hexadecimal (64 caracteres).

    Raises:
        TypeError: Se o objeto fornecido não for um dicionário.
    """

    if not isinstance(doc, dict):
        raise TypeError(
            f"Documento para hashing deve ser dict, recebido: {type(doc).__name__}"
        )

    canonical_json = json.dumps(
        doc,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
