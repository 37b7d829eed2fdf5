# tests/test_smoke.py
"""
Testes de sanidade estrutural (smoke tests) do btfs-config.

Garantem apenas que o pacote importa, que os registros embarcados são
construídos na importação e que o namespace público expõe os pontos de
entrada.

Limites explícitos:
    - Não testar comportamento de profiles ou migrações
"""

import logging


def test_package_imports_and_exposes_entry_points():
    import btfs_config

    assert callable(btfs_config.migrate_config)
    assert callable(btfs_config.run_migrations)
    assert "storage-host" in btfs_config.PROFILES


def test_package_logger_has_null_handler():
    import btfs_config  # noqa: F401

    handlers = logging.getLogger("btfs_config").handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)
