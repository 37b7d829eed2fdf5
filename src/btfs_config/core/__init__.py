# src/btfs_config/core/__init__.py
"""
Core do btfs-config.

Componentes principais:
    - settings   → constantes embarcadas (defaults.yaml) e override local
    - document   → acesso ao documento, ambiente de serviços, fingerprint
    - addresses  → operações de conjunto e modelo de peers de bootstrap
    - profiles   → transformações nomeadas e componíveis do documento
    - migrations → cadeia numerada, idempotente, executada a cada início

Princípios fundamentais:
    - O documento é do chamador; o core só o altera in-place
    - Erros recuperáveis são `BtfsConfigError`; defeitos são
      `FatalInvariantViolation`
"""
