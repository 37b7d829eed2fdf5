# src/btfs_config/core/settings/errors.py
"""
Exceções canônicas da camada de settings do btfs-config.

Este módulo define a hierarquia de exceções levantadas durante o
carregamento e a resolução dos defaults embarcados (tabelas de bootstrap,
chaves de swarm, bundles de serviços).

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais de settings são falhas fatais de inicialização
    - Nenhuma exceção aqui representa erro em dados do usuário

Invariantes:
    - Todas as exceções de settings herdam de `SettingsError`

Limites explícitos:
    - Não cobre erros do documento de configuração do nó
    - Não realiza fallback ou recovery
"""


class SettingsError(Exception):
    """
    Exceção base para erros da camada de settings.

    Permite captura genérica de falhas de carregamento dos defaults
    embarcados, separando-as dos erros de dados do documento.
    """


class DefaultsNotFoundError(SettingsError):
    """
    Arquivo de defaults (obrigatório) não encontrado no caminho informado.

    Limites explícitos:
        - Não tenta inferir ou criar defaults automaticamente
    """


class UnsupportedSettingsFormatError(SettingsError):
    """
    Formato de arquivo de settings não suportado.

    Formatos suportados:
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidSettingsRootTypeError(SettingsError):
    """
    O conteúdo raiz do arquivo de settings não é um dicionário (`dict`).
    """


class SettingsTypeConflictError(SettingsError):
    """
    Conflito de tipos durante o deep-merge de defaults e overrides.

    Exemplo de conflito:
        - base:     {"lookup": {"timeout_seconds": 5}}
        - override: {"lookup": "fast"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class ProtectedSettingsError(SettingsError):
    """
    Override por variável de ambiente tentou alterar uma seção protegida.

    Chaves de swarm, tabelas de bootstrap e bundles de serviços decidem
    quais migrações disparam; só podem mudar com uma nova distribuição
    do pacote.
    """
