# tests/conftest.py
"""
Fixtures compartilhados para testes do btfs-config.

Este módulo define fixtures reutilizáveis que fornecem:
- documentos de configuração mínimos e determinísticos
- endereços de bootstrap conhecidos (válidos e obsoletos)
- isolamento dos caches de settings e de peers padrão

Decisões arquiteturais:
    - Documentos são dicionários literais no shape JSON persistido
    - Nenhuma fixture acessa rede
    - Caches por processo são limpos antes e depois de cada teste

Invariantes:
    - Cada fixture devolve um objeto novo (testes podem mutá-lo)
    - Nenhuma fixture depende de variáveis de ambiente reais

Limites explícitos:
    - Não substituir testes de integração com um nó real
"""

import pytest

from btfs_config.core.addresses import peers
from btfs_config.core.settings import loader, values


MAINNET_ADDR = "/ip4/63.176.242.235/tcp/4001/p2p/16Uiu2HAmT9HSazxmnS4ucPY3Zpq2B5NT3wbiJi9ETurkVGGpxa57"
OBSOLETE_MAINNET_ADDR = "/ip4/34.213.5.20/tcp/4001/p2p/QmQVQBsM7uoJy8hATjTm51uSAkx2y3iGLhSwA6LWLa7iQJ"


@pytest.fixture(autouse=True)
def _isolated_caches(monkeypatch):
    """Remove o override por variável de ambiente e zera os caches do processo."""
    monkeypatch.delenv(loader.SETTINGS_ENV_VAR, raising=False)
    loader.get_settings.cache_clear()
    peers._builtin_peers.cache_clear()
    yield
    loader.get_settings.cache_clear()
    peers._builtin_peers.cache_clear()


@pytest.fixture
def mainnet_addr() -> str:
    return MAINNET_ADDR


@pytest.fixture
def obsolete_mainnet_addr() -> str:
    return OBSOLETE_MAINNET_ADDR


@pytest.fixture
def empty_doc() -> dict:
    return {}


@pytest.fixture
def production_doc() -> dict:
    """
    Documento já migrado de um nó de produção.

    Contém serviços completos, swarm key de produção e a lista de
    bootstrap padrão, de modo que a cadeia de migrações não tenha nada
    a fazer sobre ele além dos backfills de seções ausentes.
    """
    return {
        "Addresses": values.default_addresses(),
        "Bootstrap": list(values.bootstrap_addresses()),
        "Swarm": {"SwarmKey": values.swarm_key(), "EnableAutoRelay": False},
        "Services": values.services_config(),
        "Experimental": {"HostsSyncEnabled": False, "HostsSyncFlag": True},
        "UI": {"Host": {"ContractManager": values.contract_manager_defaults()}},
        "S3CompatibleAPI": values.s3_compatible_api_defaults(),
    }


@pytest.fixture
def testnet_doc(production_doc) -> dict:
    """Variante de `production_doc` para um nó de testnet."""
    from btfs_config.core.document.environment import Environment

    doc = production_doc
    doc["Swarm"]["SwarmKey"] = values.swarm_key(testnet=True)
    doc["Services"] = values.services_config(Environment.TESTNET)
    doc["Bootstrap"] = list(values.bootstrap_addresses(testnet=True))
    return doc
