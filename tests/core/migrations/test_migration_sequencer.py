# tests/core/migrations/test_migration_sequencer.py
"""
Testes do sequenciador de migrações.

Os testes asseguram que:
- todos os steps rodam em ordem, sem curto-circuito
- valores entre steps fluem explicitamente por `inputs`
- uma segunda passada sobre um documento migrado não altera nada
- erros recuperáveis de um step viram aviso e a passada continua
- violações fatais são propagadas

Limites explícitos:
    - O comportamento individual de cada step é coberto em
      test_migration_steps.py
"""

import copy
import logging

import pytest

from btfs_config.core.document import compute_document_hash
from btfs_config.core.errors import CorruptedBuiltinTableError, FatalInvariantViolation
from btfs_config.core.migrations import (
    MigrationRegistry,
    MigrationStep,
    migrate_config,
    run_migrations,
)
from btfs_config.core.migrations import steps
from btfs_config.core.settings import values


def test_custom_chain_threads_outcomes_explicitly():
    seen = {}

    def first(doc):
        doc["first"] = True
        return True

    def second(doc, *, upstream, fresh):
        seen["upstream"] = upstream
        seen["fresh"] = fresh
        return False

    reg = MigrationRegistry()
    reg.add(MigrationStep(1, "first", first))
    reg.add(MigrationStep(2, "second", second, inputs={"upstream": "first", "fresh": "just_initialized"}))

    report = run_migrations({}, just_initialized=True, registry=reg)

    assert seen == {"upstream": True, "fresh": True}
    assert report.outcomes == {"first": True, "second": False}
    assert report.changed


def test_no_short_circuit_after_change():
    calls = []

    def make(name, result):
        def apply(doc):
            calls.append(name)
            return result
        return apply

    reg = MigrationRegistry()
    reg.add(MigrationStep(1, "a", make("a", True)))
    reg.add(MigrationStep(2, "b", make("b", True)))
    reg.add(MigrationStep(3, "c", make("c", False)))

    run_migrations({}, registry=reg)
    assert calls == ["a", "b", "c"]


def test_empty_document_first_and_second_pass(empty_doc):
    doc = empty_doc
    report = run_migrations(doc)

    assert report.changed
    changed = {r.name for r in report.results if r.changed}
    assert {"services", "storage_settings", "host_contract_manager", "sync_hosts", "s3_compatible_api"} <= changed
    assert report.fingerprint_before != report.fingerprint_after
    assert report.fingerprint_after == compute_document_hash(doc)

    snapshot = copy.deepcopy(doc)
    second = run_migrations(doc)
    assert not second.changed
    assert doc == snapshot
    assert second.fingerprint_before == second.fingerprint_after


def test_migrated_production_document_is_stable(production_doc):
    snapshot = copy.deepcopy(production_doc)
    assert migrate_config(production_doc) is False
    assert production_doc == snapshot


def test_migrated_testnet_document_is_stable(testnet_doc):
    snapshot = copy.deepcopy(testnet_doc)
    assert migrate_config(testnet_doc) is False
    assert testnet_doc == snapshot


def test_host_flags_apply_storage_host_on_fresh_documents(production_doc):
    changed = migrate_config(production_doc, just_initialized=True, has_host_value=True)

    assert changed
    assert production_doc["Experimental"]["StorageHostEnabled"] is True
    assert production_doc["ChainInfo"] == {"ChainId": values.chain_id()}


def test_recoverable_step_error_becomes_warning(monkeypatch, production_doc, obsolete_mainnet_addr, caplog):
    def broken():
        raise CorruptedBuiltinTableError("table unreadable")

    monkeypatch.setattr(steps, "default_bootstrap_peers", broken)
    production_doc["Bootstrap"] = [obsolete_mainnet_addr]

    with caplog.at_level(logging.WARNING, logger="btfs_config.core.migrations.sequencer"):
        report = run_migrations(production_doc)

    assert report.outcomes["bootstrap_nodes"] is False
    assert len(report.warnings) == 1
    assert "table unreadable" in report.warnings[0]
    assert "bootstrap_nodes" in caplog.text
    # a passada seguiu até o fim
    assert len(report.results) == 18
    assert production_doc["Bootstrap"] == [obsolete_mainnet_addr]


def test_fatal_violation_propagates():
    def broken(doc):
        raise FatalInvariantViolation("bug")

    reg = MigrationRegistry()
    reg.add(MigrationStep(1, "broken", broken))
    with pytest.raises(FatalInvariantViolation):
        run_migrations({}, registry=reg)


def test_changed_steps_are_logged_at_debug(caplog, empty_doc):
    with caplog.at_level(logging.DEBUG, logger="btfs_config.core.migrations.sequencer"):
        run_migrations(empty_doc)
    assert "services" in caplog.text


@pytest.mark.parametrize("field", ["EscrowDomain", "ExchangeDomain", "FullnodeDomain", "TrongridDomain"])
def test_null_service_domains_do_not_break_the_pass(production_doc, field):
    production_doc["Services"][field] = None

    report = run_migrations(production_doc)

    assert report.warnings == []
    assert len(report.results) == 18
    assert isinstance(production_doc["Services"]["ExchangeDomain"], str)


def test_null_escrow_domain_backfills_from_production(production_doc):
    production_doc["Services"]["EscrowDomain"] = None
    production_doc["Services"]["ExchangeDomain"] = None

    assert migrate_config(production_doc) is True
    assert production_doc["Services"]["ExchangeDomain"] == values.services_config()["ExchangeDomain"]
