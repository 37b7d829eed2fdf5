# tests/core/document/test_document_environment.py
import pytest

from btfs_config.core.document import Environment, is_non_production


@pytest.mark.parametrize(
    "domain, expected",
    [
        ("https://escrow.btfs.io", Environment.PRODUCTION),
        ("https://escrow-dev.btfs.io", Environment.DEV),
        ("https://escrow-staging.btfs.io", Environment.TESTNET),
        ("", Environment.PRODUCTION),
    ],
)
def test_classify(domain, expected):
    assert Environment.classify(domain) is expected


def test_legacy_heuristic_matches_any_substring():
    assert is_non_production("https://escrow-dev.btfs.io")
    assert is_non_production("https://escrow-staging.btfs.io")
    # substring pura: "devnet" também conta
    assert is_non_production("https://devnet.example")
    assert not is_non_production("https://escrow.btfs.io")
    assert not is_non_production(None)  # type: ignore[arg-type]


def test_environment_values_match_settings_keys():
    assert [e.value for e in Environment] == ["production", "dev", "testnet"]
