from __future__ import annotations

import dataclasses
import json
from pathlib import Path

import pytest

from govspec.core.contract import (
    DEFAULT_CONTRACT,
    ContractConfigurationError,
    ContractRegistry,
    load_contract_lock,
)


def test_default_contract_lock_values() -> None:
    c = DEFAULT_CONTRACT
    assert c.contract_version == "GOV-SPEC-V2.0"
    assert c.engine_version == "ENGINE-V2.0.0"
    assert c.supported_schema_versions == ("1.0", "1.1", "1.2", "2.0")
    assert c.default_schema_version == "1.0"
    assert len(c.allowed_actions) == 11
    assert c.required_target_actions == {"show_information", "navigate", "external_link"}
    assert c.required_target_actions <= c.allowed_actions
    assert c.build_mode == "release"
    assert c.is_release
    assert (c.hash_algorithm, c.hash_encoding, c.hash_truncate) == ("sha256", "hex", 16)


def test_contract_is_frozen() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_CONTRACT.build_mode = "development"  # type: ignore[misc]


def test_required_target_outside_taxonomy_is_rejected() -> None:
    with pytest.raises(ContractConfigurationError, match="warp"):
        ContractRegistry(required_target_actions={"navigate", "warp"})


@pytest.mark.parametrize(
    "overrides",
    [
        {"default_schema_version": "3.0"},
        {"supported_schema_versions": ()},
        {"allowed_actions": frozenset(), "required_target_actions": frozenset()},
        {"build_mode": "staging"},
        {"hash_algorithm": "not-a-digest"},
        {"hash_encoding": "base64"},
        {"hash_truncate": 4},
        {"hash_truncate": 65},
        {"contract_version": ""},
    ],
)
def test_inconsistent_contract_fails_at_construction(overrides) -> None:
    with pytest.raises(ContractConfigurationError):
        ContractRegistry(**overrides)


def test_full_length_digest_is_allowed() -> None:
    assert ContractRegistry(hash_truncate=64).hash_truncate == 64


def test_with_build_mode_returns_new_contract() -> None:
    dev = DEFAULT_CONTRACT.with_build_mode("development")
    assert not dev.is_release
    assert DEFAULT_CONTRACT.is_release
    with pytest.raises(ContractConfigurationError):
        DEFAULT_CONTRACT.with_build_mode("bogus")


def test_contract_helpers() -> None:
    assert DEFAULT_CONTRACT.is_allowed_action("sms")
    assert not DEFAULT_CONTRACT.is_allowed_action("modal_open")
    assert DEFAULT_CONTRACT.requires_target("navigate")
    assert not DEFAULT_CONTRACT.requires_target("toggle")
    assert DEFAULT_CONTRACT.is_supported_schema("1.2")
    assert not DEFAULT_CONTRACT.is_supported_schema("0.9")


def test_to_dict_is_sorted_and_json_ready() -> None:
    d = DEFAULT_CONTRACT.to_dict()
    assert d["allowed_actions"] == sorted(d["allowed_actions"])
    assert json.loads(json.dumps(d)) == d


def test_load_contract_lock_overrides_defaults(tmp_path: Path) -> None:
    p = tmp_path / "lock.json"
    p.write_text(json.dumps({"build_mode": "development", "hash_truncate": 12}), encoding="utf-8")

    c = load_contract_lock(str(p))

    assert c.build_mode == "development"
    assert c.hash_truncate == 12
    assert c.contract_version == DEFAULT_CONTRACT.contract_version


def test_load_contract_lock_list_fields(tmp_path: Path) -> None:
    p = tmp_path / "lock.json"
    p.write_text(
        json.dumps(
            {
                "allowed_actions": ["navigate", "beam"],
                "required_target_actions": ["navigate"],
                "supported_schema_versions": ["1.0"],
            }
        ),
        encoding="utf-8",
    )

    c = load_contract_lock(str(p))

    assert c.allowed_actions == {"navigate", "beam"}
    assert c.supported_schema_versions == ("1.0",)


@pytest.mark.parametrize(
    "text",
    [
        "{not json",
        "[1, 2]",
        json.dumps({"allowed_action": ["navigate"]}),
        json.dumps({"allowed_actions": "navigate"}),
        json.dumps({"allowed_actions": ["toggle"], "required_target_actions": ["navigate"]}),
    ],
)
def test_load_contract_lock_rejects_bad_locks(tmp_path: Path, text: str) -> None:
    p = tmp_path / "lock.json"
    p.write_text(text, encoding="utf-8")
    with pytest.raises(ContractConfigurationError):
        load_contract_lock(str(p))
