import json

import pytest
import yaml
from pydantic import ValidationError

from beanlint.lint_engine.catalog import build_catalog, dump_catalog
from beanlint.lint_engine.config import (
    ClientLintConfig,
    LintConfigBase,
    MissingDocumentLintConfig,
    load_client_config,
)
from beanlint.lint_engine.models import Severity


def test_defaults_when_lint_not_configured():
    cfg = ClientLintConfig().get_lint_config("DOUBLE-ENTRY", LintConfigBase)
    assert cfg.enabled is True
    assert cfg.severity is None
    assert cfg.span_tolerance == 10
    assert cfg.lines_context == 1


def test_empty_lint_entry_gives_defaults():
    cfg = ClientLintConfig(lints={"DOUBLE-ENTRY": {}}).get_lint_config("DOUBLE-ENTRY", LintConfigBase)
    assert cfg == LintConfigBase()


def test_typed_lint_config():
    client = ClientLintConfig(lints={"MISSING-DOCUMENT": {"document_root": "/srv/receipts", "severity": "HIGH"}})
    cfg = client.get_lint_config("MISSING-DOCUMENT", MissingDocumentLintConfig)
    assert cfg.document_root == "/srv/receipts"
    assert cfg.severity == Severity.HIGH


def test_negative_tolerance_is_rejected():
    client = ClientLintConfig(lints={"DOUBLE-ENTRY": {"span_tolerance": -1}})
    with pytest.raises(ValidationError):
        client.get_lint_config("DOUBLE-ENTRY", LintConfigBase)


def test_load_client_config_from_yaml(tmp_path):
    path = tmp_path / "beanlint.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "appendix_extractor": "statement-path",
                "lints": {"UNBALANCED-ENTRY": {"enabled": False}},
            }
        ),
        encoding="utf-8",
    )
    client = load_client_config(path)
    assert client.get_lint_config("UNBALANCED-ENTRY", LintConfigBase).enabled is False


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "beanlint.yaml"
    path.write_text("", encoding="utf-8")
    assert load_client_config(path) == ClientLintConfig()


def test_non_mapping_yaml_is_rejected(tmp_path):
    path = tmp_path / "beanlint.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_client_config(path)


def test_catalog_lists_every_lint_sorted():
    catalog = build_catalog()
    ids = [entry.lint_id for entry in catalog]
    assert ids == sorted(ids)
    assert len(ids) == 7

    missing_document = next(e for e in catalog if e.lint_id == "MISSING-DOCUMENT")
    assert missing_document.config_model == "MissingDocumentLintConfig"
    assert "document_root" in missing_document.config_schema["properties"]
    assert missing_document.default_severity == "MEDIUM"


def test_catalog_dumps_as_json_and_yaml():
    as_json = json.loads(dump_catalog("json"))
    as_yaml = yaml.safe_load(dump_catalog("yaml"))
    assert [e["lint_id"] for e in as_json] == [e["lint_id"] for e in as_yaml]
