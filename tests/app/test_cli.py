from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from projclaim.adapters.sqlalchemy import shutdown
from projclaim.app import DEFAULT_MAX_PASSES
from projclaim.domain.errors import StoreError
from projclaim.domain.model import LegalEntity, NamespacedName
from projclaim.domain.reconciliation import ReconcileResult
from projclaim.ui import cli as cli_module
from tests.helpers.claims import make_claim

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

KEY = NamespacedName(namespace="customer", name="my-claim")
KEY_ARGS = ["--namespace", "customer", "--name", "my-claim"]


@pytest.fixture(autouse=True)
def default_backend(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PROJCLAIM_BACKEND", raising=False)
    monkeypatch.delenv("PROJECT_REFERENCE_NAMESPACE", raising=False)


def test_reconcile_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_reconcile(key: NamespacedName, **kwargs: object) -> ReconcileResult:
        captured["key"] = key
        captured.update(kwargs)
        return ReconcileResult(requeue=False)

    monkeypatch.setattr(cli_module, "reconcile_until_settled", fake_reconcile)

    cli_module.main(["reconcile", *KEY_ARGS])

    assert captured["key"] == KEY
    assert captured["max_passes"] == DEFAULT_MAX_PASSES


def test_reconcile_with_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_reconcile(key: NamespacedName, **kwargs: object) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(cli_module, "reconcile_until_settled", fake_reconcile)

    cli_module.main(["--backend", "kubernetes", "-v", "reconcile", *KEY_ARGS, "--max-passes", "3"])

    assert captured["max_passes"] == 3
    config = captured["config"]
    assert getattr(config, "backend", None) == "kubernetes"


@pytest.mark.parametrize(
    "argv",
    [
        ["reconcile", "--namespace", " ", "--name", "my-claim"],
        ["reconcile", *KEY_ARGS, "--max-passes", "0"],
        ["reconcile", "--namespace", "customer"],
        ["--backend", "etcd", "reconcile", *KEY_ARGS],
    ],
)
def test_invalid_arguments_exit_with_usage_error(
    monkeypatch: pytest.MonkeyPatch, argv: list[str]
) -> None:
    def fake_reconcile(*_: object, **__: object) -> None:
        raise AssertionError("should not run")

    monkeypatch.setattr(cli_module, "reconcile_until_settled", fake_reconcile)

    with pytest.raises(SystemExit) as exc:
        cli_module.main(argv)

    assert exc.value.code == 2


def test_store_failure_exits_with_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_reconcile(*_: object, **__: object) -> None:
        raise StoreError("api unavailable")

    monkeypatch.setattr(cli_module, "reconcile_until_settled", fake_reconcile)

    with pytest.raises(SystemExit) as exc:
        cli_module.main(["reconcile", *KEY_ARGS])

    assert exc.value.code == 1


def test_claim_create_passes_legal_entity(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_create(key: NamespacedName, legal_entity: LegalEntity, **kwargs: object) -> None:
        captured["key"] = key
        captured["legal_entity"] = legal_entity
        captured.update(kwargs)

    monkeypatch.setattr(cli_module, "create_project_claim", fake_create)

    cli_module.main(
        [
            "claim",
            "create",
            *KEY_ARGS,
            "--legal-entity-name",
            "Example Corp",
            "--legal-entity-id",
            "entity-1",
            "--region",
            "us-east1",
        ]
    )

    assert captured["key"] == KEY
    assert captured["legal_entity"] == LegalEntity(name="Example Corp", id="entity-1")
    assert captured["region"] == "us-east1"


def test_claim_show_prints_manifest(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(cli_module, "get_project_claim", lambda *_, **__: make_claim())

    cli_module.main(["claim", "show", *KEY_ARGS])

    manifest = json.loads(capsys.readouterr().out)
    assert manifest["kind"] == "ProjectClaim"
    assert manifest["metadata"]["name"] == "my-claim"


@pytest.fixture
def sqlite_file_database(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[Path]:
    database = tmp_path / "cli.db"
    monkeypatch.setenv("DATABASE_URI", f"sqlite+pysqlite:///{database}")
    shutdown()
    try:
        yield database
    finally:
        shutdown()


def test_cli_end_to_end_with_sqlite(
    sqlite_file_database: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    create = [
        "claim",
        "create",
        *KEY_ARGS,
        "--legal-entity-name",
        "Example Corp",
        "--legal-entity-id",
        "entity-1",
    ]
    cli_module.main(create)
    cli_module.main(["reconcile", *KEY_ARGS])
    capsys.readouterr()

    cli_module.main(["claim", "show", *KEY_ARGS])

    manifest = json.loads(capsys.readouterr().out)
    assert sqlite_file_database.exists()
    assert manifest["status"]["state"] == "PendingProject"
    assert manifest["spec"]["projectReferenceCRLink"] == {
        "name": "customer-my-claim",
        "namespace": "gcp-project-operator",
    }
    assert manifest["metadata"]["finalizers"] == ["finalizer.gcp.managed.openshift.io"]
