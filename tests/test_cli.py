from datetime import date

import pytest

import main_cli
from infra.db.base import database_url, make_session_factory
from infra.migrate import run_migrations
from infra.operational_support import OperationalSupport
from infra.services import build_service_graph


@pytest.fixture
def seeded_db(tmp_path, monkeypatch):
    monkeypatch.setenv("SCOPE_BURNDOWN_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setattr(main_cli, "setup_logging", lambda **_kw: None)
    support = OperationalSupport(events_path=tmp_path / "events.jsonl")
    monkeypatch.setattr(main_cli, "get_operational_support", lambda: support)

    db_path = tmp_path / "scope_burndown.db"
    db_url = database_url(db_path)
    run_migrations(db_url)
    session = make_session_factory(db_url)()
    try:
        services = build_service_graph(session)
        scope = services.scope_service.create_scope("Delivery Team")
        project = services.project_service.create_project(
            scope.id,
            "Checkout",
            delivery_date=date(2024, 1, 31),
            role_mandays={"fe": 10, "be": 6, "qa": 4},
        )
        services.project_service.set_role_dependencies(project.id, [("fe", "qa"), ("be", "qa")])
    finally:
        session.close()
    return db_path, project.id, support


def test_overview_prints_projection(seeded_db, capsys):
    db_path, _project_id, _support = seeded_db

    code = main_cli.main(
        ["--db", str(db_path), "--today", "2024-01-08", "overview", "delivery team", "--policy", "TODAY"]
    )

    out = capsys.readouterr().out
    assert code == 0
    assert "Checkout" in out
    assert "2024-01-26" in out
    assert "+3" in out
    assert "Average slip: +3 workdays (0 delayed of 1)" in out


def test_overview_average_slip_follows_start_policy(seeded_db, capsys):
    db_path, project_id, _support = seeded_db
    session = make_session_factory(database_url(db_path))()
    try:
        build_service_graph(session).project_service.update_project(
            project_id, start_date=date(2024, 1, 15)
        )
    finally:
        session.close()

    code = main_cli.main(["--db", str(db_path), "--today", "2024-01-08", "overview", "Delivery Team"])

    out = capsys.readouterr().out
    assert code == 0
    assert "2024-02-02" in out
    assert "Average slip: -2 workdays (1 delayed of 1)" in out


def test_queue_prints_windows(seeded_db, capsys):
    db_path, _project_id, _support = seeded_db

    assert main_cli.main(["--db", str(db_path), "--today", "2024-01-08", "queue", "Delivery Team"]) == 0
    assert "2024-01-08 -> 2024-01-26" in capsys.readouterr().out


def test_export_xlsx_records_support_event(seeded_db, tmp_path):
    db_path, _project_id, support = seeded_db
    out = tmp_path / "out" / "scope.xlsx"

    code = main_cli.main(
        ["--db", str(db_path), "--today", "2024-01-08", "export", "xlsx", "Delivery Team", "-o", str(out)]
    )

    assert code == 0
    assert out.exists()
    assert [e["event_type"] for e in support.read_events()] == ["export.xlsx.ok"]


def test_unknown_scope_returns_error_code(seeded_db, capsys):
    db_path, _project_id, _support = seeded_db

    assert main_cli.main(["--db", str(db_path), "overview", "Nope"]) == 2
    assert "Scope 'Nope' not found." in capsys.readouterr().err
