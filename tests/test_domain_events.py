from datetime import date

from core.events.domain_events import domain_events
from core.events.signal import Signal


def test_domain_event_signal_connect_emit_disconnect():
    seen: list[str] = []

    def _handler(project_id: str) -> None:
        seen.append(project_id)

    domain_events.project_changed.connect(_handler)
    domain_events.project_changed.emit("p-1")
    domain_events.project_changed.disconnect(_handler)
    domain_events.project_changed.emit("p-2")

    assert seen == ["p-1"]


def test_signal_emit_prunes_dead_weakref_callbacks():
    signal: Signal[str] = Signal("test")
    seen: list[str] = []

    class _DeadProxyCallback:
        def __init__(self) -> None:
            self.calls = 0

        def __call__(self, _payload: str) -> None:
            self.calls += 1
            raise ReferenceError("weakly-referenced object no longer exists")

    dead = _DeadProxyCallback()

    def _ok(payload: str) -> None:
        seen.append(payload)

    signal.connect(dead)
    signal.connect(_ok)

    signal.emit("p-1")
    signal.emit("p-2")

    assert dead.calls == 1
    assert len(signal) == 1
    assert seen == ["p-1", "p-2"]


def test_signal_emit_keeps_other_errors_visible():
    signal: Signal[str] = Signal()

    def _boom(_payload: str) -> None:
        raise RuntimeError("boom")

    signal.connect(_boom)

    try:
        signal.emit("x")
        assert False, "Expected RuntimeError to propagate"
    except RuntimeError as exc:
        assert str(exc) == "boom"


def test_services_emit_change_events(services, scope):
    ps = services["project_service"]
    ts = services["team_service"]
    project_ids: list[str] = []
    progress_ids: list[str] = []
    team_scopes: list[str] = []
    allocation_scopes: list[str] = []

    handlers = [
        (domain_events.project_changed, project_ids.append),
        (domain_events.progress_changed, progress_ids.append),
        (domain_events.team_changed, team_scopes.append),
        (domain_events.allocations_changed, allocation_scopes.append),
    ]
    for signal, handler in handlers:
        signal.connect(handler)
    try:
        project = ps.create_project(scope.id, "Checkout", role_mandays={"fe": 5})
        ps.update_role_progress(project.id, "fe", 40)
        member = ts.add_member(scope.id, "Dana", "fe")
        ts.set_allocation(member.id, date(2024, 1, 8), date(2024, 1, 9), 0.5, project_id=project.id)
    finally:
        for signal, handler in handlers:
            signal.disconnect(handler)

    assert project_ids == [project.id]
    assert progress_ids == [project.id]
    assert team_scopes == [scope.id]
    assert allocation_scopes == [scope.id]
