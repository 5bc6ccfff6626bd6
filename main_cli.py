# main_cli.py
"""Command line entry point: delivery overview, priority queue and exports for a scope."""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from core.exceptions import DomainError, NotFoundError
from core.models import Scope, StartDatePolicy
from core.reporting.api import generate_burndown_png, generate_scope_excel_report
from infra.db.base import database_url, make_session_factory
from infra.logging_config import setup_logging
from infra.migrate import run_migrations
from infra.operational_support import bind_trace_id, get_operational_support
from infra.path import default_export_dir
from infra.services import ServiceGraph, build_service_graph

logger = logging.getLogger(__name__)


def _resolve_scope(services: ServiceGraph, ref: str) -> Scope:
    scopes = services.scope_service.list_scopes()
    for scope in scopes:
        if scope.id == ref:
            return scope
    matches = [s for s in scopes if s.name.lower() == ref.strip().lower()]
    if len(matches) == 1:
        return matches[0]
    raise NotFoundError(f"Scope '{ref}' not found.", code="SCOPE_NOT_FOUND")


def _fmt_diff(diff: Optional[int]) -> str:
    if diff is None:
        return "-"
    return f"{diff:+d}"


def cmd_overview(services: ServiceGraph, args: argparse.Namespace) -> int:
    scope = _resolve_scope(services, args.scope)
    deliveries = services.delivery_service.scope_overview(
        scope.id, today=args.today, start_policy=args.policy
    )
    slip = services.delivery_service.average_slip(
        scope.id, today=args.today, start_policy=args.policy
    )

    print(f"Scope: {scope.name}")
    print(f"{'Project':<30} {'Start':<10} {'Days':>5} {'Delivery':<10} {'Target':<10} {'Diff':>5}")
    for d in deliveries:
        p = d.projection
        target = p.target_delivery_date.isoformat() if p.target_delivery_date else "-"
        print(
            f"{d.project_name[:30]:<30} {p.start_date.isoformat():<10} {p.total_workdays:>5} "
            f"{p.calculated_delivery_date.isoformat():<10} {target:<10} {_fmt_diff(p.diff_workdays):>5}"
        )
    print(
        f"Average slip: {slip.average_slip:+d} workdays "
        f"({slip.delayed_projects} delayed of {slip.total_projects})"
    )
    return 0


def cmd_queue(services: ServiceGraph, args: argparse.Namespace) -> int:
    scope = _resolve_scope(services, args.scope)
    windows = services.delivery_service.priority_schedule(scope.id, today=args.today)
    print(f"Priority queue: {scope.name}")
    for index, w in enumerate(windows, start=1):
        waits = f" (after {w.blocking_project_name})" if w.blocking_project_name else ""
        print(
            f"{index:>2}. {w.project_name:<30} {w.status.value:<12} "
            f"{w.start_date.isoformat()} -> {w.end_date.isoformat()}{waits}"
        )
    return 0


def cmd_export(services: ServiceGraph, args: argparse.Namespace) -> int:
    support = get_operational_support()
    if args.kind == "xlsx":
        scope = _resolve_scope(services, args.ref)
        output = args.output or default_export_dir() / f"{scope.name}_delivery.xlsx"
        with support.track("export.xlsx", scope_id=scope.id):
            path = generate_scope_excel_report(
                services.delivery_service, services.scope_service, scope.id, output, today=args.today
            )
    else:
        output = args.output or default_export_dir() / f"burndown_{args.ref}.png"
        with support.track("export.png", project_id=args.ref):
            path = generate_burndown_png(
                services.dashboard_service, services.scope_service, args.ref, output, today=args.today
            )
    print(f"Written {path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scope-burndown", description=__doc__)
    parser.add_argument("--db", type=Path, default=None, help="SQLite database file")
    parser.add_argument("--today", type=date.fromisoformat, default=None, help="Reference date (YYYY-MM-DD)")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    p_overview = sub.add_parser("overview", help="Projected delivery of every open project")
    p_overview.add_argument("scope", help="Scope id or name")
    p_overview.add_argument(
        "--policy",
        type=StartDatePolicy,
        choices=list(StartDatePolicy),
        default=StartDatePolicy.PROJECT_START,
    )
    p_overview.set_defaults(handler=cmd_overview)

    p_queue = sub.add_parser("queue", help="Projects laid end to end in priority order")
    p_queue.add_argument("scope", help="Scope id or name")
    p_queue.set_defaults(handler=cmd_queue)

    p_export = sub.add_parser("export", help="Write a scope workbook or a project burndown chart")
    p_export.add_argument("kind", choices=["xlsx", "png"])
    p_export.add_argument("ref", help="Scope id/name for xlsx, project id for png")
    p_export.add_argument("-o", "--output", type=Path, default=None)
    p_export.set_defaults(handler=cmd_export)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    db_url = database_url(args.db)
    run_migrations(db_url)
    session = make_session_factory(db_url)()
    try:
        with bind_trace_id() as trace_id:
            logger.info("Running %s (trace %s)", args.command, trace_id)
            return args.handler(build_service_graph(session), args)
    except DomainError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    finally:
        session.close()


if __name__ == "__main__":
    sys.exit(main())
