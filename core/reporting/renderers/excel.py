from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from core.reporting.contexts import ScopeReportContext


class ScopeExcelRenderer:
    def render(self, ctx: ScopeReportContext, output_path: Path) -> Path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb = Workbook()

        header_font = Font(bold=True)
        title_font = Font(bold=True, size=14)
        center = Alignment(horizontal="center")
        thin_border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin"),
        )
        header_fill = PatternFill("solid", fgColor="DDDDDD")
        late_fill = PatternFill("solid", fgColor="FFCCCC")

        def header_row(sheet, headers, row=1):
            for col_index, h in enumerate(headers, start=1):
                cell = sheet.cell(row=row, column=col_index, value=h)
                cell.font = header_font
                cell.alignment = center
                cell.fill = header_fill
                cell.border = thin_border

        def iso(value):
            return value.isoformat() if value else ""

        # ---------------- Overview ----------------
        ws = wb.active
        ws.title = "Overview"
        ws["A1"] = f"Delivery overview - {ctx.scope_name}"
        ws["A1"].font = title_font
        ws["A2"] = f"As of {ctx.as_of.isoformat()}"

        ws["A4"] = "Average slip (workdays)"
        ws["B4"] = ctx.slip.average_slip
        ws["A5"] = "Delayed projects"
        ws["B5"] = ctx.slip.delayed_projects
        for r in (4, 5):
            ws[f"A{r}"].font = header_font
            ws[f"A{r}"].border = thin_border
            ws[f"B{r}"].border = thin_border

        headers = ["Project", "Priority", "Status", "Start", "Workdays", "Calculated delivery", "Target", "Diff (workdays)"]
        header_row(ws, headers, row=7)
        for row_index, d in enumerate(ctx.deliveries, start=8):
            p = d.projection
            values = [
                d.project_name,
                d.priority,
                d.status.value,
                iso(p.start_date),
                p.total_workdays,
                iso(p.calculated_delivery_date),
                iso(p.target_delivery_date),
                "" if p.diff_workdays is None else p.diff_workdays,
            ]
            for col_index, v in enumerate(values, start=1):
                cell = ws.cell(row=row_index, column=col_index, value=v)
                cell.border = thin_border
                if p.is_behind_schedule:
                    cell.fill = late_fill

        ws.column_dimensions["A"].width = 30
        for col_letter in ("B", "C", "D", "E", "F", "G", "H"):
            ws.column_dimensions[col_letter].width = 18

        # ---------------- Roles ----------------
        ws_roles = wb.create_sheet("Roles")
        header_row(ws_roles, ["Project", "Role", "Remaining mandays", "FTE", "Default FTE", "Duration (days)", "Start", "Finish"])
        r = 2
        for d in ctx.deliveries:
            for row in d.projection.role_breakdown:
                values = [
                    d.project_name,
                    row.role.upper(),
                    round(row.remaining_mandays, 2),
                    round(row.effective_fte, 2),
                    "Yes" if row.used_default_fte else "No",
                    round(row.duration_days, 2),
                    iso(row.start_date),
                    iso(row.finish_date),
                ]
                for c, v in enumerate(values, 1):
                    ws_roles.cell(r, c, v).border = thin_border
                r += 1

        ws_roles.column_dimensions["A"].width = 30
        for col_letter in ("B", "C", "D", "E", "F", "G", "H"):
            ws_roles.column_dimensions[col_letter].width = 16

        # ---------------- Queue ----------------
        ws_queue = wb.create_sheet("Queue")
        header_row(ws_queue, ["#", "Project", "Status", "Start", "End", "Workdays", "Diff (workdays)", "Waits for"])
        for i, w in enumerate(ctx.queue, start=1):
            values = [
                i,
                w.project_name,
                w.status.value,
                iso(w.start_date),
                iso(w.end_date),
                w.total_workdays,
                "" if w.diff_workdays is None else w.diff_workdays,
                w.blocking_project_name or "",
            ]
            for c, v in enumerate(values, 1):
                ws_queue.cell(i + 1, c, v).border = thin_border

        ws_queue.column_dimensions["A"].width = 6
        ws_queue.column_dimensions["B"].width = 30
        for col_letter in ("C", "D", "E", "F", "G", "H"):
            ws_queue.column_dimensions[col_letter].width = 16

        wb.save(output_path)
        return output_path
