"""
Excel report generation for seeding plans.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd
from openpyxl.styles import Alignment, Font, PatternFill

from aquaplan_app.models import MultiCyclePlan, SeedingPlan
from aquaplan_app.reports.tables import multi_cycle_to_dataframe, plan_to_dataframes, weekly_grid

# Fill colours per cell state on the weekly grid sheet
_STATE_FILLS = {
    "Nursery": "FFF2CC",
    "Growout": "DDEBF7",
}


def _style_header(ws) -> None:
    header_fill = PatternFill(fill_type="solid", fgColor="4472C4")
    header_font = Font(bold=True, color="FFFFFF")
    header_alignment = Alignment(horizontal="center", vertical="center")
    for cell in ws[1]:
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = header_alignment


def _style_body_table(ws, *, start_row: int = 2, first_col_bold: bool = True, stripe: bool = True) -> None:
    """Zebra striping and a bold, left-aligned first column."""
    stripe_fill = PatternFill(fill_type="solid", fgColor="F5F5F5")
    for row in ws.iter_rows(min_row=start_row, max_row=ws.max_row, min_col=1, max_col=ws.max_column):
        if first_col_bold and row and row[0].value not in (None, ""):
            row[0].font = Font(bold=True)
        for cell in row:
            if stripe and cell.row % 2 == 0:
                if cell.fill is None or cell.fill.fill_type is None:
                    cell.fill = stripe_fill
            if cell.column == 1:
                cell.alignment = Alignment(horizontal="left", vertical="center", wrap_text=True)


def _write_sheet(writer: pd.ExcelWriter, df: pd.DataFrame, name: str, first_width: int = 28) -> None:
    df.to_excel(writer, sheet_name=name, index=False)
    ws = writer.sheets[name]
    ws.column_dimensions["A"].width = first_width
    _style_header(ws)
    _style_body_table(ws, start_row=2, first_col_bold=True, stripe=True)
    ws.freeze_panes = "A2"


def _write_weekly_grid(writer: pd.ExcelWriter, cells, name: str = "Weekly Grid") -> None:
    grid = weekly_grid(cells)
    if grid.empty:
        return
    grid.to_excel(writer, sheet_name=name, index=True, index_label="Tank")
    ws = writer.sheets[name]
    _style_header(ws)
    for row in ws.iter_rows(min_row=2, max_row=ws.max_row, min_col=2, max_col=ws.max_column):
        for cell in row:
            colour = _STATE_FILLS.get(str(cell.value or ""))
            if colour:
                cell.fill = PatternFill(fill_type="solid", fgColor=colour)
            cell.alignment = Alignment(horizontal="center", vertical="center")
    ws.freeze_panes = "B2"


def export_plan_to_excel(plan: SeedingPlan, filepath: str | Path) -> Path:
    """Write a single-cycle plan to a styled workbook and return its path."""
    path = Path(filepath)
    frames = plan_to_dataframes(plan)
    with pd.ExcelWriter(str(path), engine="openpyxl") as writer:
        _write_sheet(writer, frames["summary"], "Plan Summary", first_width=32)
        if not frames["nursery"].empty:
            _write_sheet(writer, frames["nursery"], "Nursery", first_width=18)
        if not frames["growout"].empty:
            _write_sheet(writer, frames["growout"], "Growout", first_width=18)
        _write_sheet(writer, frames["assignments"], "Assignments", first_width=10)
        _write_weekly_grid(writer, plan.assignment_table)
    return path


def export_multi_cycle_to_excel(plan: MultiCyclePlan, filepath: str | Path) -> Path:
    """Write a multi-cycle plan (cycles, warnings, combined grid) to a styled workbook."""
    path = Path(filepath)
    s = plan.summary
    summary = pd.DataFrame(
        [
            ("Cycles placed", s.total_cycles),
            ("Cycles requested", s.requested_cycles),
            ("Total larvae", s.total_larvae),
            ("Total expected survivors", s.total_expected_survivors),
            ("Average interval (weeks)", round(s.average_interval, 2)),
            ("Utilization efficiency (%)", round(s.utilization_efficiency, 2)),
            ("Weeks covered", s.weeks_covered),
            ("Outcome", plan.outcome.value),
        ],
        columns=["Item", "Value"],
    )
    with pd.ExcelWriter(str(path), engine="openpyxl") as writer:
        _write_sheet(writer, summary, "Schedule Summary", first_width=32)
        _write_sheet(writer, multi_cycle_to_dataframe(plan), "Cycles", first_width=12)
        if plan.warnings:
            _write_sheet(writer, pd.DataFrame({"Warning": plan.warnings}), "Warnings", first_width=90)
        _write_weekly_grid(writer, plan.assignment_table)
    return path
