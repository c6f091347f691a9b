"""
Reporting utilities (text/Excel/tables) for aquaplan.
"""

from aquaplan_app.reports.simple_text_report import (
    build_multi_cycle_summary_text,
    build_plan_summary_text,
)
from aquaplan_app.reports.tables import (
    assignment_table_to_dataframe,
    multi_cycle_to_dataframe,
    plan_to_dataframes,
    weekly_grid,
)
from aquaplan_app.reports.excel_report import export_multi_cycle_to_excel, export_plan_to_excel

__all__ = [
    "build_plan_summary_text",
    "build_multi_cycle_summary_text",
    "assignment_table_to_dataframe",
    "multi_cycle_to_dataframe",
    "plan_to_dataframes",
    "weekly_grid",
    "export_plan_to_excel",
    "export_multi_cycle_to_excel",
]
