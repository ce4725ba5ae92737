"""Presenters turning snapshots into table models."""

from fc_ui.presenters.data_table import build_data_table_model, selection_summary

__all__ = ["build_data_table_model", "selection_summary"]
