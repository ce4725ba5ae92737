"""ViewModels exposing Qt signals for views."""

from fc_gui.viewmodels.data_table_vm import GUIDataTableViewModel

__all__ = [
    "GUIDataTableViewModel",
]
