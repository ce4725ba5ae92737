"""Qt bindings for the coach data table."""
