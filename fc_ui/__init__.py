"""Terminal preview for the coach data table."""
