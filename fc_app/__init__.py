"""Application layer for the coach data table."""
