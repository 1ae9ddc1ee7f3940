"""Tabular-source collaborator: turns CSV files or in-memory records into Rows."""
