"""Diagnostics scripts (run via `leaptime diag <tool>`)."""
