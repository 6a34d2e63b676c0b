"""Command-line interface for FinRisk."""
