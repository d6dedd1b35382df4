"""Exporters for parsed dependency reports."""
