"""
Parsing — Source adapters producing Statement units

Usage:
    from hookshift.parsing import parse_statements, declared_names

    statements = parse_statements(source)
    tracked = declared_names(statements)
"""

from .javascript import parse_statements, declared_names, is_available

__all__ = ["parse_statements", "declared_names", "is_available"]
