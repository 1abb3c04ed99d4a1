"""
hookshift — Group generated setup statements into labeled topic blocks

Takes the flat statement list produced by an options-to-hooks rewrite and
reorders it so that statements about the same thing sit together, providers
come before their consumers, and every block carries a short label.

Usage:
    hookshift group setup_body.js
    hookshift group setup_body.js --tracked count,increment,resetCount
    hookshift group setup_body.js --annotate --json
"""

__version__ = "0.1.0"

from .core.statements import Statement
from .core.grouping import GroupingEngine, GroupingResult, group_statements, render
from .config import Config, ConfigManager, GroupingConfig, LabelConfig, get_config
from .errors import HookshiftError, ConfigError, ParseError

__all__ = [
    'Statement',
    'GroupingEngine', 'GroupingResult', 'group_statements', 'render',
    'Config', 'ConfigManager', 'GroupingConfig', 'LabelConfig', 'get_config',
    'HookshiftError', 'ConfigError', 'ParseError',
]
