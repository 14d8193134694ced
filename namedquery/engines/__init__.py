"""
Engines: SQL templates (store + substitution) and the execution dispatcher.
"""

from namedquery.engines.executor import QueryDispatcher
from namedquery.engines.sql import TemplateStore, render, unresolved_placeholders

__all__ = [
    "QueryDispatcher",
    "TemplateStore",
    "render",
    "unresolved_placeholders",
]
