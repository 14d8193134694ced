"""
SQL templates: file-backed template store and parameter substitution.
"""

from namedquery.engines.sql.substitution import render, unresolved_placeholders
from namedquery.engines.sql.template_store import TemplateStore

__all__ = [
    "TemplateStore",
    "render",
    "unresolved_placeholders",
]
