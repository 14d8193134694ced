"""
Template store: ``<sql_directory>/<name>.sql`` read once and kept resident.

There is no invalidation; edits to a template file are not seen until a new
store is built.
"""

import logging
from pathlib import Path

from namedquery.core.errors import TemplateNotFound

_log = logging.getLogger(__name__)


class TemplateStore:
    def __init__(self, sql_directory: str | Path) -> None:
        self.sql_directory = Path(sql_directory)
        self._templates: dict[str, str] = {}

    def path_for(self, name: str) -> Path:
        return self.sql_directory / f"{name}.sql"

    def load(self, name: str) -> str:
        """Return the raw text of template *name*, reading the file on first use."""
        text = self._templates.get(name)
        if text is not None:
            return text
        path = self.path_for(name)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise TemplateNotFound(name, f"SQL template not found: {name} ({path})") from e
        except UnicodeDecodeError as e:
            raise TemplateNotFound(name, f"SQL template is not valid UTF-8: {name} ({path})") from e
        self._templates[name] = text
        _log.debug("loaded template %s from %s", name, path)
        return text

    def __contains__(self, name: str) -> bool:
        return name in self._templates
