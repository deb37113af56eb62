"""Template registry: discovers ``<dir>/<name>/template.yaml`` descriptors."""

from __future__ import annotations

import logging
from pathlib import Path

from src.contracts.template import DESCRIPTOR_NAME, Template

log = logging.getLogger(__name__)


class TemplateRegistry:
    """Templates found in one directory.

    Nothing is read until :meth:`load`; :meth:`reload` rescans the
    directory and replaces the previous set.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)
        self._by_display_name: dict[str, Template] | None = None

    def load(self) -> TemplateRegistry:
        templates: dict[str, Template] = {}
        if not self.directory.is_dir():
            log.warning("Template directory %s does not exist", self.directory)
        else:
            for sub in sorted(self.directory.iterdir()):
                descriptor = sub / DESCRIPTOR_NAME
                if not sub.is_dir() or not descriptor.is_file():
                    continue
                try:
                    template = Template.from_yaml(descriptor)
                except (OSError, ValueError) as exc:
                    log.error("Failed to load template definition %s: %s", descriptor, exc)
                    continue
                if template.display_name in templates:
                    log.warning(
                        "Duplicate template name '%s' in %s — keeping %s",
                        template.display_name,
                        sub,
                        templates[template.display_name].config_name,
                    )
                    continue
                templates[template.display_name] = template
        self._by_display_name = templates
        log.info("Loaded %d templates from %s", len(templates), self.directory)
        return self

    def reload(self) -> TemplateRegistry:
        return self.load()

    def _templates(self) -> dict[str, Template]:
        if self._by_display_name is None:
            raise RuntimeError("TemplateRegistry.load() has not been called")
        return self._by_display_name

    def templates(self) -> list[Template]:
        return list(self._templates().values())

    def template_names(self) -> list[str]:
        return list(self._templates().keys())

    def by_display_name(self, name: str) -> Template | None:
        return self._templates().get(name)

    def by_config_name(self, name: str) -> Template | None:
        for template in self._templates().values():
            if template.config_name == name:
                return template
        return None

    def find(self, name: str) -> Template | None:
        """Look *name* up as a config name first, then as a display name."""
        return self.by_config_name(name) or self.by_display_name(name)
