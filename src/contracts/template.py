"""Template descriptor: layout, output format and bundled assets."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from src.shared.config_loader import load_yaml

DESCRIPTOR_NAME = "template.yaml"
RESOURCES_DIR_NAME = "resources"

# Template-engine modes. Independent of the output format: a PDF template
# is still parsed as HTML markup.
MODES = ("html", "xml", "text")

# Formats that are produced by converting rendered HTML.
CONVERTED_FORMATS = {"PDF"}


@dataclass(frozen=True, slots=True)
class Template:
    """One report template, loaded once and never modified afterwards."""

    config_name: str  # stable name, the template directory name
    display_name: str
    format: str  # HTML | PDF | XML | JSON | MD ...
    mode: str  # html | xml | text
    extension: str  # final file extension, without the dot
    report_template_file: Path
    resources_dir: Path

    @property
    def requires_conversion(self) -> bool:
        return self.format in CONVERTED_FORMATS

    @classmethod
    def from_yaml(cls, path: str | Path) -> Template:
        """Load a ``template.yaml`` descriptor.

        Keys: ``name`` (required), ``format``, ``mode``, ``extension`` and
        ``template`` (entry file, relative to the template directory).

        Raises:
            FileNotFoundError: If the descriptor does not exist.
            ValueError: On a missing name or an unknown mode.
        """
        descriptor = Path(path)
        data = load_yaml(descriptor)
        directory = descriptor.parent

        name = data.get("name")
        if not name:
            raise ValueError(f"{descriptor}: template has no 'name'")

        fmt = str(data.get("format", "HTML")).upper()
        mode = str(data.get("mode", "html")).lower()
        if mode not in MODES:
            raise ValueError(f"{descriptor}: unknown mode '{mode}'")
        extension = str(data.get("extension", fmt.lower())).lstrip(".")

        if fmt in CONVERTED_FORMATS or fmt == "HTML":
            default_entry = "report.html"
        else:
            default_entry = f"report.{extension}"
        entry = data.get("template", default_entry)

        return cls(
            config_name=directory.name,
            display_name=str(name),
            format=fmt,
            mode=mode,
            extension=extension,
            report_template_file=directory / entry,
            resources_dir=directory / RESOURCES_DIR_NAME,
        )
