"""Tests for template discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from src.reports.registry import TemplateRegistry
from tests.conftest import write_template

BUNDLED = Path(__file__).resolve().parent.parent / "templates"


class TestTemplateRegistry:
    @pytest.fixture
    def template_dir(self, tmp_path):
        base = tmp_path / "templates"
        write_template(base, "alpha", "a")
        write_template(base, "beta", "b", fmt="PDF")
        (base / "not-a-template").mkdir()
        (base / "stray.txt").write_text("x", encoding="utf-8")
        broken = base / "broken"
        broken.mkdir()
        (broken / "template.yaml").write_text("format: HTML\n", encoding="utf-8")
        return base

    def test_load(self, template_dir):
        registry = TemplateRegistry(template_dir).load()
        assert sorted(registry.template_names()) == ["alpha report", "beta report"]
        assert registry.by_display_name("beta report").format == "PDF"
        assert registry.by_config_name("alpha").display_name == "alpha report"
        assert registry.by_config_name("broken") is None

    def test_find_by_either_name(self, template_dir):
        registry = TemplateRegistry(template_dir).load()
        assert registry.find("beta").config_name == "beta"
        assert registry.find("beta report").config_name == "beta"
        assert registry.find("gamma") is None

    def test_access_before_load(self, template_dir):
        with pytest.raises(RuntimeError):
            TemplateRegistry(template_dir).templates()

    def test_reload_picks_up_new_templates(self, template_dir):
        registry = TemplateRegistry(template_dir).load()
        write_template(template_dir, "gamma", "g")
        assert registry.by_config_name("gamma") is None
        registry.reload()
        assert registry.by_config_name("gamma") is not None

    def test_missing_directory(self, tmp_path):
        assert TemplateRegistry(tmp_path / "nope").load().templates() == []

    def test_bundled_templates(self):
        registry = TemplateRegistry(BUNDLED).load()
        html = registry.by_config_name("traditional-html")
        pdf = registry.by_config_name("traditional-pdf")
        md = registry.by_config_name("traditional-md")
        assert html.format == "HTML" and html.resources_dir.is_dir()
        assert pdf.requires_conversion and pdf.mode == "html"
        assert md.mode == "text" and md.extension == "md"
        for template in (html, pdf, md):
            assert template.report_template_file.is_file()
