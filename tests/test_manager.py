"""
Tests for the command-line interface.
"""

import json

import pytest

from jsx_i18n.config import ExtractConfig
from jsx_i18n.manager import build_parser, find_source_files, main

CARD = "function Card() {\n  return <p>Hello</p>;\n}\n"


@pytest.fixture
def project(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    src = tmp_path / "src"
    src.mkdir()
    (src / "Card.tsx").write_text(CARD, encoding="utf-8")
    return tmp_path


def _extract_args(*extra):
    return ["extract", "src", "--translation-file", "locales/en.json",
            "--import-name", "react-i18next", *extra]


class TestFindSourceFiles:

    def test_walks_directories(self, tmp_path):
        (tmp_path / "a.tsx").write_text("", encoding="utf-8")
        (tmp_path / "nested").mkdir()
        (tmp_path / "nested" / "b.jsx").write_text("", encoding="utf-8")
        (tmp_path / "styles.css").write_text("", encoding="utf-8")
        (tmp_path / "node_modules").mkdir()
        (tmp_path / "node_modules" / "lib.js").write_text("", encoding="utf-8")

        files = find_source_files([str(tmp_path)], ExtractConfig())

        assert files == [tmp_path / "a.tsx", tmp_path / "nested" / "b.jsx"]

    def test_explicit_file_kept(self, tmp_path):
        path = tmp_path / "component.txt"
        path.write_text("", encoding="utf-8")
        assert find_source_files([str(path)], ExtractConfig()) == [path]

    def test_missing_path_skipped(self, tmp_path):
        assert find_source_files([str(tmp_path / "absent")], ExtractConfig()) == []


class TestExtractCommand:

    def test_writes_catalog_and_sources(self, project):
        assert main(_extract_args()) == 0

        catalog = json.loads((project / "locales" / "en.json").read_text(encoding="utf-8"))
        assert catalog == {"card": {"hello": "Hello"}}
        source = (project / "src" / "Card.tsx").read_text(encoding="utf-8")
        assert "<p>{t('card.hello')}</p>" in source
        assert "import { useTranslation } from 'react-i18next';" in source

    def test_translation_root(self, project):
        assert main(_extract_args("--translation-root", "en")) == 0
        catalog = json.loads((project / "locales" / "en.json").read_text(encoding="utf-8"))
        assert catalog == {"en": {"card": {"hello": "Hello"}}}

    def test_dry_run_writes_nothing(self, project):
        assert main(_extract_args("--dry-run")) == 0
        assert not (project / "locales" / "en.json").exists()
        assert (project / "src" / "Card.tsx").read_text(encoding="utf-8") == CARD

    def test_print(self, project, capsys):
        assert main(_extract_args("--dry-run", "--print")) == 0
        assert "<p>{t('card.hello')}</p>" in capsys.readouterr().out

    def test_report(self, project):
        assert main(_extract_args("--report", "out/report.json")) == 0
        report = json.loads((project / "out" / "report.json").read_text(encoding="utf-8"))
        assert report["meta"]["changed_files"] == 1
        assert report["meta"]["entries"] == 1
        assert report["extractions"][0]["key"] == "hello"
        assert report["extractions"][0]["kind"] == "text"

    def test_second_run_changes_nothing(self, project):
        assert main(_extract_args()) == 0
        first = (project / "src" / "Card.tsx").read_text(encoding="utf-8")
        assert main(_extract_args()) == 0
        assert (project / "src" / "Card.tsx").read_text(encoding="utf-8") == first

    def test_undecodable_file_skipped(self, project):
        (project / "src" / "Broken.tsx").write_bytes(b"\xff\xfe\x00garbage")
        assert main(_extract_args()) == 0
        assert "{t('card.hello')}" in (project / "src" / "Card.tsx").read_text(encoding="utf-8")

    def test_missing_import_name(self, project):
        args = ["extract", "src", "--translation-file", "locales/en.json"]
        assert main(args) == 2
        assert (project / "src" / "Card.tsx").read_text(encoding="utf-8") == CARD

    def test_missing_translation_file(self, project):
        assert main(["extract", "src", "--import-name", "react-i18next"]) == 2

    def test_config_file(self, project):
        (project / ".jsx-i18n.yaml").write_text(
            "translation_file: locales/en.json\nimport_name: next-i18next\n", encoding="utf-8"
        )
        assert main(["extract", "src"]) == 0
        source = (project / "src" / "Card.tsx").read_text(encoding="utf-8")
        assert "from 'next-i18next';" in source

    def test_missing_explicit_config(self, project):
        assert main(_extract_args("--config", "absent.yaml")) == 2


class TestStatsCommand:

    def test_stats(self, project, capsys):
        (project / "en.json").write_text('{"a": {"x": "X", "y": "Y"}}', encoding="utf-8")
        assert main(["stats", "--translation-file", "en.json"]) == 0
        assert "строк: 2" in capsys.readouterr().out

    def test_stats_requires_file(self, project):
        assert main(["stats"]) == 2


class TestParser:

    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_extract_requires_paths(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["extract"])
