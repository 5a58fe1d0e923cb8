"""Tests for YAML and environment configuration."""

from pathlib import Path

import pytest

from deptree_rdf.config import Settings, get_settings, load_config, reset_settings


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in ("DEPRDF_OUTPUT__FORMAT", "DEPRDF_OUTPUT__OUTPUT_DIR", "DEPRDF_LOGGING__LEVEL"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path: Path) -> None:
        settings = load_config(tmp_path / "missing.yaml")

        assert settings.output.format == "xml"
        assert settings.output.output_dir == Path("./target/dependencies-rdf")
        assert settings.output.validate_output is True
        assert settings.source.tree_file is None
        assert settings.source.maven_executable == "mvn"
        assert settings.logging.level == "WARNING"

    def test_yaml_values(self, tmp_path: Path) -> None:
        path = tmp_path / "deptree-rdf.yaml"
        path.write_text(
            "output:\n"
            "  format: ntriples\n"
            "  output_dir: build/rdf\n"
            "  validate_output: false\n"
            "source:\n"
            "  tree_file: tree.json\n"
            "  maven_args: ['-Pci', '-o']\n"
            "logging:\n"
            "  level: DEBUG\n",
            encoding="utf-8",
        )

        settings = load_config(path)

        assert settings.output.format == "ntriples"
        assert settings.output.output_dir == Path("build/rdf")
        assert settings.output.validate_output is False
        assert settings.source.tree_file == Path("tree.json")
        assert settings.source.maven_args == ["-Pci", "-o"]
        assert settings.logging.level == "DEBUG"

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "deptree-rdf.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(path).output.format == "xml"

    def test_environment_override(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setenv("DEPRDF_OUTPUT__FORMAT", "n3")
        monkeypatch.setenv("DEPRDF_LOGGING__LEVEL", "INFO")

        settings = load_config(tmp_path / "missing.yaml")

        assert settings.output.format == "n3"
        assert settings.logging.level == "INFO"

    def test_unknown_format_is_kept_for_the_pipeline(self) -> None:
        assert Settings(output={"format": "turtle"}).output.format == "turtle"


class TestGlobalSettings:
    def test_get_settings_is_cached(self, tmp_path: Path) -> None:
        first = get_settings(tmp_path / "missing.yaml")
        assert get_settings() is first

    def test_reset_settings(self, tmp_path: Path) -> None:
        first = get_settings(tmp_path / "missing.yaml")
        reset_settings()
        assert get_settings(tmp_path / "missing.yaml") is not first
