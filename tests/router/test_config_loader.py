import textwrap
from pathlib import Path

import pytest

from autoebook.router.config_loader import (
    load_analysis_settings,
    load_model_configs,
    resolve_config_path,
)


@pytest.fixture
def config_file(tmp_path) -> Path:
    f = tmp_path / "config.yaml"
    f.write_text(textwrap.dedent("""\
        models:
          - name: claude
            priority: 2
            daily_token_limit: 500000
            api_key: ${TEST_CLAUDE_KEY}
          - name: gemini
            priority: 1
            daily_token_limit: 1000000
            api_key: literal-key
            model: gemini-1.5-pro
            temperature: 0.0
        analysis:
          inter_call_delay: 1.5
        """), encoding="utf-8")
    return f


class TestLoadModelConfigs:

    def test_ordena_por_prioridad(self, config_file):
        configs = load_model_configs(str(config_file))

        assert [c.name for c in configs] == ["gemini", "claude"]

    def test_expande_variables_de_entorno(self, config_file, monkeypatch):
        monkeypatch.setenv("TEST_CLAUDE_KEY", "sk-secreto")

        claude = load_model_configs(str(config_file))[1]

        assert claude.api_key == "sk-secreto"

    def test_variable_no_definida_queda_en_none(self, config_file, monkeypatch):
        monkeypatch.delenv("TEST_CLAUDE_KEY", raising=False)

        claude = load_model_configs(str(config_file))[1]

        assert claude.api_key is None

    def test_campos_opcionales(self, config_file):
        gemini, claude = load_model_configs(str(config_file))

        assert gemini.model == "gemini-1.5-pro"
        assert gemini.temperature == 0.0
        assert gemini.api_key == "literal-key"
        assert claude.model is None
        assert claude.timeout_seconds == 120

    def test_config_inexistente(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_model_configs(str(tmp_path / "no_existe.yaml"))

    def test_config_vacia_no_tiene_modelos(self, tmp_path):
        f = tmp_path / "vacia.yaml"
        f.write_text("", encoding="utf-8")

        assert load_model_configs(str(f)) == []


class TestLoadAnalysisSettings:

    def test_lee_la_seccion_analysis(self, config_file):
        assert load_analysis_settings(str(config_file)).inter_call_delay == 1.5

    def test_sin_seccion_usa_el_defecto(self, tmp_path):
        f = tmp_path / "config.yaml"
        f.write_text("models: []\n", encoding="utf-8")

        assert load_analysis_settings(str(f)).inter_call_delay == 0.5


class TestResolveConfigPath:

    def test_argumento_explicito_gana(self, monkeypatch):
        monkeypatch.setenv("AUTOEBOOK_CONFIG_PATH", "/desde/entorno.yaml")

        assert resolve_config_path("/explicito.yaml") == Path("/explicito.yaml")

    def test_variable_de_entorno(self, monkeypatch):
        monkeypatch.setenv("AUTOEBOOK_CONFIG_PATH", "/desde/entorno.yaml")

        assert resolve_config_path() == Path("/desde/entorno.yaml")

    def test_ruta_por_defecto(self, monkeypatch):
        monkeypatch.delenv("AUTOEBOOK_CONFIG_PATH", raising=False)

        assert resolve_config_path() == Path.home() / ".autoebook" / "config.yaml"
