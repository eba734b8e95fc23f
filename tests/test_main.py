"""Tests for the server entry point."""
import pytest

from preqstation_mcp import main as main_module
from preqstation_mcp.models.task import Engine


@pytest.fixture
def served(monkeypatch):
    calls = []

    async def fake_serve(settings):
        calls.append(settings)

    monkeypatch.setattr(main_module, "serve", fake_serve)
    monkeypatch.setattr("preqstation_mcp.config.load_dotenv", lambda: None)
    for name in ("PREQSTATION_TOKEN", "PREQSTATION_API_URL", "PREQSTATION_ENGINE", "PREQSTATION_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return calls


class TestMain:
    """Tests for startup through main()."""

    @pytest.mark.parametrize(
        "environ",
        [
            {"PREQSTATION_TOKEN": "secret", "PREQSTATION_API_URL": "http://remote.example.com"},
            {"PREQSTATION_API_URL": "https://preq.example.com"},
            {"PREQSTATION_TOKEN": "secret", "PREQSTATION_API_URL": "https://preq.example.com", "PREQSTATION_ENGINE": "gpt"},
        ],
    )
    def test_config_error_exits_before_serving(self, monkeypatch, served, environ):
        for name, value in environ.items():
            monkeypatch.setenv(name, value)

        with pytest.raises(SystemExit) as exc_info:
            main_module.main([])

        assert exc_info.value.code == 1
        assert served == []

    def test_valid_config_serves(self, monkeypatch, served):
        monkeypatch.setenv("PREQSTATION_TOKEN", "secret")
        monkeypatch.setenv("PREQSTATION_API_URL", "https://preq.example.com/")
        monkeypatch.setenv("PREQSTATION_ENGINE", "Gemini")

        main_module.main([])

        assert len(served) == 1
        assert served[0].api_url == "https://preq.example.com"
        assert served[0].default_engine == Engine.GEMINI
