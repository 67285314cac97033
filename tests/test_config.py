"""Tests for settings loading."""

from gitcord.config import Settings, load_settings


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.port == 3000
        assert settings.bind == "0.0.0.0"
        assert settings.webhook_path == "/webhook/github"
        assert settings.github_api_url == "https://api.github.com"
        assert not settings.notifications_enabled
        assert settings.guild_id is None
        assert settings.application_id is None

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_WEBHOOK_SECRET", "s3cret")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("DISCORD_GUILD_ID", "123456789")
        monkeypatch.setenv("DISCORD_CLIENT_ID", "42")
        monkeypatch.setenv("DISCORD_WEBHOOK_URL", "https://discord.com/api/webhooks/1/x")

        settings = Settings()
        assert settings.github_webhook_secret == "s3cret"
        assert settings.port == 8080
        assert settings.guild_id == 123456789
        assert settings.application_id == 42
        assert settings.notifications_enabled

    def test_webhook_path_gets_leading_slash(self):
        assert Settings(webhook_path="hooks/github").webhook_path == "/hooks/github"

    def test_env_overrides_constructor_values(self, monkeypatch):
        monkeypatch.setenv("PORT", "9000")
        assert Settings(port=4000).port == 9000

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("GITHUB_TOKEN=from-dotenv\n")
        assert Settings().github_token == "from-dotenv"


class TestLoadSettings:
    def test_without_yaml(self):
        assert load_settings().port == 3000

    def test_explicit_yaml(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("port: 4000\nwebhook_path: /gh\n")
        settings = load_settings(path)
        assert settings.port == 4000
        assert settings.webhook_path == "/gh"

    def test_yaml_from_env_var(self, tmp_path, monkeypatch):
        path = tmp_path / "via-env.yaml"
        path.write_text("bind: 127.0.0.1\n")
        monkeypatch.setenv("GITCORD_CONFIG", str(path))
        assert load_settings().bind == "127.0.0.1"

    def test_default_config_dir(self, tmp_path):
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("log_level: DEBUG\n")
        assert load_settings().log_level == "DEBUG"

    def test_env_beats_yaml(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("port: 4000\n")
        monkeypatch.setenv("PORT", "5000")
        assert load_settings(path).port == 5000

    def test_missing_file_is_ignored(self, tmp_path):
        assert load_settings(tmp_path / "nope.yaml").port == 3000

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_settings(path).port == 3000
