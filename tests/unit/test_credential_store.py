"""
Unit tests for the credential store and config schema.
"""

import json

import pytest

from arsenal.core.credential_store import CredentialStore
from arsenal.core.errors import ConfigMissingError
from arsenal.core.models import ProjectConfig


class TestLoad:
    """Tests for CredentialStore.load()."""

    def test_load_valid_config(self, workdir, write_config):
        write_config()
        config = CredentialStore(workdir).load()

        assert config.project_id == "42"
        assert config.api_key == "ak_live_1234567890"
        assert config.user_id == 7
        assert config.github_repo is None

    def test_load_with_github_repo(self, workdir, write_config, sample_config):
        write_config({**sample_config, "githubRepo": "https://github.com/me/repo"})
        assert CredentialStore(workdir).load().github_repo == "https://github.com/me/repo"

    def test_missing_config(self, workdir):
        with pytest.raises(ConfigMissingError) as exc_info:
            CredentialStore(workdir).load()

        assert exc_info.value.reason is None
        assert "arsenal init" in str(exc_info.value)

    def test_invalid_json_is_total_failure(self, workdir, write_config):
        write_config(raw='{"projectId": "42", "apiKey": ')

        with pytest.raises(ConfigMissingError) as exc_info:
            CredentialStore(workdir).load()
        assert exc_info.value.reason

    @pytest.mark.parametrize("field", ["projectId", "apiKey", "userId"])
    def test_missing_required_field(self, workdir, write_config, sample_config, field):
        data = dict(sample_config)
        del data[field]
        write_config(data)

        with pytest.raises(ConfigMissingError) as exc_info:
            CredentialStore(workdir).load()
        assert field in exc_info.value.reason

    @pytest.mark.parametrize("field,value", [
        ("userId", "7"),
        ("userId", 7.5),
        ("projectId", 42),
        ("projectId", "abc"),
        ("apiKey", ""),
    ])
    def test_wrong_types_are_not_coerced(self, workdir, write_config, sample_config, field, value):
        write_config({**sample_config, field: value})

        with pytest.raises(ConfigMissingError):
            CredentialStore(workdir).load()

    def test_unknown_keys_ignored(self, workdir, write_config, sample_config):
        write_config({**sample_config, "createdBy": "someone"})
        assert CredentialStore(workdir).load().user_id == 7

    def test_non_utf8_config(self, workdir, write_config):
        path = write_config()
        path.write_bytes(b'{"projectId": "\xff"}')

        with pytest.raises(ConfigMissingError) as exc_info:
            CredentialStore(workdir).load()
        assert exc_info.value.reason


class TestSave:
    """Tests for CredentialStore.save() and update()."""

    def test_save_creates_config_dir(self, workdir):
        store = CredentialStore(workdir)
        config = ProjectConfig(project_id="42", api_key="ak_1", user_id=7)

        path = store.save(config)

        assert path == workdir / ".arsenal" / "config.json"
        assert json.loads(path.read_text()) == {
            "projectId": "42",
            "apiKey": "ak_1",
            "userId": 7,
        }

    def test_save_overwrites(self, workdir, write_config):
        write_config({"projectId": "1", "apiKey": "old", "userId": 1, "githubRepo": "x"})
        store = CredentialStore(workdir)

        store.save(ProjectConfig(project_id="2", api_key="new", user_id=2))

        assert json.loads(store.config_path.read_text()) == {
            "projectId": "2",
            "apiKey": "new",
            "userId": 2,
        }

    def test_save_then_load(self, workdir):
        store = CredentialStore(workdir)
        config = ProjectConfig(project_id="9", api_key="k", user_id=3, github_repo="https://x")

        store.save(config)

        assert store.load() == config

    def test_update_github_repo(self, workdir, write_config):
        write_config()
        store = CredentialStore(workdir)

        updated = store.update("githubRepo", "https://github.com/me/repo")

        assert updated.github_repo == "https://github.com/me/repo"
        on_disk = json.loads(store.config_path.read_text())
        assert on_disk["githubRepo"] == "https://github.com/me/repo"
        assert on_disk["userId"] == 7

    def test_update_rejects_invalid_value(self, workdir, write_config):
        path = write_config()
        before = path.read_text()

        with pytest.raises(ValueError):
            CredentialStore(workdir).update("userId", "seven")
        assert path.read_text() == before

    def test_update_without_config(self, workdir):
        with pytest.raises(ConfigMissingError):
            CredentialStore(workdir).update("githubRepo", "https://x")

    @pytest.mark.parametrize("field", ["githubrepo", "github_repo_url", "token"])
    def test_update_rejects_unknown_key(self, workdir, write_config, field):
        path = write_config()
        before = path.read_text()

        with pytest.raises(ValueError, match="Unknown config key"):
            CredentialStore(workdir).update(field, "https://github.com/me/repo")
        assert path.read_text() == before

    def test_with_field_does_not_write(self, workdir, write_config):
        path = write_config()
        before = path.read_text()

        config = CredentialStore(workdir).with_field("githubRepo", "https://github.com/me/repo")

        assert config.github_repo == "https://github.com/me/repo"
        assert path.read_text() == before


class TestProjectConfig:
    """Tests for ProjectConfig helpers."""

    def test_masked_api_key_hides_secret(self):
        config = ProjectConfig(project_id="1", api_key="ak_live_secret", user_id=1)
        assert config.masked_api_key == "ak_l…"
        assert "secret" not in config.masked_api_key

    def test_exists(self, workdir, write_config):
        store = CredentialStore(workdir)
        assert store.exists() is False
        write_config()
        assert store.exists() is True
