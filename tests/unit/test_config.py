"""Tests for configuration system."""

import pytest
from pydantic import ValidationError

from tasknotes_nlp.utils.config import Config, get_config, load_config, migrate_legacy_config, reset_config


def test_config_defaults():
    """Test that config has sensible defaults."""
    config = Config()

    assert config.nlp.language == "en"
    assert config.nlp.default_to_scheduled is True
    assert config.nlp.forward_date is True
    assert [t.property_id for t in config.triggers.triggers] == [
        "tags", "contexts", "projects", "status", "priority",
    ]
    assert config.statuses == []
    assert config.priorities == []
    assert config.user_fields == []
    assert config.logging.level == "WARNING"


def test_config_from_dict():
    """Test creating config from dictionary."""
    config_data = {
        "nlp": {"language": "DE", "default_to_scheduled": False},
        "priorities": [{"id": "p1", "value": "p1", "label": "P1"}],
    }

    config = Config(**config_data)

    assert config.nlp.language == "de"
    assert config.nlp.default_to_scheduled is False
    assert config.priorities[0].value == "p1"


def test_load_config_nonexistent_file(tmp_path):
    """Test loading config when file doesn't exist returns defaults."""
    config_path = tmp_path / "nonexistent.yaml"
    config = load_config(config_path)

    assert isinstance(config, Config)
    assert config.nlp.language == "en"


def test_load_config_from_yaml(tmp_path):
    """Test loading config from YAML file."""
    config_path = tmp_path / "config.yaml"
    yaml_content = """
nlp:
  language: fr
  forward_date: false

triggers:
  triggers:
    - property_id: tags
      trigger: "#"
    - property_id: effort
      trigger: "effort:"

statuses:
  - id: waiting
    value: waiting-on
    label: Waiting On

user_fields:
  - id: effort
    display_name: Effort
    key: effort
    type: number

logging:
  level: debug
"""
    config_path.write_text(yaml_content)

    config = load_config(config_path)

    assert config.nlp.language == "fr"
    assert config.nlp.forward_date is False
    assert config.triggers.triggers[1].trigger == "effort:"
    assert config.statuses[0].label == "Waiting On"
    assert config.user_fields[0].type == "number"
    assert config.logging.level == "DEBUG"


def test_load_empty_yaml(tmp_path):
    """Test an empty file gives defaults."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text("")

    assert load_config(config_path).nlp.language == "en"


def test_config_validation():
    """Test that config validation works."""
    with pytest.raises(ValidationError):
        Config(nlp={"language": "xx"})

    with pytest.raises(ValidationError):
        Config(logging={"level": "LOUD"})

    with pytest.raises(ValidationError):
        Config(triggers={"triggers": [{"property_id": "tags", "trigger": ""}]})


def test_user_field_validation():
    """Test user field ids must be unique and not built-in."""
    field = {"id": "effort", "display_name": "Effort", "key": "effort"}

    with pytest.raises(ValidationError):
        Config(user_fields=[field, field])

    with pytest.raises(ValidationError):
        Config(user_fields=[{**field, "id": "tags"}])


def test_env_override(monkeypatch):
    """Test nested settings can come from the environment."""
    monkeypatch.setenv("TASKNLP_NLP__LANGUAGE", "de")

    assert Config().nlp.language == "de"


class TestLegacyMigration:
    """Tests for migrating older settings layouts."""

    def test_status_suggestion_trigger(self):
        """Test the old status trigger setting becomes a status trigger."""
        migrated = migrate_legacy_config({"status_suggestion_trigger": "$"})
        config = Config(**migrated)

        status = [t for t in config.triggers.triggers if t.property_id == "status"]
        assert status[0].trigger == "$"
        assert "status_suggestion_trigger" not in migrated

    def test_status_trigger_added_when_missing(self):
        """Test a status trigger is appended to an explicit trigger list."""
        migrated = migrate_legacy_config({
            "status_suggestion_trigger": "$",
            "triggers": {"triggers": [{"property_id": "tags", "trigger": "#"}]},
        })

        assert migrated["triggers"]["triggers"][-1]["property_id"] == "status"
        assert migrated["triggers"]["triggers"][-1]["trigger"] == "$"

    def test_single_user_field(self):
        """Test the old single user field becomes a list."""
        migrated = migrate_legacy_config({
            "user_field": {"enabled": True, "id": "effort", "display_name": "Effort", "key": "effort"},
        })

        assert migrated["user_fields"] == [{"id": "effort", "display_name": "Effort", "key": "effort"}]

    def test_disabled_user_field_is_dropped(self):
        """Test a disabled legacy field is not migrated."""
        migrated = migrate_legacy_config({
            "user_field": {"enabled": False, "id": "effort", "display_name": "Effort", "key": "effort"},
        })

        assert "user_fields" not in migrated
        assert "user_field" not in migrated

    def test_legacy_yaml_loads(self, tmp_path):
        """Test a legacy file loads through load_config."""
        config_path = tmp_path / "config.yaml"
        config_path.write_text('status_suggestion_trigger: "~"\n')

        config = load_config(config_path)

        assert config.triggers.triggers[3].trigger == "~"


def test_get_config_is_cached(monkeypatch, tmp_path):
    """Test the global config loads once until reset."""
    monkeypatch.chdir(tmp_path)

    first = get_config()
    assert get_config() is first

    reset_config()
    assert get_config() is not first
