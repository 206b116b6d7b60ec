"""Unit tests for the trigger configuration service."""

import pytest

from tasknotes_nlp.models.triggers import (
    NLPTriggersConfig,
    PropertyTriggerConfig,
    SuggesterType,
    UserFieldType,
    UserMappedField,
    default_triggers,
)
from tasknotes_nlp.services.trigger_config_service import TriggerConfigService


@pytest.fixture
def user_fields():
    return [
        UserMappedField(id="effort", display_name="Effort", key="effort", type=UserFieldType.NUMBER),
        UserMappedField(id="client", display_name="Client", key="client"),
        UserMappedField(
            id="related", display_name="Related", key="related", autosuggest_filter={"folder": "notes"},
        ),
        UserMappedField(id="billable", display_name="Billable", key="billable", type=UserFieldType.BOOLEAN),
        UserMappedField(id="labels", display_name="Labels", key="labels", type=UserFieldType.LIST),
    ]


@pytest.fixture
def service(user_fields):
    triggers = default_triggers() + [
        PropertyTriggerConfig(property_id="effort", trigger="effort:"),
        PropertyTriggerConfig(property_id="client", trigger="c:"),
        PropertyTriggerConfig(property_id="labels", trigger="l:", enabled=False),
    ]
    return TriggerConfigService(NLPTriggersConfig(triggers=triggers), user_fields)


class TestLookups:
    """Tests for trigger and property lookups."""

    def test_default_triggers(self):
        """Test the built-in defaults."""
        service = TriggerConfigService()

        assert service.get_tag_trigger() == "#"
        assert service.get_context_trigger() == "@"
        assert service.get_project_trigger() == "+"
        assert service.get_status_trigger() == "*"
        assert service.get_priority_trigger() is None

    def test_property_for_trigger(self, service):
        """Test reverse lookup only covers enabled triggers."""
        assert service.get_property_for_trigger("@") == "contexts"
        assert service.get_property_for_trigger("effort:") == "effort"
        assert service.get_property_for_trigger("!") is None
        assert service.get_property_for_trigger("l:") is None

    def test_trigger_for_property(self, service):
        """Test disabled properties have no trigger."""
        assert service.get_trigger_for_property("tags").trigger == "#"
        assert service.get_trigger_for_property("labels") is None

    def test_ordered_by_length(self, service):
        """Test longer triggers come first."""
        ordered = [t.trigger for t in service.get_triggers_ordered_by_length()]
        assert ordered[0] == "effort:"
        assert ordered[1] == "c:"

    def test_user_fields(self, service):
        """Test user field lookups."""
        assert service.is_user_field("effort")
        assert not service.is_user_field("tags")
        assert service.get_user_field("client").display_name == "Client"
        assert [f.id for _, f in service.get_user_field_triggers()] == ["effort", "client"]


class TestSuggesterType:
    """Tests for suggester type selection."""

    @pytest.mark.parametrize("property_id,expected", [
        ("tags", SuggesterType.NATIVE_TAG),
        ("contexts", SuggesterType.LIST),
        ("projects", SuggesterType.FILE),
        ("status", SuggesterType.STATUS),
        ("priority", SuggesterType.PRIORITY),
        ("client", SuggesterType.LIST),
        ("related", SuggesterType.FILE),
        ("billable", SuggesterType.BOOLEAN),
        ("labels", SuggesterType.LIST),
        ("effort", SuggesterType.NONE),
        ("unknown", SuggesterType.NONE),
    ])
    def test_suggester_type(self, service, property_id, expected):
        """Test each property maps to its suggester."""
        assert service.get_suggester_type(property_id) == expected

    def test_custom_tag_trigger_uses_list(self):
        """Test a non-'#' tag trigger is not the native suggester."""
        service = TriggerConfigService(NLPTriggersConfig(triggers=[
            PropertyTriggerConfig(property_id="tags", trigger="tag:"),
        ]))

        assert not service.uses_native_tag_suggester()
        assert service.get_suggester_type("tags") == SuggesterType.LIST


class TestUpdates:
    """Tests for configuration updates."""

    def test_update_config_is_idempotent(self, service):
        """Test rebuilding twice gives the same lookups."""
        config = NLPTriggersConfig(triggers=[PropertyTriggerConfig(property_id="tags", trigger="tag:")])

        service.update_config(config)
        first = [t.trigger for t in service.get_all_enabled_triggers()]
        service.update_config(config)

        assert [t.trigger for t in service.get_all_enabled_triggers()] == first == ["tag:"]
        assert service.get_context_trigger() is None
        assert service.get_property_for_trigger("#") is None

    def test_update_user_fields(self, service):
        """Test replacing the user field schema."""
        service.update_user_fields([])

        assert not service.is_user_field("effort")
        assert service.get_user_field_triggers() == []
