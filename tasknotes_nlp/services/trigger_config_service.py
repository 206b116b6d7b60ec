"""Lookup service for property trigger configuration."""

import logging

from tasknotes_nlp.models.triggers import (
    NLPTriggersConfig,
    PropertyTriggerConfig,
    SuggesterType,
    UserFieldType,
    UserMappedField,
)

logger = logging.getLogger(__name__)


class TriggerConfigService:
    """Resolve property ids to trigger strings and back.

    Only enabled triggers take part in lookups. The maps are rebuilt from
    scratch on every update, so calling ``update_config`` twice with the same
    config leaves the service in the same state.
    """

    def __init__(
        self,
        config: NLPTriggersConfig | None = None,
        user_fields: list[UserMappedField] | None = None,
    ):
        self.config = config or NLPTriggersConfig()
        self.user_fields = list(user_fields or [])
        self._trigger_map: dict[str, PropertyTriggerConfig] = {}
        self._property_map: dict[str, PropertyTriggerConfig] = {}
        self._build_maps()

    def _build_maps(self) -> None:
        self._trigger_map.clear()
        self._property_map.clear()
        for trigger_config in self.config.triggers:
            if trigger_config.enabled:
                self._trigger_map[trigger_config.trigger] = trigger_config
                self._property_map[trigger_config.property_id] = trigger_config
        logger.debug(f"Built trigger maps with {len(self._property_map)} enabled triggers")

    def get_trigger_for_property(self, property_id: str) -> PropertyTriggerConfig | None:
        """Get the enabled trigger config for a property, if any."""
        return self._property_map.get(property_id)

    def get_property_for_trigger(self, trigger: str) -> str | None:
        """Get the property id an enabled trigger string maps to."""
        config = self._trigger_map.get(trigger)
        return config.property_id if config else None

    def get_all_enabled_triggers(self) -> list[PropertyTriggerConfig]:
        return [t for t in self.config.triggers if t.enabled]

    def get_triggers_ordered_by_length(self) -> list[PropertyTriggerConfig]:
        """Enabled triggers, longest trigger string first.

        Multi-character triggers must be tried before single-character ones
        that could be their prefix.
        """
        return sorted(self.get_all_enabled_triggers(), key=lambda t: len(t.trigger), reverse=True)

    def _trigger_string(self, property_id: str) -> str | None:
        config = self.get_trigger_for_property(property_id)
        return config.trigger if config else None

    def get_tag_trigger(self) -> str | None:
        return self._trigger_string("tags")

    def get_context_trigger(self) -> str | None:
        return self._trigger_string("contexts")

    def get_project_trigger(self) -> str | None:
        return self._trigger_string("projects")

    def get_status_trigger(self) -> str | None:
        return self._trigger_string("status")

    def get_priority_trigger(self) -> str | None:
        return self._trigger_string("priority")

    def uses_native_tag_suggester(self) -> bool:
        """True when tags use the plain '#' trigger."""
        return self.get_tag_trigger() == "#"

    def get_user_field(self, field_id: str) -> UserMappedField | None:
        for field in self.user_fields:
            if field.id == field_id:
                return field
        return None

    def is_user_field(self, property_id: str) -> bool:
        return self.get_user_field(property_id) is not None

    def get_user_field_triggers(self) -> list[tuple[PropertyTriggerConfig, UserMappedField]]:
        """Enabled triggers that belong to user-defined fields, longest trigger first."""
        pairs = []
        for trigger_config in self.get_triggers_ordered_by_length():
            field = self.get_user_field(trigger_config.property_id)
            if field is not None:
                pairs.append((trigger_config, field))
        return pairs

    def get_suggester_type(self, property_id: str) -> SuggesterType:
        """Determine which autocomplete affordance applies to a property.

        Args:
            property_id: Built-in property id or user field id

        Returns:
            SuggesterType for the property, NONE if unknown
        """
        if property_id == "tags":
            return SuggesterType.NATIVE_TAG if self.uses_native_tag_suggester() else SuggesterType.LIST
        if property_id == "contexts":
            return SuggesterType.LIST
        if property_id == "projects":
            return SuggesterType.FILE
        if property_id == "status":
            return SuggesterType.STATUS
        if property_id == "priority":
            return SuggesterType.PRIORITY

        field = self.get_user_field(property_id)
        if field is None:
            return SuggesterType.NONE
        if field.type == UserFieldType.TEXT:
            return SuggesterType.FILE if field.autosuggest_filter else SuggesterType.LIST
        if field.type == UserFieldType.LIST:
            return SuggesterType.LIST
        if field.type == UserFieldType.BOOLEAN:
            return SuggesterType.BOOLEAN
        return SuggesterType.NONE

    def update_config(self, config: NLPTriggersConfig) -> None:
        """Replace the trigger configuration and rebuild lookups."""
        self.config = config
        self._build_maps()

    def update_user_fields(self, user_fields: list[UserMappedField]) -> None:
        """Replace the user field schema."""
        self.user_fields = list(user_fields)
