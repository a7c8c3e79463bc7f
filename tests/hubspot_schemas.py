"""Sample HubSpot custom object schemas used across the tests."""

# Schema with the default-named fields only, nothing else required
DEFAULT_FIELDS_SCHEMA = {
    "id": "50779282",
    "name": "appointments",
    "requiredProperties": [],
    "properties": [
        {"name": "meeting", "type": "date", "fieldType": "date"},
        {"name": "languages", "type": "string", "fieldType": "text"},
    ],
}

# Schema that renamed the semantic fields and requires extra properties
RENAMED_FIELDS_SCHEMA = {
    "id": "50779282",
    "name": "appointments",
    "primaryDisplayProperty": "appointment_name",
    "requiredProperties": [
        "appointment_name", "healer_language", "session_length",
        "is_online", "follow_up_date", "confirmed_at", "notes",
        "hs_object_source", "legacy_code",
    ],
    "properties": [
        {"name": "hs_createdate", "type": "datetime", "fieldType": "date",
         "modificationMetadata": {"readOnly": True}},
        {"name": "appointment_name", "type": "string", "fieldType": "text"},
        {"name": "follow_up_date", "type": "date", "fieldType": "date"},
        {"name": "meeting_date", "type": "date", "fieldType": "date"},
        {"name": "confirmed_at", "type": "datetime", "fieldType": "date"},
        {"name": "office", "type": "enumeration", "fieldType": "select",
         "options": [{"label": "North", "value": "north"}, {"label": "South", "value": "south"}]},
        {"name": "healer_language", "type": "enumeration", "fieldType": "select",
         "options": [{"label": "English", "value": "en"}, {"label": "Spanish", "value": "es"}]},
        {"name": "session_length", "type": "number", "fieldType": "number"},
        {"name": "is_online", "type": "bool", "fieldType": "booleancheckbox"},
        {"name": "notes", "type": "phone_number", "fieldType": "text"},
        {"name": "hs_object_source", "type": "string", "fieldType": "text", "readOnlyValue": True},
    ],
}
