from enum import Enum as PyEnum
from typing import Dict, List, Optional, Set
from booking_logging import create_logger

# Logger setup
schema_logger = create_logger('booking.schema')


class FieldTypes(PyEnum):
    STRING = 'string'
    NUMBER = 'number'
    BOOLEAN = 'boolean'
    DATE = 'date'
    DATE_TIME = 'datetime'
    OTHER = 'other'


# HubSpot property types that do not share a name with FieldTypes
HUBSPOT_TYPE_ALIASES = {
    'bool': FieldTypes.BOOLEAN,
}


def parse_field_type(raw_type) -> FieldTypes:
    if raw_type is None:
        return FieldTypes.STRING
    raw_type = str(raw_type).lower()
    if raw_type in HUBSPOT_TYPE_ALIASES:
        return HUBSPOT_TYPE_ALIASES[raw_type]
    try:
        return FieldTypes(raw_type)
    except ValueError:
        # enumeration, phone_number and custom types
        return FieldTypes.OTHER


class FieldOption:
    def __init__(self, value=None, label=None):
        self.value = value
        self.label = label

    @property
    def identity(self):
        """
        The value the store accepts for this option.
        Options without a value are matched by their label.
        """
        return self.value if self.value is not None else self.label

    @classmethod
    def from_hubspot(cls, option: dict):
        return cls(value=option.get('value'), label=option.get('label'))

    def __repr__(self):
        return f'FieldOption(value={self.value!r}, label={self.label!r})'


class FieldDefinition:
    def __init__(self, name: str, data_type: FieldTypes = FieldTypes.STRING,
                 options: Optional[List[FieldOption]] = None, is_read_only: bool = False):
        self.name = name
        self.data_type = data_type
        self.options = list(options) if options else []
        self.is_read_only = is_read_only

    @property
    def is_enumerated(self) -> bool:
        return len(self.options) > 0

    @property
    def is_date_like(self) -> bool:
        return self.data_type in (FieldTypes.DATE, FieldTypes.DATE_TIME)

    def option_identities(self) -> List:
        return [str(option.identity) for option in self.options if option.identity is not None]

    def first_option_identity(self):
        if not self.options:
            return None
        return self.options[0].identity

    @staticmethod
    def is_hubspot_read_only(prop: dict) -> bool:
        modification = prop.get('modificationMetadata') or {}
        return prop.get('readOnlyValue') is True or \
               prop.get('readOnlyDefinition') is True or \
               modification.get('readOnly') is True

    @classmethod
    def from_hubspot(cls, prop: dict):
        options = prop.get('options')
        if not isinstance(options, list):
            options = []
        raw_type = prop.get('type') or prop.get('fieldType')
        return cls(name=prop.get('name'),
                   data_type=parse_field_type(raw_type),
                   options=[FieldOption.from_hubspot(o) for o in options if isinstance(o, dict)],
                   is_read_only=cls.is_hubspot_read_only(prop))

    def __repr__(self):
        return f'FieldDefinition(name={self.name!r}, type={self.data_type.value}, ' \
               f'options={len(self.options)}, read_only={self.is_read_only})'


class SchemaDescriptor:
    """
    Read-only snapshot of a record type schema.
    Built fresh for every call and passed explicitly down the call chain.
    """
    def __init__(self, required_field_names: Optional[Set[str]] = None,
                 primary_display_field_name: Optional[str] = None,
                 fields: Optional[List[FieldDefinition]] = None):
        self.required_field_names = set(required_field_names or [])
        self.primary_display_field_name = primary_display_field_name
        self.fields = list(fields or [])
        self.__field_registry: Dict[str, FieldDefinition] = {}
        for field in self.fields:
            # first declaration wins on duplicate names
            self.__field_registry.setdefault(field.name, field)

    @classmethod
    def empty(cls):
        return cls()

    @classmethod
    def from_hubspot(cls, schema: dict):
        properties = schema.get('properties')
        if not isinstance(properties, list):
            properties = []
        fields = []
        for prop in properties:
            if not isinstance(prop, dict) or not prop.get('name'):
                schema_logger.debug(f'Skipping property without a name: {prop}')
                continue
            fields.append(FieldDefinition.from_hubspot(prop))

        required = schema.get('requiredProperties')
        if not isinstance(required, list):
            required = []

        descriptor = cls(required_field_names=set(required),
                         primary_display_field_name=schema.get('primaryDisplayProperty') or None,
                         fields=fields)
        schema_logger.debug(f'Parsed schema with {len(fields)} fields, required {sorted(descriptor.required_field_names)}, '
                            f'primary {descriptor.primary_display_field_name}')
        return descriptor

    def get_field(self, name: str) -> Optional[FieldDefinition]:
        return self.__field_registry.get(name)

    def has_field(self, name: str) -> bool:
        return name in self.__field_registry

    def is_empty(self) -> bool:
        return not self.fields and not self.required_field_names and not self.primary_display_field_name
