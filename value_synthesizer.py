from datetime import datetime, timezone
from typing import List, Optional, Set
import time
from hubspot_schema import FieldDefinition, FieldTypes, SchemaDescriptor
from field_resolver import ResolvedFieldMap
from config import DEFAULT_LABEL_PREFIX
from booking_logging import create_logger

logger = create_logger('booking.synthesizer')

GENERIC_OPTION_PLACEHOLDER = 'Auto'

_placeholder_builders_registry = {}


def register_placeholder_builder(field_type):
    global _placeholder_builders_registry
    def decorator(func):
        _placeholder_builders_registry[field_type] = func
        return func
    return decorator


class PropertySet(dict):
    """
    Field name to value mapping submitted to the store.
    untyped_fields keeps the required names that had no definition in the schema.
    """
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.untyped_fields: Set[str] = set()

    def is_set(self, name: str) -> bool:
        value = self.get(name)
        return value is not None and value != ''

    def missing_required(self, schema: SchemaDescriptor) -> List[str]:
        missing = []
        for name in sorted(schema.required_field_names):
            field = schema.get_field(name)
            if field is not None and field.is_read_only:
                continue
            if not self.is_set(name):
                missing.append(name)
        return missing


def _epoch_millis(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


def date_to_epoch_millis(date_value: str) -> int:
    """
    Midnight UTC of the given YYYY-MM-DD day, in epoch milliseconds.
    Falls back to today when the value is not a calendar date.
    """
    try:
        day = datetime.strptime(str(date_value)[:10], '%Y-%m-%d')
    except (TypeError, ValueError):
        logger.warning(f'Cannot parse date value "{date_value}", using today')
        day = datetime.now(timezone.utc)
    midnight = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
    return _epoch_millis(midnight)


@register_placeholder_builder(FieldTypes.NUMBER)
def _number_placeholder(field, date_value):
    return 0


@register_placeholder_builder(FieldTypes.BOOLEAN)
def _boolean_placeholder(field, date_value):
    return False


@register_placeholder_builder(FieldTypes.DATE)
def _date_placeholder(field, date_value):
    return date_to_epoch_millis(date_value)


@register_placeholder_builder(FieldTypes.DATE_TIME)
def _date_time_placeholder(field, date_value):
    return int(time.time() * 1000)


def _generic_placeholder(field, date_value):
    return f'Auto-{date_value}'


def placeholder_for(field: Optional[FieldDefinition], date_value: str):
    """
    Builds a schema-legal value for a required field the caller did not supply.
    """
    if field is None:
        return _generic_placeholder(field, date_value)
    if field.is_enumerated:
        identity = field.first_option_identity()
        return identity if identity is not None else GENERIC_OPTION_PLACEHOLDER
    builder = _placeholder_builders_registry.get(field.data_type, _generic_placeholder)
    return builder(field, date_value)


def normalize_option(field: FieldDefinition, csv_value: str):
    tokens = [token.strip() for token in (csv_value or '').split(',')]
    tokens = [token for token in tokens if token]
    identities = set(field.option_identities())
    for token in tokens:
        if token in identities:
            return token
    fallback = field.first_option_identity()
    logger.info(f'None of {tokens} is an option of "{field.name}", using first option "{fallback}"')
    return fallback


def synthesize(schema: SchemaDescriptor, resolved: ResolvedFieldMap, date_value: str,
               category_csv: str, primary_display_field_name: Optional[str] = None,
               label_prefix: str = DEFAULT_LABEL_PREFIX) -> PropertySet:
    props = PropertySet()
    props[resolved.date_field_name] = date_value
    props[resolved.category_field_name] = category_csv

    if primary_display_field_name and not props.is_set(primary_display_field_name):
        props[primary_display_field_name] = f'{label_prefix} {date_value} - {category_csv}'

    category_field = schema.get_field(resolved.category_field_name)
    if category_field is not None and category_field.is_enumerated:
        props[resolved.category_field_name] = normalize_option(category_field, category_csv)

    for name in sorted(schema.required_field_names):
        if props.is_set(name):
            continue
        field = schema.get_field(name)
        if field is not None and field.is_read_only:
            logger.debug(f'Skipping read-only required field "{name}"')
            continue
        if field is None:
            logger.warning(f'Required field "{name}" has no definition, using a generic placeholder')
            props.untyped_fields.add(name)
        props[name] = placeholder_for(field, date_value)
        logger.debug(f'Filled required field "{name}" with {props[name]!r}')

    return props
