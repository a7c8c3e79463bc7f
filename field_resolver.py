from typing import Callable, Iterable, List, Optional, Sequence
from hubspot_schema import FieldDefinition, SchemaDescriptor
from booking_logging import create_logger

logger = create_logger('booking.resolver')

# system timestamps the store manages itself (e.g. hs_createdate)
PROTECTED_DATE_SUBSTRING = 'createdate'
DATE_NAME_PREFERENCE = 'meeting'
CATEGORY_NAME_PREFERENCE = 'language'


class ResolvedFieldMap:
    def __init__(self, date_field_name: str, category_field_name: str):
        self.date_field_name = date_field_name
        self.category_field_name = category_field_name

    def __eq__(self, other):
        if not isinstance(other, ResolvedFieldMap):
            return NotImplemented
        return self.date_field_name == other.date_field_name and \
               self.category_field_name == other.category_field_name

    def __repr__(self):
        return f'ResolvedFieldMap(date={self.date_field_name!r}, category={self.category_field_name!r})'


def pick_first_match(candidates: Sequence[FieldDefinition],
                     preferences: Iterable[Callable[[FieldDefinition], bool]]) -> Optional[FieldDefinition]:
    """
    Returns the first candidate matching the first preference tier that matches anything.
    Candidates are scanned in their declared order within each tier.
    """
    for preference in preferences:
        for candidate in candidates:
            if preference(candidate):
                return candidate
    return None


def _name_contains(substring: str) -> Callable[[FieldDefinition], bool]:
    return lambda field: substring in str(field.name).lower()


def _any_field(field: FieldDefinition) -> bool:
    return True


def date_candidates(schema: SchemaDescriptor) -> List[FieldDefinition]:
    return [field for field in schema.fields
            if field.is_date_like
            and not field.is_read_only
            and PROTECTED_DATE_SUBSTRING not in str(field.name).lower()]


def category_candidates(schema: SchemaDescriptor) -> List[FieldDefinition]:
    return [field for field in schema.fields
            if field.is_enumerated and not field.is_read_only]


def _resolve_role(role: str, schema: SchemaDescriptor, default_name: str,
                  candidates: List[FieldDefinition], name_preference: str) -> str:
    # an explicitly configured name that exists is never second-guessed
    if schema.has_field(default_name):
        return default_name

    if not schema.fields:
        return default_name

    match = pick_first_match(candidates, [_name_contains(name_preference), _any_field])
    if match is None:
        logger.warning(f'No candidate field found for the {role} role, keeping default "{default_name}"')
        return default_name

    logger.info(f'Resolved {role} role to field "{match.name}" (default "{default_name}" not in schema)')
    return match.name


def resolve_fields(schema: SchemaDescriptor, default_date_field_name: str,
                   default_category_field_name: str) -> ResolvedFieldMap:
    date_field_name = _resolve_role('date', schema, default_date_field_name,
                                    date_candidates(schema), DATE_NAME_PREFERENCE)
    category_field_name = _resolve_role('category', schema, default_category_field_name,
                                        category_candidates(schema), CATEGORY_NAME_PREFERENCE)
    return ResolvedFieldMap(date_field_name, category_field_name)
