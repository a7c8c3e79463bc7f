import unittest
import copy
from hubspot_schema import FieldDefinition, FieldOption, FieldTypes, SchemaDescriptor
from field_resolver import ResolvedFieldMap, pick_first_match, resolve_fields
from hubspot_schemas import DEFAULT_FIELDS_SCHEMA, RENAMED_FIELDS_SCHEMA


def date_field(name, read_only=False, data_type=FieldTypes.DATE):
    return FieldDefinition(name, data_type, is_read_only=read_only)


def select_field(name, values, read_only=False):
    return FieldDefinition(name, FieldTypes.OTHER,
                           options=[FieldOption(value=v) for v in values],
                           is_read_only=read_only)


class TestPickFirstMatch(unittest.TestCase):

    def test_first_tier_wins_over_order(self):
        candidates = [date_field('start'), date_field('meeting_day')]
        match = pick_first_match(candidates, [lambda f: 'meeting' in f.name, lambda f: True])
        self.assertEqual(match.name, 'meeting_day')

    def test_falls_through_to_next_tier(self):
        candidates = [date_field('start'), date_field('end')]
        match = pick_first_match(candidates, [lambda f: 'meeting' in f.name, lambda f: True])
        self.assertEqual(match.name, 'start')

    def test_no_match(self):
        self.assertIsNone(pick_first_match([], [lambda f: True]))


class TestResolveFields(unittest.TestCase):

    def test_explicit_default_names_take_precedence(self):
        schema = SchemaDescriptor(fields=[
            date_field('meeting_date'),
            date_field('meeting'),
            select_field('languages', ['en']),
            select_field('healer_language', ['es']),
        ])
        resolved = resolve_fields(schema, 'meeting', 'languages')
        self.assertEqual(resolved, ResolvedFieldMap('meeting', 'languages'))

    def test_default_fields_schema(self):
        schema = SchemaDescriptor.from_hubspot(DEFAULT_FIELDS_SCHEMA)
        resolved = resolve_fields(schema, 'meeting', 'languages')
        self.assertEqual(resolved, ResolvedFieldMap('meeting', 'languages'))

    def test_renamed_fields_are_inferred(self):
        schema = SchemaDescriptor.from_hubspot(RENAMED_FIELDS_SCHEMA)
        resolved = resolve_fields(schema, 'meeting', 'languages')
        self.assertEqual(resolved.date_field_name, 'meeting_date')
        self.assertEqual(resolved.category_field_name, 'healer_language')

    def test_read_only_date_field_never_selected(self):
        schema = SchemaDescriptor(fields=[
            date_field('meeting_locked', read_only=True),
            date_field('visit_day'),
        ])
        resolved = resolve_fields(schema, 'meeting', 'languages')
        self.assertEqual(resolved.date_field_name, 'visit_day')

    def test_createdate_fields_excluded(self):
        schema = SchemaDescriptor(fields=[
            date_field('hs_createdate', data_type=FieldTypes.DATE_TIME),
            date_field('meeting_createdate'),
            date_field('visit_day'),
        ])
        resolved = resolve_fields(schema, 'meeting', 'languages')
        self.assertEqual(resolved.date_field_name, 'visit_day')

    def test_meeting_preference_is_case_insensitive(self):
        schema = SchemaDescriptor(fields=[
            date_field('visit_day'),
            date_field('Next_Meeting', data_type=FieldTypes.DATE_TIME),
            date_field('follow_up'),
        ])
        resolved = resolve_fields(schema, 'meeting', 'languages')
        self.assertEqual(resolved.date_field_name, 'Next_Meeting')

    def test_no_candidates_keeps_defaults(self):
        schema = SchemaDescriptor(fields=[
            FieldDefinition('notes', FieldTypes.STRING),
            select_field('office', ['north'], read_only=True),
        ])
        resolved = resolve_fields(schema, 'meeting', 'languages')
        self.assertEqual(resolved, ResolvedFieldMap('meeting', 'languages'))

    def test_category_falls_back_to_first_select(self):
        schema = SchemaDescriptor(fields=[
            select_field('locked_language', ['en'], read_only=True),
            select_field('office', ['north']),
            select_field('room', ['a']),
        ])
        resolved = resolve_fields(schema, 'meeting', 'languages')
        self.assertEqual(resolved.category_field_name, 'office')

    def test_empty_schema_keeps_defaults(self):
        resolved = resolve_fields(SchemaDescriptor.empty(), 'meeting', 'languages')
        self.assertEqual(resolved, ResolvedFieldMap('meeting', 'languages'))

    def test_schema_is_not_mutated(self):
        raw = copy.deepcopy(RENAMED_FIELDS_SCHEMA)
        schema = SchemaDescriptor.from_hubspot(raw)
        names_before = [f.name for f in schema.fields]
        resolve_fields(schema, 'meeting', 'languages')
        self.assertEqual([f.name for f in schema.fields], names_before)
        self.assertEqual(raw, RENAMED_FIELDS_SCHEMA)


if __name__ == '__main__':
    unittest.main()
