import re
from typing import Optional
from config import BookingApiConfig, DEFAULT_LABEL_PREFIX
from hubspot_crm_api import HubSpotApiError, HubSpotCrmApi, get_crm_api_instance
from hubspot_schema import SchemaDescriptor
from field_resolver import resolve_fields
from value_synthesizer import synthesize
from booking_logging import create_logger

logger = create_logger('booking.appointments')

ISO_DATE_PATTERN = re.compile(r'\d{4}-\d{2}-\d{2}', re.ASCII)

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'GET,POST,OPTIONS',
    'Access-Control-Allow-Headers': 'Content-Type, Authorization'
}


def is_iso_date(value) -> bool:
    return isinstance(value, str) and ISO_DATE_PATTERN.fullmatch(value) is not None


def validate_booking_params(date, category) -> Optional[str]:
    """
    Returns an error message for invalid booking input, None when valid.
    """
    if not date or not is_iso_date(date):
        return "Invalid or missing 'date' (YYYY-MM-DD)"
    if not category or not isinstance(category, str):
        return "Invalid or missing 'category' (comma-separated string)"
    return None


class AppointmentBooking:

    def __init__(self, api: HubSpotCrmApi, config: dict):
        self.api = api
        self.objectType = config.get('objectType')
        self.meetingProperty = config.get('meetingProperty')
        self.languagesProperty = config.get('languagesProperty')
        self.labelPrefix = config.get('labelPrefix') or DEFAULT_LABEL_PREFIX

    def create_appointment(self, date: str, category: str) -> dict:
        """
        Creates an appointment record for the date and comma-separated languages.
        The schema is read on every call; field names, option values and required
        placeholders are derived from it. Raises HubSpotApiError when the write fails.
        """
        schema = self.api.fetch_schema(self.objectType)
        if schema is None:
            schema = SchemaDescriptor.empty()

        resolved = resolve_fields(schema, self.meetingProperty, self.languagesProperty)
        props = synthesize(schema, resolved, date, category,
                           primary_display_field_name=schema.primary_display_field_name,
                           label_prefix=self.labelPrefix)

        missing = props.missing_required(schema)
        if missing:
            logger.warning(f'Submitting with required fields still empty: {missing}')

        logger.info(f'Creating appointment in {self.objectType} with properties {dict(props)}')
        return self.api.create_record(self.objectType, props)

    def search_appointments(self, date: Optional[str], category: Optional[str]) -> dict:
        filters = {
            self.meetingProperty: date,
            self.languagesProperty: category
        }
        properties = [self.meetingProperty, self.languagesProperty]
        return self.api.search_records(self.objectType, filters, properties)


__bookingInstance = None
def get_booking_instance(config=None) -> AppointmentBooking:
    global __bookingInstance
    if __bookingInstance is None:
        _config = config if config is not None else BookingApiConfig
        __bookingInstance = AppointmentBooking(api=get_crm_api_instance(_config), config=_config)
    return __bookingInstance


def read_booking_params(params: dict):
    """
    Extracts date and category from request parameters.
    The legacy names 'meeting' and 'languages' are accepted as well.
    """
    params = params or {}
    date = params.get('date') or params.get('meeting') or ''
    category = params.get('category') or params.get('languages') or ''
    return date, category


def error_status(error: Exception) -> int:
    if isinstance(error, HubSpotApiError) and error.status_code and 400 <= error.status_code < 500:
        return error.status_code
    return 500


def handle_booking_request(method: str, params: dict, booking: Optional[AppointmentBooking] = None):
    """
    Transport-neutral request handling shared by the lambda handler and the Flask app.
    Returns a (status_code, payload) tuple; payload is None for an empty body.
    """
    method = (method or '').upper()
    if method == 'OPTIONS':
        return 204, None
    if method not in ('GET', 'POST'):
        return 405, {'status': 'error', 'message': 'Method not allowed'}

    date, category = read_booking_params(params)
    error_message = validate_booking_params(date, category)
    if error_message:
        return 400, {'status': 'error', 'message': error_message}

    try:
        _booking = booking if booking is not None else get_booking_instance()
        if method == 'GET':
            found = _booking.search_appointments(date, category)
            return 200, {'status': 'success', 'message': 'Fetched appointments', 'data': found}
        created = _booking.create_appointment(date, category)
        return 201, {'status': 'success', 'message': 'Appointment created', 'data': created}
    except (HubSpotApiError, ValueError) as e:
        message = str(e) or 'Unknown error'
        logger.error(f'{method} appointment failed: {message}')
        return error_status(e), {'status': 'error', 'message': message}
