# put config objects here
import os
from dotenv import load_dotenv
from booking_logging import create_logger

load_dotenv()

logger = create_logger('booking.api')

DEFAULT_OBJECT_TYPE = '2-50779282'  # HubSpot custom object type id for appointments
DEFAULT_MEETING_PROP = 'meeting'
DEFAULT_LANGUAGES_PROP = 'languages'
DEFAULT_API_BASE_URL = 'https://api.hubapi.com'
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_LABEL_PREFIX = 'Healer appointment'


def get_access_token():
    token = os.getenv('HUBSPOT_ACCESS_TOKEN')
    if not token:
        raise ValueError("Missing HubSpot token. Set HUBSPOT_ACCESS_TOKEN in env.")
    return token


def load_booking_config():
    """
    Builds the configuration dictionary from the environment.
    Called again by tests after patching os.environ.
    """
    try:
        timeout = float(os.getenv('HUBSPOT_TIMEOUT_SECONDS', DEFAULT_TIMEOUT_SECONDS))
    except ValueError:
        logger.warning(f'Invalid HUBSPOT_TIMEOUT_SECONDS, using {DEFAULT_TIMEOUT_SECONDS}')
        timeout = DEFAULT_TIMEOUT_SECONDS

    return {
        'objectType': os.getenv('HUBSPOT_OBJECT_TYPE', DEFAULT_OBJECT_TYPE),
        'meetingProperty': os.getenv('HUBSPOT_MEETING_PROP', DEFAULT_MEETING_PROP),
        'languagesProperty': os.getenv('HUBSPOT_LANGUAGES_PROP', DEFAULT_LANGUAGES_PROP),
        'baseUrl': os.getenv('HUBSPOT_API_BASE_URL', DEFAULT_API_BASE_URL).rstrip('/'),
        'timeout': timeout,
        'labelPrefix': os.getenv('APPOINTMENT_LABEL_PREFIX', DEFAULT_LABEL_PREFIX),
        'logger': logger
    }


# Configuration dictionary for initializing the booking API
BookingApiConfig = load_booking_config()
