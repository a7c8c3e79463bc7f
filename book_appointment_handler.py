# book_appointment_handler.py

import base64
import json
import logging
from urllib.parse import parse_qs
from appointment_booking import CORS_HEADERS, handle_booking_request

logger = logging.getLogger()
if not logger.handlers:
    logging.basicConfig(level=logging.INFO)
logger.setLevel(logging.INFO)


def get_header(event, name):
    headers = event.get('headers') or {}
    for key, value in headers.items():
        if key.lower() == name.lower():
            return value
    return None


def parse_body(event):
    """
    Parse a JSON body, or a url-encoded form body for any other content type
    """
    body = event.get('body') or ''
    if event.get('isBase64Encoded'):
        body = base64.b64decode(body).decode('utf-8')
    if not body:
        return {}

    content_type = get_header(event, 'content-type') or ''
    if 'application/json' in content_type:
        data = json.loads(body)
        return data if isinstance(data, dict) else {}

    form = parse_qs(body)
    return {key: values[0] for key, values in form.items() if values}


def lambda_handler(event, context):
    logger.info("Received event: %s", event)

    method = event.get('httpMethod') or \
             ((event.get('requestContext') or {}).get('http') or {}).get('method', '')
    try:
        if method.upper() == 'GET':
            params = event.get('queryStringParameters') or {}
        elif method.upper() == 'POST':
            params = parse_body(event)
        else:
            params = {}
    except (ValueError, UnicodeDecodeError) as e:
        return create_response(400, {'status': 'error', 'message': f'Invalid request body: {str(e)}'})

    status_code, payload = handle_booking_request(method, params)
    return create_response(status_code, payload)


def create_response(status_code, payload):
    """
    Create standardized JSON response with CORS headers
    """
    return {
        'statusCode': status_code,
        'headers': {
            'Content-Type': 'application/json',
            **CORS_HEADERS
        },
        'body': json.dumps(payload) if payload is not None else ''
    }
