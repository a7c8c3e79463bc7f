import json
from unittest.mock import MagicMock


def mock_response(status_code=200, payload=None, invalid_json=False):
    """
    Builds a stand-in for requests.Response with the attributes the API client reads
    """
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.text = json.dumps(payload) if payload is not None else ''
    if invalid_json:
        response.json.side_effect = ValueError('no json')
    else:
        response.json.return_value = payload if payload is not None else {}
    return response
