import json
import logging
from typing import Dict, List, Optional
from urllib.parse import quote
import requests
from config import get_access_token
from hubspot_schema import SchemaDescriptor


class HubSpotApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SchemaUnavailable(HubSpotApiError): ...

class ValidationRejected(HubSpotApiError): ...

class TransportFailure(HubSpotApiError): ...


class HubSpotCrmApi:

    SCHEMAS_PATH = '/crm/v3/schemas'
    OBJECTS_PATH = '/crm/v3/objects'
    SEARCH_LIMIT = 10

    def __init__(self, baseUrl: str, logger: logging.Logger, timeout: float = 30):
        self.baseUrl = baseUrl.rstrip('/')
        self.logger = logger
        self.timeout = timeout

    def __auth_headers(self):
        return {
            'Authorization': f'Bearer {get_access_token()}',
            'Content-Type': 'application/json'
        }

    def api_get(self, url, params=None):
        headers = self.__auth_headers()
        self.logger.log(logging.DEBUG, f'API: Sending GET to endpoint "{url}" with uriParams {params}')
        response = requests.get(url, params=params, headers=headers, timeout=self.timeout)
        if not response.ok:
            self.logger.log(logging.ERROR, f'API: GET to endpoint "{url}" returned status code {response.status_code} response: {response.text}')
        return response

    def api_post(self, url, dictBody=None):
        headers = self.__auth_headers()
        body = json.dumps(dictBody)
        self.logger.log(logging.DEBUG, f'API: Sending POST to endpoint "{url}" with body: {body}')
        response = requests.post(url, data=body, headers=headers, timeout=self.timeout)
        if not response.ok:
            self.logger.log(logging.ERROR, f'API: POST to endpoint "{url}" with payload {body} returned status code {response.status_code} response: {response.text}')
        return response

    @staticmethod
    def __response_json(response) -> dict:
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    def __raise_for_failure(self, response, action: str):
        data = self.__response_json(response)
        message = data.get('message')
        if message:
            raise ValidationRejected(message, response.status_code)
        raise TransportFailure(f'HubSpot {action} failed with {response.status_code}', response.status_code)

    def schema_url(self, objectType: str) -> str:
        return f'{self.baseUrl}{self.SCHEMAS_PATH}/{quote(objectType, safe="")}'

    def objects_url(self, objectType: str) -> str:
        return f'{self.baseUrl}{self.OBJECTS_PATH}/{quote(objectType, safe="")}'

    def fetch_schema_json(self, objectType: str) -> dict:
        url = self.schema_url(objectType)
        try:
            response = self.api_get(url)
        except requests.RequestException as e:
            raise SchemaUnavailable(f'HubSpot schema fetch failed: {e}') from e
        if not response.ok:
            raise SchemaUnavailable(f'HubSpot schema fetch failed with {response.status_code}', response.status_code)
        return self.__response_json(response)

    def fetch_schema(self, objectType: str) -> Optional[SchemaDescriptor]:
        """
        Reads the current schema of the record type.
        Returns None when the schema cannot be fetched; callers fall back to an empty schema.
        """
        try:
            schemaJson = self.fetch_schema_json(objectType)
        except SchemaUnavailable as e:
            self.logger.warning(f'Schema for {objectType} unavailable, falling back to defaults: {e}')
            return None
        return SchemaDescriptor.from_hubspot(schemaJson)

    def create_record(self, objectType: str, properties: Dict) -> dict:
        url = self.objects_url(objectType)
        try:
            response = self.api_post(url, dictBody={'properties': dict(properties)})
        except requests.RequestException as e:
            raise TransportFailure(f'HubSpot create failed: {e}') from e
        if not response.ok:
            self.__raise_for_failure(response, 'create')
        record = self.__response_json(response)
        self.logger.info(f'Created record {record.get("id")} in {objectType}')
        return record

    @staticmethod
    def build_search_body(filters: Dict[str, Optional[str]], properties: List[str], limit: int) -> dict:
        searchFilters = [{'propertyName': name, 'operator': 'EQ', 'value': value}
                         for name, value in filters.items() if value]
        return {
            'filterGroups': [{'filters': searchFilters}] if searchFilters else [],
            'properties': list(properties),
            'limit': limit
        }

    def search_records(self, objectType: str, filters: Dict[str, Optional[str]],
                       properties: List[str], limit: int = SEARCH_LIMIT) -> dict:
        url = f'{self.objects_url(objectType)}/search'
        body = self.build_search_body(filters, properties, limit)
        try:
            response = self.api_post(url, dictBody=body)
        except requests.RequestException as e:
            raise TransportFailure(f'HubSpot search failed: {e}') from e
        if not response.ok:
            self.__raise_for_failure(response, 'search')
        return self.__response_json(response)


__singletonInstance = None
def get_crm_api_instance(config=None):
    """
    Provides access to the singleton instance of HubSpotCrmApi.
    Initializes the instance if it hasn't been created yet.
    The instance only holds configuration, no schema state.
    :param config: Optional configuration dictionary for initializing the instance.
    :return: Singleton instance of HubSpotCrmApi.
    """
    global __singletonInstance
    if __singletonInstance is None:
        if config is None:
            raise ValueError("Configuration is required for the initial creation of the HubSpotCrmApi instance.")
        __singletonInstance = HubSpotCrmApi(baseUrl=config.get('baseUrl'),
                                            logger=config.get('logger'),
                                            timeout=config.get('timeout', 30))
    return __singletonInstance
