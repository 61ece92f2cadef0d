import requests
import logging
from typing import Dict
from .interfaces import OMDBClientInterface, OMDBResponse, OMDBConfig, OMDBError

logger = logging.getLogger(__name__)

class OMDBClient(OMDBClientInterface):
    """Concrete implementation of OMDb client"""

    def __init__(self, config: OMDBConfig, session: requests.Session = None):
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update({
            "accept": "application/json"
        })

    def make_request(self, params: Dict = None) -> OMDBResponse:
        """Make HTTP request to OMDb API"""
        params = dict(params or {})
        query = ", ".join(f"{k}={v}" for k, v in params.items())

        # Add API key to params
        params['apikey'] = self.config.api_key

        try:
            logger.info(f"Making request to: {self.config.base_url} ({query})")
            response = self.session.get(self.config.base_url, params=params, timeout=self.config.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request exception: {str(e)}")
            raise OMDBError(f"Request failed: {str(e)}")

        if not 200 <= response.status_code < 300:
            logger.error(f"API request failed: {response.status_code} - {response.text}")
            raise OMDBError(
                f"Request failed with status code {response.status_code}",
                response.status_code
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from OMDb: {str(e)}")
            raise OMDBError(f"Invalid JSON response: {str(e)}", response.status_code)

        if not isinstance(data, dict):
            raise OMDBError("Unexpected response payload", response.status_code)

        return OMDBResponse(data, response.status_code, data.get("Response") == "True")
