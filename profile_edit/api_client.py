"""
REST API client for the profile update call.

A thin requests-based client: JSON in, JSON out, bearer authentication.
Every failure surfaces as RemoteUpdateError so callers only have to tell it
apart from validation errors.
"""

import json
from typing import Any, Dict, Optional

import requests

from profile_shared.collaborators import ApiClient, ApiResponse
from profile_shared.errors import RemoteUpdateError


class ProfileApiClient(ApiClient):
    """
    API client bound to a base URL.
    
    Usage:
        api = ProfileApiClient('https://api.example.com', token='abc')
        response = api.put('profile', {'name': 'Jane', 'email': 'jane@example.com'})
        response.data['name']
    """
    
    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the client.
        
        Args:
            base_url: API root, with or without trailing slash
            token: Bearer token sent in the Authorization header (optional)
            timeout: Request timeout in seconds; None waits indefinitely
            session: requests session to reuse (optional)
        """
        if not base_url or not base_url.strip():
            raise ValueError('API base URL is required')
        
        self.base_url = base_url.rstrip('/')
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()
    
    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"
    
    def _headers(self) -> Dict[str, str]:
        headers = {
            'Content-Type': 'application/json',
            'Accept': 'application/json'
        }
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers
    
    def put(self, path: str, body: Dict[str, Any]) -> ApiResponse:
        """
        Send a PUT request with a JSON body.
        
        Args:
            path: Path relative to the base URL (e.g., 'profile')
            body: JSON-serializable request body
            
        Returns:
            ApiResponse with the status code and decoded body
            
        Raises:
            RemoteUpdateError: On transport failure, non-2xx status or a
                body that is not a JSON object
        """
        return self._request('PUT', path, body)
    
    def _request(self, method: str, path: str, body: Dict[str, Any]) -> ApiResponse:
        url = self.url_for(path)
        
        try:
            response = self.session.request(
                method=method,
                url=url,
                headers=self._headers(),
                data=json.dumps(body),
                timeout=self.timeout
            )
        except requests.RequestException as error:
            raise RemoteUpdateError(
                f'{method} {path} failed: {type(error).__name__}',
                {'path': path, 'reason': str(error)}
            ) from error
        
        if not response.ok:
            raise RemoteUpdateError(
                f'{method} {path} returned {response.status_code}',
                {
                    'path': path,
                    'statusCode': response.status_code,
                    'response': _error_body(response)
                }
            )
        
        try:
            data = response.json()
        except ValueError as error:
            raise RemoteUpdateError(
                f'{method} {path} returned a non-JSON body',
                {'path': path, 'statusCode': response.status_code}
            ) from error
        
        if not isinstance(data, dict):
            raise RemoteUpdateError(
                f'{method} {path} returned an unexpected body',
                {'path': path, 'statusCode': response.status_code}
            )
        
        return ApiResponse(status_code=response.status_code, data=data)


def _error_body(response: requests.Response) -> Dict[str, Any]:
    # Error bodies follow {code, message, details}; anything else is kept as text
    try:
        body = response.json()
    except ValueError:
        return {'text': response.text[:500]}
    
    if isinstance(body, dict):
        return {
            'code': body.get('code'),
            'message': body.get('message'),
            'details': body.get('details', {})
        }
    return {'text': str(body)[:500]}
