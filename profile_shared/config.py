"""
Configuration loading for the profile edit screen.

Configuration is read once from environment variables and validated up
front; all missing or malformed variables are reported together.
"""

import os
from typing import Dict, List, Mapping, Optional, TypedDict

from profile_shared.errors import ConfigurationError
from profile_shared.metrics import DEFAULT_NAMESPACE


DEFAULT_DASHBOARD_PATH = '/dashboard'

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}
_FALSE_VALUES = {'0', 'false', 'no', 'off', ''}


class ProfileConfig(TypedDict):
    """Resolved configuration."""
    api_base_url: str
    api_timeout: Optional[float]
    metrics_enabled: bool
    metrics_namespace: str
    dashboard_path: str


def default_config(api_base_url: str = '') -> ProfileConfig:
    """Configuration with every optional value at its default."""
    return {
        'api_base_url': api_base_url,
        'api_timeout': None,
        'metrics_enabled': False,
        'metrics_namespace': DEFAULT_NAMESPACE,
        'dashboard_path': DEFAULT_DASHBOARD_PATH
    }


def load_config(environ: Optional[Mapping[str, str]] = None) -> ProfileConfig:
    """
    Load and validate configuration from environment variables.
    
    Variables:
        PROFILE_API_BASE_URL: Base URL of the REST API (required)
        PROFILE_API_TIMEOUT: Request timeout in seconds (optional)
        PROFILE_METRICS_ENABLED: Publish CloudWatch metrics (optional, default false)
        PROFILE_METRICS_NAMESPACE: CloudWatch namespace (optional)
        PROFILE_DASHBOARD_PATH: Where to navigate after a successful update (optional)
    
    Args:
        environ: Mapping to read from; defaults to os.environ
        
    Returns:
        Resolved configuration
        
    Raises:
        ConfigurationError: If any variable is missing or malformed
    """
    if environ is None:
        environ = os.environ
    
    problems: List[Dict[str, str]] = []
    config = default_config()
    
    base_url = environ.get('PROFILE_API_BASE_URL', '').strip()
    if not base_url:
        problems.append({
            'variable': 'PROFILE_API_BASE_URL',
            'message': 'Variable is required'
        })
    config['api_base_url'] = base_url
    
    timeout = environ.get('PROFILE_API_TIMEOUT', '').strip()
    if timeout:
        try:
            config['api_timeout'] = float(timeout)
        except ValueError:
            problems.append({
                'variable': 'PROFILE_API_TIMEOUT',
                'message': 'Variable must be a number of seconds'
            })
        else:
            if config['api_timeout'] <= 0:
                problems.append({
                    'variable': 'PROFILE_API_TIMEOUT',
                    'message': 'Variable must be positive'
                })
    
    enabled = environ.get('PROFILE_METRICS_ENABLED', '').strip().lower()
    if enabled in _TRUE_VALUES:
        config['metrics_enabled'] = True
    elif enabled not in _FALSE_VALUES:
        problems.append({
            'variable': 'PROFILE_METRICS_ENABLED',
            'message': 'Variable must be a boolean'
        })
    
    namespace = environ.get('PROFILE_METRICS_NAMESPACE', '').strip()
    if namespace:
        config['metrics_namespace'] = namespace
    
    dashboard_path = environ.get('PROFILE_DASHBOARD_PATH', '').strip()
    if dashboard_path:
        config['dashboard_path'] = dashboard_path
    
    if problems:
        raise ConfigurationError(
            'Invalid configuration: ' + ', '.join(p['variable'] for p in problems),
            {'errors': problems}
        )
    
    return config
