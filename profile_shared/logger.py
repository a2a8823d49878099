"""
Structured logging utility for the profile edit screen.

This module provides a logger that writes one JSON line per event with a
correlation ID, latency tracking and consistent formatting, and feeds the
optional CloudWatch metrics client.

Rules:
- Log every submit attempt with its correlation ID
- Log errors with context
- Never log passwords or credentials
"""

import json
import time
from typing import Any, Optional
from datetime import datetime, timezone

from ulid import ULID

from profile_shared.metrics import MetricsClient


# Field names whose values must never be logged (compared lowercased)
SENSITIVE_FIELDS = {
    'password',
    'old_password',
    'password_confirmation',
    'token',
    'secret',
    'apikey',
    'api_key',
    'authorization',
    'auth',
    'credentials',
    'accesstoken',
    'access_token',
    'refreshtoken',
    'refresh_token',
    'sessionid',
    'session_id'
}

REDACTED = '[REDACTED]'


def sanitize(data: Any) -> Any:
    """
    Replace sensitive values in a (possibly nested) structure.
    
    Dictionaries are walked recursively, including dictionaries inside
    lists. Non-dict values are returned unchanged.
    
    Args:
        data: Value that may contain sensitive fields
        
    Returns:
        Copy of ``data`` with sensitive values replaced by '[REDACTED]'
    """
    if isinstance(data, list):
        return [sanitize(item) for item in data]
    if not isinstance(data, dict):
        return data
    
    sanitized = {}
    for key, value in data.items():
        if isinstance(key, str) and key.lower() in SENSITIVE_FIELDS:
            sanitized[key] = REDACTED
        else:
            sanitized[key] = sanitize(value)
    return sanitized


class StructuredLogger:
    """
    Structured logger for form submissions.
    
    Usage:
        logger = StructuredLogger(correlation_id='01J...', operation='profile-update')
        logger.log_submit_start(fields=['name', 'email'])
        # ... process submit ...
        logger.log_submit_complete(userId='user-123')
        logger.publish_metrics()
    """
    
    def __init__(
        self,
        correlation_id: str,
        operation: str,
        metrics: Optional[MetricsClient] = None
    ):
        """
        Initialize the structured logger.
        
        Args:
            correlation_id: Unique identifier for this submit attempt
            operation: Operation name (e.g., 'profile-update')
            metrics: Metrics client; metrics are skipped when None
        """
        self.correlation_id = correlation_id
        self.operation = operation
        self.start_time = time.time()
        self.metrics = metrics
    
    def _latency_ms(self) -> int:
        return int((time.time() - self.start_time) * 1000)
    
    def _log(self, event: str, **kwargs: Any) -> None:
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'correlationId': self.correlation_id,
            'operation': self.operation,
            'event': event,
            **sanitize(kwargs)
        }
        print(json.dumps(log_entry, default=str))
    
    def log_submit_start(self, **additional_fields: Any) -> None:
        """Log the beginning of a submit attempt."""
        self._log('submit_start', **additional_fields)
    
    def log_submit_complete(self, **additional_fields: Any) -> None:
        """
        Log a successful submit with latency.
        
        Also records request count and latency metrics.
        """
        latency_ms = self._latency_ms()
        self._log('submit_complete', latencyMs=latency_ms, **additional_fields)
        
        if self.metrics:
            self.metrics.emit_request_count()
            self.metrics.emit_latency(latency_ms)
    
    def log_validation_error(self, errors: Any, **additional_fields: Any) -> None:
        """
        Log a schema validation failure.
        
        Example:
            logger.log_validation_error(
                errors=[{'field': 'email', 'message': 'Email is required'}]
            )
        """
        self._log(
            'validation_error',
            errors=errors,
            latencyMs=self._latency_ms(),
            **additional_fields
        )
    
    def log_domain_error(
        self,
        error_code: str,
        error_message: str,
        **additional_fields: Any
    ) -> None:
        """
        Log an expected domain error, such as a rejected update.
        
        Also records an error metric tagged with the error code.
        """
        latency_ms = self._latency_ms()
        self._log(
            'domain_error',
            errorCode=error_code,
            errorMessage=error_message,
            latencyMs=latency_ms,
            **additional_fields
        )
        
        if self.metrics:
            self.metrics.emit_error(error_code=error_code)
            self.metrics.emit_latency(latency_ms)
    
    def log_unexpected_error(
        self,
        error_type: str,
        error_message: str,
        **additional_fields: Any
    ) -> None:
        """
        Log an unexpected error that escaped the remote call handling.
        
        Also records an error metric tagged INTERNAL_ERROR.
        """
        latency_ms = self._latency_ms()
        self._log(
            'unexpected_error',
            errorType=error_type,
            errorMessage=error_message,
            latencyMs=latency_ms,
            **additional_fields
        )
        
        if self.metrics:
            self.metrics.emit_error(error_code='INTERNAL_ERROR')
            self.metrics.emit_latency(latency_ms)
    
    def log_info(self, message: str, **additional_fields: Any) -> None:
        """Log a significant event during a submit (e.g. navigation)."""
        self._log('info', message=message, **additional_fields)
    
    def publish_metrics(self) -> None:
        """Publish accumulated metrics. Safe to call without a metrics client."""
        if self.metrics:
            self.metrics.publish()


def create_logger(
    operation: str,
    correlation_id: Optional[str] = None,
    metrics: Optional[MetricsClient] = None
) -> StructuredLogger:
    """
    Create a structured logger for one submit attempt.
    
    Args:
        operation: Operation name (e.g., 'profile-update')
        correlation_id: Correlation ID; a new ULID is generated when omitted
        metrics: Metrics client (optional)
        
    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(correlation_id or str(ULID()), operation, metrics)
