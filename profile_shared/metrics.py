"""
CloudWatch metrics utility for the profile edit screen.

This module batches custom CloudWatch metrics for submit count, error rate,
and latency and publishes them in as few PutMetricData calls as possible.
"""

import json
from typing import Dict, Any, Optional, List
from datetime import datetime, timezone

import boto3


# Default metric namespace for profile edit metrics
DEFAULT_NAMESPACE = 'ProfileEdit'

# CloudWatch PutMetricData limit per request
MAX_BATCH_SIZE = 20


class MetricsClient:
    """
    CloudWatch metrics client for form operations.
    
    Metrics are accumulated in memory and sent by ``publish``. The boto3
    client is only created on the first publish that has data to send.
    
    Usage:
        metrics = MetricsClient(operation='profile-update')
        metrics.emit_request_count()
        metrics.emit_latency(latency_ms=150)
        metrics.emit_error(error_code='REMOTE_UPDATE_ERROR')
        metrics.publish()
    """
    
    def __init__(
        self,
        operation: str,
        namespace: str = DEFAULT_NAMESPACE,
        cloudwatch: Any = None
    ):
        """
        Initialize the metrics client.
        
        Args:
            operation: Operation name (e.g., 'profile-update')
            namespace: CloudWatch namespace
            cloudwatch: Preconfigured boto3 CloudWatch client (optional)
        """
        if not operation or not operation.strip():
            raise ValueError('Operation name is required for metrics')
        
        self.operation = operation
        self.namespace = namespace
        self._cloudwatch = cloudwatch
        self._metric_data: List[Dict[str, Any]] = []
    
    @property
    def cloudwatch(self) -> Any:
        if self._cloudwatch is None:
            self._cloudwatch = boto3.client('cloudwatch')
        return self._cloudwatch
    
    @property
    def pending(self) -> List[Dict[str, Any]]:
        """Metrics accumulated since the last publish."""
        return list(self._metric_data)
    
    def _add_metric(
        self,
        metric_name: str,
        value: float,
        unit: str,
        dimensions: Optional[List[Dict[str, str]]] = None
    ) -> None:
        all_dimensions = [
            {
                'Name': 'Operation',
                'Value': self.operation
            }
        ]
        if dimensions:
            all_dimensions.extend(dimensions)
        
        self._metric_data.append({
            'MetricName': metric_name,
            'Value': value,
            'Unit': unit,
            'Timestamp': datetime.now(timezone.utc),
            'Dimensions': all_dimensions
        })
    
    def emit_request_count(self, count: int = 1) -> None:
        """Emit submit count metric."""
        self._add_metric(
            metric_name='RequestCount',
            value=float(count),
            unit='Count'
        )
    
    def emit_error(self, error_code: Optional[str] = None) -> None:
        """
        Emit error metric.
        
        Args:
            error_code: Error code used as the ErrorCode dimension (optional)
        """
        dimensions = []
        if error_code:
            dimensions.append({
                'Name': 'ErrorCode',
                'Value': error_code
            })
        
        self._add_metric(
            metric_name='ErrorCount',
            value=1.0,
            unit='Count',
            dimensions=dimensions or None
        )
    
    def emit_latency(self, latency_ms: int) -> None:
        """
        Emit latency metric in milliseconds.
        
        Raises:
            ValueError: If latency is negative
        """
        if latency_ms < 0:
            raise ValueError('Latency must be non-negative')
        
        self._add_metric(
            metric_name='Latency',
            value=float(latency_ms),
            unit='Milliseconds'
        )
    
    def publish(self) -> None:
        """
        Publish all accumulated metrics to CloudWatch.
        
        Metrics are sent in batches of MAX_BATCH_SIZE. The buffer is cleared
        whether or not publishing succeeds; a failed publish is reported on
        stdout and never raised to the caller.
        """
        if not self._metric_data:
            return
        
        try:
            for i in range(0, len(self._metric_data), MAX_BATCH_SIZE):
                self.cloudwatch.put_metric_data(
                    Namespace=self.namespace,
                    MetricData=self._metric_data[i:i + MAX_BATCH_SIZE]
                )
        except Exception as error:
            print(json.dumps({
                'event': 'metrics_publish_failed',
                'operation': self.operation,
                'errorType': type(error).__name__,
                'errorMessage': str(error)
            }))
        finally:
            self._metric_data = []


def create_metrics_client(
    operation: str,
    namespace: str = DEFAULT_NAMESPACE,
    cloudwatch: Any = None
) -> MetricsClient:
    """
    Create a metrics client for an operation.
    
    Args:
        operation: Operation name (e.g., 'profile-update')
        namespace: CloudWatch namespace
        cloudwatch: Preconfigured boto3 CloudWatch client (optional)
        
    Returns:
        MetricsClient instance
    """
    return MetricsClient(operation, namespace=namespace, cloudwatch=cloudwatch)
