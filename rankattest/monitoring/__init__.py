"""
Monitoring module initialization
"""

from .metrics_exporter import AttestationMetrics

__all__ = ["AttestationMetrics"]
