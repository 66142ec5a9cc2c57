"""Probe resources for Kubernetes liveness and readiness checks."""
