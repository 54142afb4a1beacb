"""Tracing backends for sqlspan."""
