"""Idempotent macOS setup for the watsonx Orchestrate ADK on Colima."""

__version__ = '0.1.0'
