"""
Integration tests for vectorclient.

These tests run the full stack (client, collection, query compiler,
retry executor and HTTP connection) against a mocked requests session.
"""

import pytest


# Integration test markers
integration = pytest.mark.integration
