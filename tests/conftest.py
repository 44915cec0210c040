"""Test configuration and fixtures."""

import os

import logfire

# Test defaults; real environment variables win
os.environ.setdefault("NODE_ENV", "test")
os.environ.setdefault("ADMIN_USERNAME", "admin")
os.environ.setdefault("STORE__RETRY_INTERVAL_BASE", "0.001")

logfire.configure(send_to_logfire=False, console=False)
