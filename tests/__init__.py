"""
Unit tests for backlog-client.

Test modules:
- unit/test_http_client: URL building, encoding and request dispatch
- unit/test_credentials: credential stores and checks
- unit/test_models: payload parsing and query parameter models
- unit/test_backlog_client: endpoint wrappers against a mocked transport
- unit/test_cli: Typer commands
"""
