"""Report renderers — terminal, JSON, SARIF, paginated document."""
