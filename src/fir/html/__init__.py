"""HTML passes over template markup: block extraction and attribute finalization."""
