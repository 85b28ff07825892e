"""Query classification, symbol extraction and response composition."""
