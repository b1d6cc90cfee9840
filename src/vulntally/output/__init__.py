"""Report renderers — rich terminal table and JSON."""
