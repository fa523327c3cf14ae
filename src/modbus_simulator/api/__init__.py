"""HTTP surface of the configuration store."""
