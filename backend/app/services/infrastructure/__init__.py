"""Infrastructure services - provider adapters, storage and parsing."""
