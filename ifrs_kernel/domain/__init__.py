"""Pure domain layer: records, posting rules and the clock abstraction."""
