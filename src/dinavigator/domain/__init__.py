"""Domain layer: DI analysis model, ports and exceptions. No I/O."""
