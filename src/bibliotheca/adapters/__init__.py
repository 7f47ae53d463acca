"""Host UI toolkit adapters."""
