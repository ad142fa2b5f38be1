"""Solo Regicide: a headless, turn-based card combat engine."""
