"""UI adapters hosting the crosshairs engine."""
