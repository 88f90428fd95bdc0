"""Computer opponents that play through the engine's click interface."""
