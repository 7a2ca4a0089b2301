"""Grid snake game on pygame."""
