"""Route modules mounted by the application factory."""
