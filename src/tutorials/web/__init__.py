"""Web API for tutorials."""
