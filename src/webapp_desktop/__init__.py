"""Desktop integration for browser web apps."""
