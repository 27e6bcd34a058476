"""Entry points that receive messages and call the gateway."""
