"""Game state, message types, console helpers and AMQP publish/subscribe for the Peril war game."""

__version__ = "0.1.0"
__all__ = ["console", "gamedata", "gamestate", "logs", "pubsub", "routing"]