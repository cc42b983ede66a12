"""
Exceptions shared by all layers.

Everything the domain raises derives from GameError, so the service/API layer can catch the whole family at once.
NOTE illegal placements and undo-with-empty-history are NOT exceptions: callers check first and simply skip.
"""


class GameError(Exception):
    """Root of all game related errors"""


class GameStateError(GameError):
    """Operation does not fit the current state of the session (level over, game over, unknown status...)"""


class NotYourTurnError(GameError):
    """A player attempted to act while the other player is to move"""


class NoValidMovesError(GameError):
    """The computer player cannot find a single legal placement"""


class InvalidBoardError(GameError):
    """Board geometry that cannot be constructed"""


class InvalidLevelError(GameError):
    """Level (or level set) id that is not in the catalog"""


class RepositoryError(GameError):
    """Persistence layer could not find / store the requested record"""


class InvalidRequestError(GameError):
    """Request data failed validation. Not a ValueError, so it leaves pydantic validators unwrapped."""
