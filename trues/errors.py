# errors.py – error taxonomy shared by the entity graph
#
# "Not found" is never an exception here: lookups return None.


class TruesError(Exception):
    """Base exception for the entity graph."""
    pass


class UpstreamUnavailable(TruesError):
    """Raised when the game-data source cannot serve a required lookup."""
    pass


class LoaderNotConfigured(TruesError):
    """Raised when game ingestion is requested without a GameLoader."""
    pass
