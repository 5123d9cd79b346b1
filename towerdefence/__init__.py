"""Tower defence game rules: entities, towers, economy, placement, buttons and SQLite progress."""

__version__ = "0.1.0"