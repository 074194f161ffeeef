"""Game logic for a two-player arcade brawler: physics, players, coins, timer, rollback and packets."""

__version__ = "0.1.0"