"""gitcord - GitHub data and events, relayed to Discord."""
__version__ = "0.1.0"
