from src.config.config import Config, config

__all__ = ["Config", "config"]
