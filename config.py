import os


class Config:
    """
    Application settings, read from the environment with development defaults.
    """
    DATABASE = os.environ.get("POSTBOARD_DATABASE", "postboard.db")
    LOG_LEVEL = os.environ.get("POSTBOARD_LOG_LEVEL", "INFO")
