import os
from pydantic_settings import BaseSettings
from pydantic import Field
import platformdirs

APP_NAME = "SetlistStudio"
APP_AUTHOR = "SetlistStudio"

class Settings(BaseSettings):
    # App Info
    APP_NAME: str = APP_NAME
    APP_AUTHOR: str = APP_AUTHOR
    ENV: str = "prod"

    # Paths
    # platformdirs by default, DB_PATH / LOG_DIR from the environment take precedence
    USER_DATA_DIR: str = Field(default_factory=lambda: platformdirs.user_data_dir(APP_NAME, APP_AUTHOR))
    DB_PATH: str | None = None
    LOG_DIR: str | None = None

    # Network
    PORT: int = 8001
    FRONTEND_PORT: int = 1420

    # Paging
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    class Config:
        env_file = ".env"
        extra = "ignore"

    def model_post_init(self, __context):
        if not self.DB_PATH:
            self.DB_PATH = os.path.join(self.USER_DATA_DIR, "setlist_studio.duckdb")

        if not self.LOG_DIR:
            self.LOG_DIR = os.path.join(self.USER_DATA_DIR, "logs")

    def setup_environment(self):
        """Export the settings that other modules read from the environment."""
        if self.LOG_DIR:
            os.environ["SETLIST_STUDIO_LOG_DIR"] = self.LOG_DIR

settings = Settings()
