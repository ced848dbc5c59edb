"""Emoji Taxonomy Configuration Management"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class TaxonomyConfig(BaseSettings):
    """Main taxonomy builder configuration"""

    # Load from .env file, ignore extra fields
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # Sources
    github_emojis_url: str = Field(
        default="https://api.github.com/emojis", env="GITHUB_EMOJIS_URL"
    )
    unicode_emoji_list_url: str = Field(
        default="https://unicode.org/emoji/charts/full-emoji-list.txt",
        env="UNICODE_EMOJI_LIST_URL",
    )
    # GitHub rejects API requests without a User-Agent
    user_agent: str = Field(
        default="emoji-taxonomy/1.0 (+https://github.com/ikatyang/emoji-cheat-sheet)",
        env="USER_AGENT",
    )
    http_timeout_sec: int = Field(default=30, env="HTTP_TIMEOUT_SEC")

    # Output
    custom_category_title: str = Field(
        default="GitHub Custom Emoji", env="CUSTOM_CATEGORY_TITLE"
    )
    output_path: str = Field(default="data/emoji_taxonomy.json", env="OUTPUT_PATH")

    # Logging
    log_level: str = Field(default="INFO", env="LOG_LEVEL")
    log_to_file: bool = Field(default=False, env="LOG_TO_FILE")

    # Project paths
    project_root: Path = Field(default_factory=lambda: Path(__file__).parent.parent)

    @property
    def logs_dir(self) -> Path:
        logs_path = self.project_root / "logs"
        logs_path.mkdir(exist_ok=True)
        return logs_path


# Global config instance
config = TaxonomyConfig()


def get_config() -> TaxonomyConfig:
    """Get the global configuration instance"""
    return config
