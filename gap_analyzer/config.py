"""Configuration loader for the content gap analyzer."""

from dataclasses import dataclass
from decouple import config


# Assumed click-through rate by search result position.
# Positions 1-10 come from published CTR studies, 11-20 from a
# logarithmic decay estimate.
CTR_BY_POSITION: dict[int, float] = {
    1: 0.398, 2: 0.187, 3: 0.102, 4: 0.072, 5: 0.051,
    6: 0.044, 7: 0.030, 8: 0.021, 9: 0.019, 10: 0.016,
    11: 0.014, 12: 0.012, 13: 0.010, 14: 0.009, 15: 0.008,
    16: 0.007, 17: 0.006, 18: 0.005, 19: 0.004, 20: 0.003,
}
MAX_RANKED_POSITION = max(CTR_BY_POSITION)

DEFAULT_PAGE_SIZE = 100
DEFAULT_CLIENT_DOMAIN = "client.com"
DEFAULT_DELIMITER = ","


@dataclass
class EngineSettings:
    """Settings for table display and export."""
    page_size: int = DEFAULT_PAGE_SIZE
    client_domain: str = DEFAULT_CLIENT_DOMAIN
    export_delimiter: str = DEFAULT_DELIMITER


@dataclass
class SheetsConfig:
    """Google Sheets configuration."""
    spreadsheet_id: str
    credentials_path: str
    export_tab_name: str


@dataclass
class AppConfig:
    """Application configuration."""
    engine: EngineSettings
    sheets: SheetsConfig


def load_config() -> AppConfig:
    """Load configuration from environment variables."""
    return AppConfig(
        engine=EngineSettings(
            page_size=config("PAGE_SIZE", default=DEFAULT_PAGE_SIZE, cast=int),
            client_domain=config("CLIENT_DOMAIN", default=DEFAULT_CLIENT_DOMAIN),
            export_delimiter=config(
                "EXPORT_DELIMITER", default=DEFAULT_DELIMITER
            ),
        ),
        sheets=SheetsConfig(
            spreadsheet_id=config("SPREADSHEET_ID", default=""),
            credentials_path=config(
                "GOOGLE_CREDENTIALS_PATH",
                default="google-credentials.json"
            ),
            export_tab_name=config("EXPORT_TAB_NAME", default="Gap Analysis"),
        ),
    )
