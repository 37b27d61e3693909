from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
import os

load_dotenv()

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "duck-search-proxy"
    DEBUG: bool = False
    PORT: int = 3000

    # 업스트림(DuckDuckGo Instant Answer API)
    DUCKDUCKGO_API_BASE_URL: str = os.getenv('DUCKDUCKGO_API_BASE_URL', 'https://api.duckduckgo.com')
    DUCKDUCKGO_TIMEOUT: float = 10.0

    # 검색 이력(NDJSON) 파일
    SEARCH_LOG_FILE: str = os.getenv('SEARCH_LOG_FILE', 'logs/search_queries.log')

    DEFAULT_PAGE_SIZE: int = 10
    DEFAULT_HISTORY_ITEMS: int = 10

    # 로깅
    LOG_LEVEL: str = "INFO"
    LOG_AS_JSON: bool = True
    LOG_TO_FILE: bool = False
    LOG_DIR: str = "logs"

settings = Settings()
