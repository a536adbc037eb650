from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정 (.env 및 환경 변수)"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    environment: str = "development"
    database_url: str = "sqlite+aiosqlite:///./quiz_sessions.db"
    allowed_origins: str = "http://localhost:3000"

    # 리버스 프록시 환경의 결과 링크 접두사 (예: "/quiz-app")
    base_path: str = ""

    session_list_limit: int = 100

    @property
    def allowed_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]


settings = Settings()
