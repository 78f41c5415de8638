"""Application configuration and settings."""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service Configuration
    service_name: str = "sehat-saathi"
    service_port: int = 8010
    environment: str = "development"

    # MongoDB Configuration
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "sehat_saathi"
    mongodb_collection_users: str = "users"
    mongodb_collection_doctor_questions: str = "doctor_questions"
    mongodb_collection_emergencies: str = "emergencies"
    mongodb_collection_hospital_responses: str = "hospital_responses"
    mongodb_collection_health_forum: str = "health_forum"

    # AI Gateway (OpenAI-compatible chat completions)
    ai_gateway_url: str = "https://ai.gateway.lovable.dev/v1"
    ai_gateway_api_key: Optional[str] = None
    model_name: str = "google/gemini-2.5-flash"
    model_temperature: float = 0.3
    model_max_tokens: int = 400
    llm_invoke_timeout: float = 30.0
    mock_ai_replies: bool = False

    # Text-to-Speech
    tts_api_url: str = "https://texttospeech.googleapis.com/v1/text:synthesize"
    tts_api_key: Optional[str] = None
    tts_speaking_rate: float = 0.9
    tts_timeout: float = 15.0

    # Maps search (Serper)
    serper_api_key: Optional[str] = None
    serper_maps_url: str = "https://google.serper.dev/maps"
    hospital_search_radius_m: int = 10000
    hospital_search_max_results: int = 10

    # JWT Configuration
    jwt_secret: str = "change-me-in-production"
    jwt_issuer: str = "sehat-saathi"
    jwt_algorithm: str = "HS256"
    access_token_minutes: int = 60
    refresh_token_days: int = 7
    jwt_access_cookie_name: str = "access_token"
    jwt_refresh_cookie_name: str = "refresh_token"
    cookie_secure: bool = False

    # Emergency polling
    emergency_poll_interval_seconds: float = 5.0

    # Regional defaults
    default_country: str = "IN"

    # CORS
    cors_origins: List[str] = ["http://localhost:5173", "http://localhost:8080"]

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False
        protected_namespaces = ("settings_",)

    @property
    def ai_gateway_configured(self) -> bool:
        return bool(self.ai_gateway_api_key)


# Global settings instance
settings = Settings()
