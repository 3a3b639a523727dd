"""Application configuration using Pydantic Settings."""

from dotenv import load_dotenv
from pydantic_settings import BaseSettings
from pydantic import Field

load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Capability credentials
    groq_api_key: str = Field(
        default="",
        description="Groq API key for intent, query and image analysis"
    )
    google_api_key: str = Field(
        default="",
        description="Google API key for Gemini advice and support text"
    )
    rapidapi_key: str = Field(
        default="",
        description="RapidAPI key for product search and offers"
    )

    # LLM Configuration
    intent_model: str = Field(
        default="llama-3.1-8b-instant",
        description="Groq model used for intent classification"
    )
    query_model: str = Field(
        default="llama-3.3-70b-versatile",
        description="Groq model used for search query extraction"
    )
    vision_model: str = Field(
        default="meta-llama/llama-4-scout-17b-16e-instruct",
        description="Groq model used for support image analysis"
    )
    gemini_model: str = Field(
        default="gemini-2.5-flash",
        description="Gemini model for shopping advice and support text"
    )

    # Sampling (temperature, max tokens) per call
    intent_temperature: float = 0.2
    intent_max_tokens: int = 100
    query_temperature: float = 0.3
    query_max_tokens: int = 256
    vision_temperature: float = 0.3
    vision_max_tokens: int = 1024
    advice_temperature: float = 0.7
    advice_max_tokens: int = 512
    support_temperature: float = 0.4
    support_max_tokens: int = 1024

    # Intent routing
    intent_fallback_to_unclear: bool = Field(
        default=False,
        description="Route classifier failures to 'unclear' instead of 'general_shopping'"
    )

    # Product Search Configuration
    search_api_host: str = Field(
        default="real-time-amazon-data.p.rapidapi.com",
        description="RapidAPI host for marketplace product search"
    )
    offers_api_host: str = Field(
        default="real-time-product-search.p.rapidapi.com",
        description="RapidAPI host for product offers"
    )
    search_country: str = "US"
    search_timeout_seconds: float = 30.0
    marketplace_search_url: str = Field(
        default="https://www.amazon.com/s?k=",
        description="Prefix for synthesized product links, title is appended URL-encoded"
    )
    chat_top_k: int = 3
    recommendations_top_k: int = 5
    catalog_top_k: int = 10

    # API Configuration
    api_title: str = Field(
        default="Shopping Assistant API",
        description="API title"
    )
    api_version: str = Field(
        default="1.0.0",
        description="API version"
    )
    cors_origins: list[str] = Field(
        default=["*"],
        description="CORS allowed origins"
    )
    cors_allow_credentials: bool = Field(
        default=True,
        description="Allow cookies and auth headers on cross-origin requests"
    )
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "allow"  # Allow extra fields from .env that aren't defined


# Global settings instance
settings = Settings()
