from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""
    
    # Database
    DATABASE_URL: str = "sqlite:///./forum.db"
    
    # API
    API_TITLE: str = "Literary Lions Forum API"
    API_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    
    # Security
    SECRET_KEY: str
    
    # Sessions
    SESSION_COOKIE_NAME: str = "session"
    SESSION_TTL_HOURS: int = 24
    SESSION_CLEANUP_ENABLED: bool = True
    SESSION_CLEANUP_INTERVAL_SECONDS: int = 3600
    
    # Bootstrap admin account
    ADMIN_USERNAME: str = "admin"
    ADMIN_EMAIL: str = "admin@admin.com"
    ADMIN_PASSWORD: str = "admin"
    
    class Config:
        env_file = ".env"
        case_sensitive = True

# Create settings instance
settings = Settings()
