import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Service configuration settings"""

    # Redis settings
    REDIS_URL = os.getenv('REDIS_URL', 'redis://localhost:6379/0')
    REDIS_SOCKET_TIMEOUT = float(os.getenv('REDIS_SOCKET_TIMEOUT', '2.0'))
    REDIS_CONNECT_TIMEOUT = float(os.getenv('REDIS_CONNECT_TIMEOUT', '2.0'))

    # Password hashing cost (bcrypt log rounds)
    BCRYPT_ROUNDS = int(os.getenv('BCRYPT_ROUNDS', '10'))

    # Board deletion retries for keys that survive a failed pass
    DELETE_MAX_ATTEMPTS = int(os.getenv('DELETE_MAX_ATTEMPTS', '3'))
    DELETE_RETRY_BACKOFF = float(os.getenv('DELETE_RETRY_BACKOFF', '0.1'))

    # HTTP settings
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

    # Logging
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    LOG_LEVEL = os.getenv('LOG_LEVEL', '')
    LOG_FILE = os.getenv('LOG_FILE', '')

    @classmethod
    def get_cors_origins(cls):
        """Get list of allowed CORS origins"""
        return [origin.strip() for origin in cls.CORS_ORIGINS.split(',') if origin.strip()]

    @classmethod
    def validate(cls):
        """Validate that required configuration is present"""
        if not cls.REDIS_URL:
            raise ValueError("REDIS_URL is required")
        if not 4 <= cls.BCRYPT_ROUNDS <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        if cls.DELETE_MAX_ATTEMPTS < 1:
            raise ValueError("DELETE_MAX_ATTEMPTS must be at least 1")
        if cls.REDIS_SOCKET_TIMEOUT <= 0 or cls.REDIS_CONNECT_TIMEOUT <= 0:
            raise ValueError("Redis timeouts must be positive")
