# -*- coding: utf-8 -*-
"""
Configuration - loaded from environment variables
"""
import os
from dotenv import load_dotenv

# Load a .env file if present
load_dotenv()


class Config:
    """Base configuration"""

    # Flask
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = False
    TESTING = False
    MAX_CONTENT_LENGTH = int(os.getenv('MAX_CONTENT_LENGTH', str(16 * 1024 * 1024)))

    # Server (used when running wsgi.py directly)
    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', '5001'))

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Vision service (OpenAI-compatible chat completions endpoint)
    VISION_API_KEY = os.getenv('VISION_API_KEY', '')
    VISION_API_URL = os.getenv('VISION_API_URL', 'https://api.openai.com/v1/chat/completions')
    VISION_MODEL = os.getenv('VISION_MODEL', 'gpt-4o')
    VISION_TIMEOUT = int(os.getenv('VISION_TIMEOUT', '90'))
    VISION_MAX_TOKENS = int(os.getenv('VISION_MAX_TOKENS', '4096'))
    VISION_TEMPERATURE = float(os.getenv('VISION_TEMPERATURE', '0.2'))

    @classmethod
    def get_vision_config(cls):
        """Keyword arguments for VisionClient"""
        return {
            'api_key': cls.VISION_API_KEY,
            'api_url': cls.VISION_API_URL,
            'model': cls.VISION_MODEL,
            'timeout': cls.VISION_TIMEOUT,
            'max_tokens': cls.VISION_MAX_TOKENS,
            'temperature': cls.VISION_TEMPERATURE
        }


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False

    @classmethod
    def validate(cls):
        """Ensure the variables production cannot run without are set"""
        required = [
            ('SECRET_KEY', cls.SECRET_KEY, 'dev-secret-key-change-in-production'),
            ('VISION_API_KEY', cls.VISION_API_KEY, ''),
        ]

        missing = []
        for name, value, default in required:
            if not value or value == default:
                missing.append(name)

        if missing:
            raise ValueError(f"Missing required production settings: {', '.join(missing)}")


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    VISION_API_KEY = ''


CONFIG_MAP = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig
}


def get_config(env: str = None):
    """Pick the configuration class from FLASK_ENV"""
    env = env or os.getenv('FLASK_ENV', 'development')
    return CONFIG_MAP.get(env, DevelopmentConfig)


config = get_config()
