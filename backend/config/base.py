"""Base configuration shared by every environment."""
import os
from datetime import timedelta


class Config:
    """Base configuration."""

    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False

    # JWT Configuration
    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY') or 'jwt-secret-key-change-in-production'
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=2)
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=7)
    JWT_ALGORITHM = 'HS256'

    # CORS
    CORS_ORIGINS = ["http://localhost:*", "https://*.vercel.app", "http://127.0.0.1:*"]

    # Rate Limiting
    RATELIMIT_STORAGE_URI = 'memory://'
    RATELIMIT_DEFAULT = "200 per day, 50 per hour"

    # Weekly schedule grid
    GRID_START_HOUR = 7
    GRID_END_HOUR = 22
    GRID_SLOT_MINUTES = 30
    GRID_PIXELS_PER_SLOT = 30
    GRID_INCLUDE_SUNDAY = True

    # Availability calendar (one-hour cells, end hour exclusive)
    AVAILABILITY_START_HOUR = 7
    AVAILABILITY_END_HOUR = 21

    # Gamification
    TOPIC_COLOR_POINTS = 10

    # Flags assumed when no feature_flags row exists
    FEATURE_FLAG_DEFAULTS = {
        'gamification': True,
    }

    # Pagination
    DEFAULT_PAGE_SIZE = 20
    MAX_PAGE_SIZE = 100

    # Logging
    LOG_LEVEL = 'INFO'
    LOG_FILE = 'logs/app.log'
