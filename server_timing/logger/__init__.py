# server_timing/logger/__init__.py
from .logger import AppLogger, get_app_logger

__all__ = ["AppLogger", "get_app_logger"]
