"""
romshelf - relational data-access layer of a ROM / software collection manager.
"""
from .config import AppConfig, get_app_config
from .models.database import Database
from .repositories.repository_manager import RepositoryManager
from .services.view_model_service import ViewModelService

__version__ = "0.1.0"

__all__ = ["AppConfig", "get_app_config", "Database", "RepositoryManager", "ViewModelService"]
