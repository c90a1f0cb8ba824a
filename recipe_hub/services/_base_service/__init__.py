from recipe_hub.config.config_schema import AppConfig
from recipe_hub.config.settings import settings
from recipe_hub.core.logger import get_logger
from recipe_hub.db.repository_factory import RepositoryFactory


class BaseService:
    def __init__(self, factory: RepositoryFactory) -> None:
        self.factory = factory
        self.settings: AppConfig = settings
        self.logger = get_logger(self.__class__.__name__)
