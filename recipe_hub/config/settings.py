from recipe_hub.config.config_manager import get_app_config

settings = get_app_config()
