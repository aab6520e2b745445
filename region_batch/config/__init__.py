from region_batch.config.settings import AppConfig, StoreConfig

__all__ = ["AppConfig", "StoreConfig"]
