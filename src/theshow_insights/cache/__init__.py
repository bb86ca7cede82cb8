from theshow_insights.cache.items_cache import ItemsIndexCache

__all__ = ["ItemsIndexCache"]
