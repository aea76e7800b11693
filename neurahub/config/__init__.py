from neurahub.config.settings import settings

__all__ = ["settings"]
