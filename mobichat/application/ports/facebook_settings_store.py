from abc import ABC, abstractmethod

from mobichat.domain.entities.facebook_settings import FacebookSettings


class FacebookSettingsStorePort(ABC):
    @abstractmethod
    def get_settings(self) -> FacebookSettings | None:
        raise NotImplementedError

    @abstractmethod
    def update_settings(
        self,
        page_access_token: str | None = None,
        verify_token: str | None = None,
        webhook_url: str | None = None,
        is_active: bool = False,
    ) -> FacebookSettings:
        """Replace the single settings record, keeping its id."""
        raise NotImplementedError
