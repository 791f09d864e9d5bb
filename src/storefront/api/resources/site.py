"""
Site settings and CMS page endpoints.
"""

from typing import Any, Dict, List, Mapping, Optional, Union

from storefront.models import PageContent, SocialLinks, page_from_api, social_links_from_api

from .base import Resource, segment


class SettingsResource(Resource):
    PATH = "/api/settings"

    def social_links(self) -> SocialLinks:
        return social_links_from_api(self.client.get(f"{self.PATH}/social_links"))

    def update_social_links(
        self, links: Union[SocialLinks, Mapping[str, str]]
    ) -> Optional[SocialLinks]:
        value = links.to_dict() if isinstance(links, SocialLinks) else dict(links)
        payload = self.client.put(f"{self.PATH}/social_links", {"value": value})
        return self._one(payload, social_links_from_api)

    def all(self) -> Dict[str, Any]:
        return dict(self.client.get(self.PATH) or {})


class PagesResource(Resource):
    PATH = "/api/pages"

    def get(self, slug: str) -> Optional[PageContent]:
        return self._one(self.client.get(f"{self.PATH}/{segment(slug)}"), page_from_api)

    def list(self) -> List[PageContent]:
        return self._many(self.client.get(self.PATH), page_from_api)

    def update(self, slug: str, title: str, content: str) -> Optional[PageContent]:
        body = {"title": title, "content": content}
        return self._one(self.client.put(f"{self.PATH}/{segment(slug)}", body), page_from_api)
