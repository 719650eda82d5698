"""Provider-specific profile enrichment.

Some providers send richer profiles than the normalized passport fields
(name parts, gender, locale, numeric IDs). An enricher reads that payload
and adds the matching account attributes to a candidate. Enrichers are
registered per provider name on the profile mapper.
"""

from typing import Any, Protocol, runtime_checkable

from federated.config import LoginSettings
from federated.domain.value import ProviderProfile


@runtime_checkable
class ProfileEnricher(Protocol):
    """Capability: derives extra account fields from a provider profile."""

    def enrich(self, profile: ProviderProfile) -> dict[str, Any]:
        """Return account fields to add to the candidate.

        Args:
            profile: Provider profile for the login

        Returns:
            Mapping of AccountCandidate field names to values
        """
        ...


def join_name(
    full_name: str | None, first_name: str | None, last_name: str | None
) -> str:
    """Pick the best display name from the parts a provider sent."""
    if full_name:
        return full_name
    if first_name and last_name:
        return " ".join([first_name, last_name]).strip()
    if first_name:
        return first_name
    if last_name:
        return last_name
    return ""


class FacebookProfileEnricher:
    """Enricher for Facebook Graph profiles (``profile._json``)."""

    GRAPH_URL = "https://graph.facebook.com"

    def __init__(self, login_settings: LoginSettings) -> None:
        """Initialize Facebook enricher.

        Args:
            login_settings: Supported languages and fallback language
        """
        self.supported_languages = login_settings.supported_languages
        self.fallback_language = login_settings.fallback_language

    def enrich(self, profile: ProviderProfile) -> dict[str, Any]:
        data = profile.raw
        fields: dict[str, Any] = {
            "gender": data.get("gender") or "",
            "name": join_name(
                data.get("name"), data.get("first_name"), data.get("last_name")
            ),
        }

        language = self._language(data.get("locale"))
        if language:
            fields["prefered_language"] = language

        graph_id = data.get("id")
        if graph_id is not None and graph_id != "":
            graph_id = str(graph_id)
            fields["avatar_url"] = f"{self.GRAPH_URL}/{graph_id}/picture"
            fields["external_refs"] = {
                "fbid": graph_id,
                "graph_url": f"{self.GRAPH_URL}/{graph_id}/",
            }
        else:
            fields["external_refs"] = {"fbid": ""}

        return fields

    def _language(self, locale: str | None) -> str | None:
        """Two-letter language from a locale like ``pt_BR``."""
        if not locale:
            return None
        language = locale[:2]
        if language in self.supported_languages:
            return language
        return self.fallback_language
