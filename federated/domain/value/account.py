"""Account-side value objects used while reconciling a login."""

from pydantic import Field

from federated.domain.value.common import ValueObject


class AccountCandidate(ValueObject):
    """Local account derived from a provider profile.

    Produced by the profile mapper when an external identity is seen for
    the first time. ``password`` is a throwaway secret; the user keeps
    authenticating through the provider.
    """

    username: str | None = None
    email: str | None = None
    password: str
    name: str | None = None
    gender: str | None = None
    prefered_language: str | None = None
    avatar_url: str | None = None
    external_refs: dict[str, str] = Field(default_factory=dict)


class AccountQuery(ValueObject):
    """Account filter: matches when any predicate matches.

    Each predicate is a mapping of field name to required value; all fields
    of a predicate must be equal for it to match.
    """

    any_of: tuple[dict[str, str], ...]

    @classmethod
    def for_candidate(cls, candidate: AccountCandidate) -> "AccountQuery":
        """Build the lookup used to find an existing account for a candidate.

        Username and email both present: match either, so a user who already
        has a local account under one of them is reused. Otherwise match on
        whichever one is present.

        Raises:
            ValueError: If the candidate has neither username nor email
        """
        if candidate.username and candidate.email:
            return cls(
                any_of=(
                    {"username": candidate.username},
                    {"email": candidate.email},
                )
            )
        if candidate.email:
            return cls(any_of=({"email": candidate.email},))
        if candidate.username:
            return cls(any_of=({"username": candidate.username},))
        raise ValueError("Account candidate needs a username or an email")

    def matches(self, fields: dict[str, object]) -> bool:
        """Check a flat field mapping against the query."""
        return any(
            all(fields.get(key) == value for key, value in predicate.items())
            for predicate in self.any_of
        )
