"""Fold commit identities into a login -> profile URL mapping."""

from collections.abc import Iterable, Iterator

from orgkpi.services.github.types import CommitRecord, Identity


def iter_identities(record: CommitRecord) -> Iterator[Identity]:
    """Yield the author then the committer, skipping absent or partial identities."""
    for identity in (record.author_identity, record.committer_identity):
        if identity is not None and identity.is_complete:
            yield identity


def aggregate_identities(
    commits: Iterable[CommitRecord],
    into: dict[str, str] | None = None,
) -> dict[str, str]:
    """Map every complete identity's login to its profile URL (last write wins)."""
    identities: dict[str, str] = {} if into is None else into
    for record in commits:
        for identity in iter_identities(record):
            identities[identity.login] = identity.profile_url  # type: ignore[index,assignment]
    return identities
