"""Exceptions raised by the contributor crawl."""

from orgkpi.services.github.types import Repository


class RepositoryWalkError(Exception):
    """Walking one repository's commit history failed.

    Isolated to that repository: the coordinator records it and carries on.
    """

    def __init__(self, repository: Repository, cause: BaseException):
        self.repository = repository
        self.cause = cause
        super().__init__(f"Failed to get commits {repository.display_name}: {cause}")


class MembershipCheckError(Exception):
    """A membership check was neither a success nor a 404.

    Fatal to the run: membership cannot be assumed either way.
    """

    def __init__(self, login: str, cause: BaseException):
        self.login = login
        self.cause = cause
        super().__init__(f"Membership check for {login} failed: {cause}")
