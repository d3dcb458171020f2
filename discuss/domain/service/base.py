"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold comment engine rules that span several repositories
    or collaborators.
    """

    pass
