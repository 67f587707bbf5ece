from src.pm_common.errors import NotOwnerError, NotResolverError


def check_resolver(caller: str, resolver: str) -> None:
    if caller != resolver:
        raise NotResolverError(caller)


def check_owner(caller: str, owner: str) -> None:
    if caller != owner:
        raise NotOwnerError(caller)
